"""
版本切换模块。

通过重建 current/bin 与 current/go 两条符号链接切换当前版本。
"""

import os
from pathlib import Path

from src.utils.logger import get_logger
from src.utils.input_validator import InputValidator
from src.core.layout import Layout, LayoutError, remove_path
from src.core.resolver import Resolver
from src.core.exceptions import VersionNotFoundError, SwitchVersionError

logger = get_logger()


class Switcher:
    """
    版本切换器类。

    两条链接的替换不是一次原子操作；若第二条链接创建失败，
    不会回滚第一条链接，重新执行切换即可恢复。
    """

    def __init__(self, layout: Layout, resolver: Resolver):
        self.layout = layout
        self.resolver = resolver

    def use(self, version: str) -> bool:
        """
        切换到指定版本。

        参数:
            version: 版本号

        返回:
            发生切换返回 True，已是当前版本返回 False

        抛出:
            InputValidationError: 版本号为空
            VersionNotFoundError: 版本未安装
            SwitchVersionError: 链接创建失败或切换后链接不一致
        """
        InputValidator.validate_version(version)
        if (
            self.resolver.current_version() == version
            and self.resolver.linked_go_version() == version
        ):
            logger.info(f"版本 {version} 已经是当前版本")
            return False

        if not self.resolver.version_exists(version):
            raise VersionNotFoundError(version, f"版本 {version} 未安装，请先执行 install")

        logger.info(f"正在切换 go 版本到: {version}")
        self.layout.ensure_skeleton()
        self._relink(version, self.layout.version_bin_dir(version), self.layout.current_bin_dir)
        self._relink(version, self.layout.version_go_dir(version), self.layout.current_go_dir)
        self._verify(version)

        logger.info(f"已切换 go 版本到: {version}")
        return True

    def _relink(self, version: str, target: Path, link: Path) -> None:
        """
        删除 link 处已有的链接、文件或目录，然后创建指向 target 的符号链接。
        """
        try:
            remove_path(link)
            os.symlink(target, link, target_is_directory=True)
        except (LayoutError, OSError) as e:
            raise SwitchVersionError(
                version, f"创建符号链接 {link} -> {target} 失败: {e}", path=link
            ) from e
        logger.debug(f"已创建链接 {link} -> {target}")

    def _verify(self, version: str) -> None:
        bin_version = self.resolver.current_version()
        go_version = self.resolver.linked_go_version()
        if bin_version != version or go_version != version:
            raise SwitchVersionError(
                version,
                f"切换后链接不一致: bin -> {bin_version or '无'}, go -> {go_version or '无'}",
                path=self.layout.current_dir,
            )
