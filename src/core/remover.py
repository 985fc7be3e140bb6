"""
版本卸载模块。
"""

from src.utils.logger import get_logger
from src.utils.input_validator import InputValidator
from src.core.layout import Layout, LayoutError
from src.core.resolver import Resolver
from src.core.exceptions import VersionInUseError, VersionNotFoundError, DeleteVersionError

logger = get_logger()


class Remover:
    """
    版本卸载器类。

    拒绝卸载当前版本和未安装的版本，不提供强制选项。
    """

    def __init__(self, layout: Layout, resolver: Resolver):
        self.layout = layout
        self.resolver = resolver

    def uninstall(self, version: str) -> None:
        """
        卸载指定版本。

        参数:
            version: 版本号

        抛出:
            InputValidationError: 版本号为空
            VersionInUseError: 版本是当前版本
            VersionNotFoundError: 版本未安装
            DeleteVersionError: 删除目录失败
        """
        InputValidator.validate_version(version)

        if self.resolver.current_version() == version:
            raise VersionInUseError(
                version,
                f"版本 {version} 是当前版本，请先切换到其他版本再卸载",
            )

        if not self.resolver.version_exists(version):
            raise VersionNotFoundError(version, f"版本 {version} 未安装")

        try:
            self.layout.remove_version_dir(version)
        except LayoutError as e:
            raise DeleteVersionError(version, f"卸载版本 {version} 失败: {e}") from e
        logger.info(f"版本 {version} 已卸载")
