"""
版本解析模块。

在符号链接状态与版本号之间相互转换，并计算下载产物的名称和地址。
"""

import os
import platform
from pathlib import Path

from src.utils.logger import get_logger
from src.core.layout import Layout

logger = get_logger()

OS_NAMES = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
}

ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "armv6l",
    "armv7l": "armv6l",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}


def arch_string() -> str:
    """
    获取当前主机的 <os>-<arch> 标识，命名与 Go 发行包一致。

    返回:
        如 "linux-amd64"、"darwin-arm64"
    """
    system = platform.system().lower()
    machine = platform.machine().lower()
    return f"{OS_NAMES.get(system, system)}-{ARCH_NAMES.get(machine, machine)}"


class Resolver:
    """
    版本解析器类。

    所有查询都直接读取文件系统，不做缓存，以反映外部的手动修改。
    """

    def __init__(self, layout: Layout, registry_url: str):
        """
        初始化版本解析器。

        参数:
            layout: 目录布局
            registry_url: 发行包下载地址前缀
        """
        self.layout = layout
        self.registry_url = registry_url

    def current_version(self) -> str:
        """
        通过 current/bin 链接的真实路径获取当前版本。

        链接不存在、已损坏或指向 versions/<version>/go/bin 之外时返回空字符串。

        返回:
            当前版本号，无当前版本时为 ""
        """
        return self._version_from_link(self.layout.current_bin_dir, ("go", "bin"))

    def linked_go_version(self) -> str:
        """通过 current/go 链接获取其指向的版本，用于校验两条链接是否一致。"""
        return self._version_from_link(self.layout.current_go_dir, ("go",))

    def _version_from_link(self, link: Path, suffix: tuple) -> str:
        if not os.path.lexists(link):
            return ""

        real_path = Path(os.path.realpath(link))
        if not real_path.exists():
            logger.debug(f"链接已损坏: {link}")
            return ""

        versions_dir = Path(os.path.realpath(self.layout.versions_dir))
        try:
            parts = real_path.relative_to(versions_dir).parts
        except ValueError:
            logger.debug(f"链接 {link} 指向 versions 目录之外: {real_path}")
            return ""

        if len(parts) != len(suffix) + 1 or tuple(parts[1:]) != suffix:
            logger.debug(f"链接 {link} 的目标结构无法识别: {real_path}")
            return ""
        return parts[0]

    def version_exists(self, version: str) -> bool:
        """
        判断版本是否已安装，即 versions/<version>/go 是否存在。

        参数:
            version: 版本号

        返回:
            已安装返回 True
        """
        return self.layout.version_go_dir(version).exists()

    def arch_string(self) -> str:
        return arch_string()

    def artifact_name(self, version: str) -> str:
        """
        获取下载产物文件名。

        参数:
            version: 版本号

        返回:
            如 "go1.17.linux-amd64.tar.gz"
        """
        return f"go{version}.{self.arch_string()}.tar.gz"

    def download_url(self, version: str) -> str:
        return f"{self.registry_url}{self.artifact_name(version)}"
