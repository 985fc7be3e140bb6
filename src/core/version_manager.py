"""
版本管理器模块。

提供 Go 版本的列出、安装、切换和卸载功能。
"""

from typing import Optional, List, Dict, Any

from src.utils.logger import get_logger
from src.core.config_manager import ConfigManager
from src.core.layout import Layout
from src.core.resolver import Resolver
from src.core.installer import Installer
from src.core.switcher import Switcher
from src.core.remover import Remover
from src.core.remote_fetcher import RemoteFetcher
from src.core.download_manager import Downloader, Extractor
from src.core.interfaces import IVersionManager, IDownloader, IExtractor, IRemoteFetcher
from src.core.exceptions import (
    VersionManagerError,
    VersionNotFoundError,
    VersionInUseError,
    SwitchVersionError,
    DeleteVersionError,
)

logger = get_logger()

__all__ = [
    "VersionManager",
    "VersionManagerError",
    "VersionNotFoundError",
    "VersionInUseError",
    "SwitchVersionError",
    "DeleteVersionError",
]


class VersionManager(IVersionManager):
    """
    版本管理器类。

    本类作为协调者，将具体工作委托给各个专用模块：
    Installer 负责安装，Switcher 负责切换，Remover 负责卸载，
    Resolver 为三者回答“当前版本是什么”和“某版本在哪里”。
    实现 IVersionManager 抽象接口。

    同一根目录同一时间只应有一个调用在修改，本类不做加锁。
    """

    def __init__(
        self,
        layout: Layout,
        registry_url: str,
        downloader: IDownloader,
        extractor: IExtractor,
        remote_fetcher: Optional[IRemoteFetcher] = None,
    ):
        """
        初始化版本管理器。

        参数:
            layout: 目录布局
            registry_url: 发行包下载地址前缀
            downloader: 下载器
            extractor: 解压器
            remote_fetcher: 远程版本获取器（可选）
        """
        self.layout = layout
        self.resolver = Resolver(layout, registry_url)
        self.installer = Installer(layout, self.resolver, downloader, extractor)
        self.switcher = Switcher(layout, self.resolver)
        self.remover = Remover(layout, self.resolver)
        self.remote_fetcher = remote_fetcher

    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> "VersionManager":
        """
        根据配置构造版本管理器及其依赖。

        参数:
            config_manager: 配置管理器实例

        返回:
            VersionManager 实例
        """
        layout = Layout(config_manager.get_root())
        downloader = Downloader(
            timeout=config_manager.get_download_timeout(),
            chunk_size=config_manager.get_chunk_size(),
        )
        remote_fetcher = RemoteFetcher(
            config_manager.get_tags_repo(),
            timeout=config_manager.get_remote_timeout(),
        )
        return cls(
            layout,
            config_manager.get_registry_url(),
            downloader,
            Extractor(),
            remote_fetcher,
        )

    def list_versions(self) -> List[Dict[str, Any]]:
        """
        列出本地已安装的版本。

        只包含存在 go 子目录的版本目录，安装中断留下的空目录不计入。

        返回:
            按名称排序的版本信息列表，每项包含 version、path、current
        """
        if not self.layout.versions_dir.is_dir():
            return []

        current = self.current_version()
        result = []
        for entry in sorted(self.layout.versions_dir.iterdir(), key=lambda p: p.name):
            if not entry.is_dir() or not self.resolver.version_exists(entry.name):
                continue
            result.append({
                "version": entry.name,
                "path": str(entry),
                "current": entry.name == current,
            })
        return result

    def list_remote_versions(self) -> List[str]:
        """
        列出远程可用的版本，顺序与远程列表一致。

        返回:
            版本号列表
        """
        if self.remote_fetcher is None:
            logger.warning("未配置远程版本获取器")
            return []
        return self.remote_fetcher.get_remote_versions()

    def current_version(self) -> str:
        return self.resolver.current_version()

    def version_exists(self, version: str) -> bool:
        return self.resolver.version_exists(version)

    def install(self, version: str) -> bool:
        return self.installer.install(version)

    def use(self, version: str) -> bool:
        return self.switcher.use(version)

    def uninstall(self, version: str) -> None:
        self.remover.uninstall(version)
