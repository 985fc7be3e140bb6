"""
Gobrew 核心模块。

提供目录布局、版本解析、安装、切换、卸载和远程版本获取功能。
"""

from .interfaces import IConfigManager, IDownloader, IExtractor, IRemoteFetcher, IVersionManager
from .config_manager import ConfigManager, ConfigValidationError, ConfigLoadError, ConfigSaveError
from .layout import Layout, LayoutError
from .resolver import Resolver, arch_string
from .download_manager import Downloader, Extractor, DownloadManagerError, DownloadError, ExtractionError
from .installer import Installer, InstallationError
from .switcher import Switcher
from .remover import Remover
from .remote_fetcher import RemoteFetcher, RemoteFetcherError, parse_remote_versions
from .exceptions import VersionManagerError, VersionNotFoundError, VersionInUseError, SwitchVersionError, DeleteVersionError
from .version_manager import VersionManager

__all__ = [
    "IConfigManager", "IDownloader", "IExtractor", "IRemoteFetcher", "IVersionManager",
    "ConfigManager", "ConfigValidationError", "ConfigLoadError", "ConfigSaveError",
    "Layout", "LayoutError",
    "Resolver", "arch_string",
    "Downloader", "Extractor", "DownloadManagerError", "DownloadError", "ExtractionError",
    "Installer", "InstallationError",
    "Switcher",
    "Remover",
    "RemoteFetcher", "RemoteFetcherError", "parse_remote_versions",
    "VersionManagerError", "VersionNotFoundError", "VersionInUseError", "SwitchVersionError", "DeleteVersionError",
    "VersionManager",
]
