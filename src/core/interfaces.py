"""
核心模块抽象接口定义。

定义配置管理、下载传输、解压、远程版本获取和版本管理的抽象接口。
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional


class IConfigManager(ABC):
    """配置管理器抽象接口。"""

    @abstractmethod
    def get_config(self) -> dict[str, Any]:
        """获取配置字典。"""
        pass

    @abstractmethod
    def save_config(self, config: Optional[dict[str, Any]] = None) -> None:
        """保存配置到文件。"""
        pass

    @abstractmethod
    def get_root(self) -> Path:
        """获取安装根目录。"""
        pass

    @abstractmethod
    def get_registry_url(self) -> str:
        """获取发行包下载地址前缀。"""
        pass

    @abstractmethod
    def get_tags_repo(self) -> str:
        """获取版本标签所在的 git 仓库地址。"""
        pass


class IDownloader(ABC):
    """下载传输抽象接口。"""

    @abstractmethod
    def download(self, url: str, dest: Path) -> None:
        """下载 url 指向的资源到 dest，失败时抛出 DownloadError。"""
        pass


class IExtractor(ABC):
    """压缩包解压抽象接口。"""

    @abstractmethod
    def extract(self, archive_path: Path, target_dir: Path) -> None:
        """解压 archive_path 到 target_dir，失败时抛出 ExtractionError。"""
        pass


class IRemoteFetcher(ABC):
    """远程版本获取器抽象接口。"""

    @abstractmethod
    def get_remote_versions(self) -> List[str]:
        """获取远程可用的版本列表。"""
        pass


class IVersionManager(ABC):
    """版本管理器抽象接口。"""

    @abstractmethod
    def list_versions(self) -> List[Dict[str, Any]]:
        """列出本地已安装的版本。"""
        pass

    @abstractmethod
    def list_remote_versions(self) -> List[str]:
        """列出远程可用的版本。"""
        pass

    @abstractmethod
    def current_version(self) -> str:
        """获取当前使用的版本，无则返回空字符串。"""
        pass

    @abstractmethod
    def install(self, version: str) -> bool:
        """下载并安装指定版本。"""
        pass

    @abstractmethod
    def use(self, version: str) -> bool:
        """切换到指定版本。"""
        pass

    @abstractmethod
    def uninstall(self, version: str) -> None:
        """卸载指定版本。"""
        pass
