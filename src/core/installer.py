"""
安装模块。

按 下载 -> 解压 -> 校验 的顺序安装单个版本，任一步失败都会回滚。
"""

from pathlib import Path

from src.utils.logger import get_logger
from src.utils.input_validator import InputValidator
from src.core.layout import Layout
from src.core.resolver import Resolver
from src.core.interfaces import IDownloader, IExtractor
from src.core.download_manager import DownloadError, ExtractionError

logger = get_logger()


class InstallationError(Exception):
    """安装错误异常。"""

    def __init__(self, version: str, message: str):
        super().__init__(message)
        self.version = version


class Installer:
    """
    安装器类。

    安装结束后（无论成功与否）整个 downloads 目录都会被删除；
    失败时版本目录也会被删除，保证 versions/<version>/go 不存在。
    """

    def __init__(
        self,
        layout: Layout,
        resolver: Resolver,
        downloader: IDownloader,
        extractor: IExtractor,
    ):
        self.layout = layout
        self.resolver = resolver
        self.downloader = downloader
        self.extractor = extractor

    def install(self, version: str) -> bool:
        """
        安装指定版本。

        参数:
            version: 版本号

        返回:
            新安装返回 True，版本已存在返回 False

        抛出:
            InputValidationError: 版本号为空
            InstallationError: 下载、解压或校验失败（已回滚）
            其他异常（如 KeyboardInterrupt）同样回滚后原样抛出
            LayoutError: 目录创建或清理失败
        """
        InputValidator.validate_version(version)
        self.layout.ensure_skeleton(version)

        try:
            if self.resolver.version_exists(version):
                logger.info(f"版本 {version} 已存在")
                return False

            url = self.resolver.download_url(version)
            logger.info(f"正在下载版本: {version}")
            self._fetch(version, url)
            self._extract(version, url)
            self._verify(version, url)
        except BaseException as e:
            logger.warning(f"安装 {version} 失败，正在回滚: {e!r}")
            self.layout.remove_version_dir(version)
            raise
        finally:
            self.layout.remove_downloads_dir()

        logger.info(f"版本 {version} 安装成功")
        return True

    def _artifact_path(self, version: str) -> Path:
        return self.layout.downloads_dir / self.resolver.artifact_name(version)

    def _fetch(self, version: str, url: str) -> None:
        try:
            self.downloader.download(url, self._artifact_path(version))
        except DownloadError as e:
            raise InstallationError(
                version, f"下载版本 {version} 失败，请检查与 {url} 的网络连接: {e.reason}"
            ) from e

    def _extract(self, version: str, url: str) -> None:
        try:
            self.extractor.extract(self._artifact_path(version), self.layout.version_dir(version))
        except ExtractionError as e:
            raise InstallationError(
                version, f"解压版本 {version} 失败，请确认该版本存在于 {url}: {e}"
            ) from e
        logger.info(f"已解压到 {self.layout.version_dir(version)}")

    def _verify(self, version: str, url: str) -> None:
        if not self.resolver.version_exists(version):
            raise InstallationError(
                version, f"压缩包 {url} 中没有 go 目录，请确认该版本存在"
            )
