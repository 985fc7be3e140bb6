"""
下载管理模块。

提供发行包的下载与解压功能。两者都只向调用方报告成功或失败。
"""

import os
import tarfile
from pathlib import Path
from typing import Optional

import requests

from src.utils.logger import get_logger
from src.core.interfaces import IDownloader, IExtractor

logger = get_logger()


class DownloadManagerError(Exception):
    """下载管理错误异常。"""
    pass


class DownloadError(DownloadManagerError):
    """下载错误异常。"""

    def __init__(self, url: str, reason: str):
        super().__init__(f"下载 {url} 失败: {reason}")
        self.url = url
        self.reason = reason


class ExtractionError(DownloadManagerError):
    """解压错误异常。"""
    pass


class Downloader(IDownloader):
    """
    HTTP 下载器类。

    不做重试、断点续传或校验，非 2xx 响应视为失败。
    """

    def __init__(
        self,
        timeout: float = 300,
        chunk_size: int = 8192,
        session: Optional[requests.Session] = None,
    ):
        """
        初始化下载器。

        参数:
            timeout: 请求超时时间（秒）
            chunk_size: 写入文件的块大小
            session: requests 会话，默认新建
        """
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or requests.Session()

    def download(self, url: str, dest: Path) -> None:
        """
        下载文件到指定路径。

        失败时删除已写入的部分文件。

        参数:
            url: 下载 URL
            dest: 目标文件路径

        抛出:
            DownloadError: 网络错误、HTTP 错误或写入失败
        """
        dest = Path(dest)
        logger.info(f"正在从 {url} 下载")
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(dest, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
        except (requests.RequestException, OSError) as e:
            if dest.exists():
                dest.unlink()
            raise DownloadError(url, str(e)) from e
        logger.debug(f"下载完成: {dest} ({dest.stat().st_size} 字节)")


class Extractor(IExtractor):
    """
    tar.gz 解压器类。

    解压前检查所有成员路径，防止路径遍历。
    """

    def _check_members(self, tf: tarfile.TarFile, target_dir: Path) -> None:
        base = os.path.abspath(target_dir)
        for member in tf.getmembers():
            name = member.name
            joined = os.path.abspath(os.path.join(base, name))
            if name.startswith("/") or not (joined == base or joined.startswith(base + os.sep)):
                raise ExtractionError(f"压缩包包含非法路径: {name}")
            if member.islnk():
                link_target = os.path.abspath(os.path.join(base, member.linkname))
                if not link_target.startswith(base + os.sep):
                    raise ExtractionError(f"压缩包包含非法硬链接: {name} -> {member.linkname}")
            if member.issym():
                link_target = os.path.abspath(
                    os.path.join(base, os.path.dirname(name), member.linkname)
                )
                if member.linkname.startswith("/") or not link_target.startswith(base + os.sep):
                    raise ExtractionError(f"压缩包包含非法符号链接: {name} -> {member.linkname}")
            if member.isdev():
                raise ExtractionError(f"压缩包包含设备文件: {name}")

    def extract(self, archive_path: Path, target_dir: Path) -> None:
        """
        解压压缩包到目标目录。

        参数:
            archive_path: 压缩包路径
            target_dir: 目标目录

        抛出:
            ExtractionError: 压缩包损坏、路径非法或写入失败
        """
        logger.info(f"正在解压 {archive_path} 到 {target_dir}")
        try:
            with tarfile.open(archive_path, "r:gz") as tf:
                self._check_members(tf, Path(target_dir))
                if hasattr(tarfile, "data_filter"):
                    tf.extractall(target_dir, filter="data")
                else:
                    tf.extractall(target_dir)
        except (tarfile.TarError, OSError, EOFError) as e:
            raise ExtractionError(f"解压 {archive_path} 失败: {e}") from e
