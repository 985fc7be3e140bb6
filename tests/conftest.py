"""测试共用的夹具与替身实现。"""

import io
import tarfile
from pathlib import Path

import pytest

from src.core.layout import Layout
from src.core.resolver import Resolver
from src.core.installer import Installer
from src.core.switcher import Switcher
from src.core.remover import Remover
from src.core.download_manager import DownloadError, Extractor
from src.core.interfaces import IDownloader, IExtractor
from src.core.version_manager import VersionManager

REGISTRY_URL = "https://golang.org/dl/"


def build_go_archive(dest: Path, version: str, top_dir: str = "go") -> Path:
    """生成一个最小的 go 发行包：<top_dir>/bin/go 与 <top_dir>/VERSION。"""
    files = {
        f"{top_dir}/VERSION": f"go{version}\n".encode(),
        f"{top_dir}/bin/go": b"#!/bin/sh\necho go\n",
    }
    with tarfile.open(dest, "w:gz") as tf:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            tf.addfile(info, io.BytesIO(data))
    return dest


class FakeDownloader(IDownloader):
    """按 URL 写入伪造压缩包的下载器，记录调用。"""

    def __init__(self, fail: bool = False, payload: bytes = None, top_dir: str = "go"):
        self.fail = fail
        self.payload = payload
        self.top_dir = top_dir
        self.calls = []

    def download(self, url: str, dest: Path) -> None:
        self.calls.append((url, Path(dest)))
        if self.fail:
            raise DownloadError(url, "404 Client Error: Not Found")
        if self.payload is not None:
            Path(dest).write_bytes(self.payload)
            return
        version = Path(dest).name[len("go"):].split(".tar.gz")[0].rsplit(".", 1)[0]
        build_go_archive(Path(dest), version, self.top_dir)


class CountingExtractor(IExtractor):
    """包装真实解压器并记录调用。"""

    def __init__(self):
        self.inner = Extractor()
        self.calls = []

    def extract(self, archive_path: Path, target_dir: Path) -> None:
        self.calls.append((Path(archive_path), Path(target_dir)))
        self.inner.extract(archive_path, target_dir)


@pytest.fixture
def layout(tmp_path):
    return Layout.from_home(tmp_path)


@pytest.fixture
def resolver(layout):
    return Resolver(layout, REGISTRY_URL)


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def extractor():
    return CountingExtractor()


@pytest.fixture
def installer(layout, resolver, downloader, extractor):
    return Installer(layout, resolver, downloader, extractor)


@pytest.fixture
def switcher(layout, resolver):
    return Switcher(layout, resolver)


@pytest.fixture
def remover(layout, resolver):
    return Remover(layout, resolver)


@pytest.fixture
def manager(layout, downloader, extractor):
    return VersionManager(layout, REGISTRY_URL, downloader, extractor)
