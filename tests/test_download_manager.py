"""下载与解压测试。"""

import io
import tarfile
from unittest.mock import MagicMock

import pytest
import requests

from src.core.download_manager import Downloader, DownloadError, Extractor, ExtractionError

from conftest import build_go_archive

URL = "https://golang.org/dl/go1.17.linux-amd64.tar.gz"


def _session_returning(response):
    session = MagicMock(spec=requests.Session)
    session.get.return_value.__enter__.return_value = response
    return session


def test_download_writes_file(tmp_path):
    response = MagicMock()
    response.iter_content.return_value = [b"abc", b"", b"def"]
    downloader = Downloader(timeout=7, chunk_size=3, session=_session_returning(response))
    dest = tmp_path / "go1.17.tar.gz"

    downloader.download(URL, dest)

    assert dest.read_bytes() == b"abcdef"
    downloader.session.get.assert_called_once_with(URL, stream=True, timeout=7)


def test_download_http_error_removes_partial_file(tmp_path):
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    downloader = Downloader(session=_session_returning(response))
    dest = tmp_path / "go1.99.tar.gz"

    with pytest.raises(DownloadError) as exc_info:
        downloader.download(URL, dest)

    assert exc_info.value.url == URL
    assert URL in str(exc_info.value)
    assert not dest.exists()


def test_download_connection_error(tmp_path):
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("unreachable")
    downloader = Downloader(session=session)

    with pytest.raises(DownloadError):
        downloader.download(URL, tmp_path / "go.tar.gz")


def test_download_interrupted_stream_removes_partial_file(tmp_path):
    def chunks(chunk_size):
        yield b"partial"
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    response = MagicMock()
    response.iter_content.side_effect = chunks
    downloader = Downloader(session=_session_returning(response))
    dest = tmp_path / "go.tar.gz"

    with pytest.raises(DownloadError):
        downloader.download(URL, dest)

    assert not dest.exists()


def test_extract_go_archive(tmp_path):
    archive = build_go_archive(tmp_path / "go.tar.gz", "1.17")
    target = tmp_path / "versions" / "1.17"
    target.mkdir(parents=True)

    Extractor().extract(archive, target)

    assert (target / "go" / "bin" / "go").is_file()
    assert (target / "go" / "VERSION").read_text() == "go1.17\n"


def test_extract_rejects_corrupt_archive(tmp_path):
    archive = tmp_path / "go.tar.gz"
    archive.write_bytes(b"not a tarball")

    with pytest.raises(ExtractionError):
        Extractor().extract(archive, tmp_path)


def test_extract_rejects_path_traversal(tmp_path):
    archive = tmp_path / "evil.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        info = tarfile.TarInfo("../outside")
        info.size = 1
        tf.addfile(info, io.BytesIO(b"x"))
    target = tmp_path / "target"
    target.mkdir()

    with pytest.raises(ExtractionError):
        Extractor().extract(archive, target)

    assert not (tmp_path / "outside").exists()


@pytest.mark.parametrize("linkname", ["../../outside", "/etc/passwd"])
def test_extract_rejects_escaping_symlink(tmp_path, linkname):
    archive = tmp_path / "evil.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        info = tarfile.TarInfo("go/escape")
        info.type = tarfile.SYMTYPE
        info.linkname = linkname
        tf.addfile(info)
    target = tmp_path / "target"
    target.mkdir()

    with pytest.raises(ExtractionError):
        Extractor().extract(archive, target)

    assert not (target / "go" / "escape").is_symlink()


def test_extract_keeps_internal_symlink(tmp_path):
    archive = tmp_path / "go.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        data = b"#!/bin/sh\n"
        info = tarfile.TarInfo("go/bin/go")
        info.size = len(data)
        tf.addfile(info, io.BytesIO(data))
        link = tarfile.TarInfo("go/gobin")
        link.type = tarfile.SYMTYPE
        link.linkname = "bin/go"
        tf.addfile(link)
    target = tmp_path / "target"
    target.mkdir()

    Extractor().extract(archive, target)

    assert (target / "go" / "gobin").is_symlink()
