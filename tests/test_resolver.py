"""版本解析测试。"""

import os

import pytest

from src.core import resolver as resolver_module
from src.core.resolver import arch_string


def _link_current_bin(layout, target):
    layout.current_dir.mkdir(parents=True, exist_ok=True)
    os.symlink(target, layout.current_bin_dir)


def test_current_version_empty_without_link(resolver, layout):
    assert resolver.current_version() == ""

    layout.ensure_skeleton()
    assert resolver.current_version() == ""


def test_current_version_from_link(resolver, layout):
    layout.version_bin_dir("1.18beta2").mkdir(parents=True)
    _link_current_bin(layout, layout.version_bin_dir("1.18beta2"))

    assert resolver.current_version() == "1.18beta2"


def test_current_version_empty_for_broken_link(resolver, layout):
    _link_current_bin(layout, layout.version_bin_dir("1.17"))

    assert resolver.current_version() == ""


def test_current_version_empty_for_foreign_target(resolver, layout, tmp_path):
    elsewhere = tmp_path / "usr" / "local" / "go" / "bin"
    elsewhere.mkdir(parents=True)
    _link_current_bin(layout, elsewhere)

    assert resolver.current_version() == ""


def test_version_exists_requires_go_dir(resolver, layout):
    layout.version_dir("1.17").mkdir(parents=True)
    assert not resolver.version_exists("1.17")

    layout.version_go_dir("1.17").mkdir()
    assert resolver.version_exists("1.17")


def test_version_exists_is_not_cached(resolver, layout):
    layout.version_go_dir("1.17").mkdir(parents=True)
    assert resolver.version_exists("1.17")

    layout.version_go_dir("1.17").rmdir()
    assert not resolver.version_exists("1.17")


@pytest.mark.parametrize(
    "system, machine, expected",
    [
        ("Linux", "x86_64", "linux-amd64"),
        ("Darwin", "arm64", "darwin-arm64"),
        ("Linux", "aarch64", "linux-arm64"),
        ("Windows", "AMD64", "windows-amd64"),
        ("Linux", "i686", "linux-386"),
        ("Linux", "armv7l", "linux-armv6l"),
    ],
)
def test_arch_string(monkeypatch, system, machine, expected):
    monkeypatch.setattr(resolver_module.platform, "system", lambda: system)
    monkeypatch.setattr(resolver_module.platform, "machine", lambda: machine)

    assert arch_string() == expected


def test_artifact_name_and_url(resolver, monkeypatch):
    monkeypatch.setattr(resolver_module, "arch_string", lambda: "linux-amd64")

    assert resolver.artifact_name("1.17") == "go1.17.linux-amd64.tar.gz"
    assert resolver.download_url("1.17") == "https://golang.org/dl/go1.17.linux-amd64.tar.gz"
