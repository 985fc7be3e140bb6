"""配置管理测试。"""

import json
from pathlib import Path

import pytest

from src.core.config_manager import (
    ConfigManager,
    ConfigLoadError,
    ConfigValidationError,
    get_default_config_path,
)


def _manager(tmp_path, env=None, config=None):
    env = {"HOME": str(tmp_path / "home"), **(env or {})}
    config_path = tmp_path / "config.json"
    if config is not None:
        config_path.write_text(json.dumps(config), encoding="utf-8")
    return ConfigManager(config_path=config_path, env=env)


def test_defaults(tmp_path):
    manager = _manager(tmp_path)

    assert manager.get_root() == tmp_path / "home" / ".gobrew"
    assert manager.get_registry_url() == "https://golang.org/dl/"
    assert manager.get_tags_repo() == "https://github.com/golang/go"
    assert manager.get_download_timeout() == 300


def test_file_overrides_defaults(tmp_path):
    manager = _manager(tmp_path, config={
        "registry_url": "https://mirrors.example.com/golang/",
        "download_timeout": 30,
    })

    assert manager.get_registry_url() == "https://mirrors.example.com/golang/"
    assert manager.get_download_timeout() == 30


def test_env_overrides_file(tmp_path):
    manager = _manager(
        tmp_path,
        env={"GOBREW_ROOT": str(tmp_path / "custom"), "GOBREW_REGISTRY_URL": "https://dl.google.com/go/"},
        config={"registry_url": "https://mirrors.example.com/golang/"},
    )

    assert manager.get_root() == tmp_path / "custom"
    assert manager.get_registry_url() == "https://dl.google.com/go/"


def test_unknown_keys_are_ignored(tmp_path):
    manager = _manager(tmp_path, config={"colour": "blue"})

    assert "colour" not in manager.get_config()


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    manager = ConfigManager(config_path=path, env={"HOME": str(tmp_path)})

    with pytest.raises(ConfigLoadError):
        manager.get_config()


@pytest.mark.parametrize(
    "config",
    [
        {"registry_url": "ftp://example.com/"},
        {"registry_url": "https://golang.org/dl"},
        {"download_timeout": 0},
        {"download_timeout": "fast"},
        {"chunk_size": True},
    ],
)
def test_invalid_values_raise(tmp_path, config):
    manager = _manager(tmp_path, config=config)

    with pytest.raises(ConfigValidationError):
        manager.get_config()


def test_set_value_persists(tmp_path):
    manager = _manager(tmp_path)

    manager.set_value("download_timeout", 60)

    saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert saved == {"download_timeout": 60}
    assert manager.get_download_timeout() == 60


def test_set_value_rejects_unknown_key(tmp_path):
    manager = _manager(tmp_path)

    with pytest.raises(ConfigValidationError):
        manager.set_value("colour", "blue")


def test_default_config_path(tmp_path):
    assert get_default_config_path({"HOME": str(tmp_path)}) == tmp_path / ".config" / "gobrew" / "config.json"
    assert get_default_config_path({"XDG_CONFIG_HOME": str(tmp_path / "xdg")}) == tmp_path / "xdg" / "gobrew" / "config.json"
    assert get_default_config_path({"GOBREW_CONFIG": "/etc/gobrew.json"}) == Path("/etc/gobrew.json")
