"""
配置管理器模块。

提供应用程序配置的加载、保存和验证功能。
"""

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from src.utils.logger import get_logger
from src.core.interfaces import IConfigManager
from src.utils.input_validator import InputValidator, InputValidationError

logger = get_logger()

GOBREW_DIR_NAME = ".gobrew"
REGISTRY_URL = "https://golang.org/dl/"
TAGS_REPO = "https://github.com/golang/go"

ENV_CONFIG = "GOBREW_CONFIG"
ENV_ROOT = "GOBREW_ROOT"
ENV_REGISTRY_URL = "GOBREW_REGISTRY_URL"


class ConfigValidationError(Exception):
    """配置验证错误异常。"""
    pass


class ConfigLoadError(Exception):
    """配置加载错误异常。"""
    pass


class ConfigSaveError(Exception):
    """配置保存错误异常。"""
    pass


def get_home_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    获取用户主目录。

    优先使用 HOME 环境变量，未设置时回退到 Path.home()。

    参数:
        env: 环境变量映射，默认为 os.environ

    返回:
        主目录的 Path 对象
    """
    env = os.environ if env is None else env
    home = env.get("HOME")
    return Path(home) if home else Path.home()


def get_default_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    获取默认配置文件路径。

    配置文件放在 XDG 配置目录下，不写入 .gobrew 安装根目录。

    参数:
        env: 环境变量映射，默认为 os.environ

    返回:
        配置文件路径
    """
    env = os.environ if env is None else env
    if env.get(ENV_CONFIG):
        return Path(env[ENV_CONFIG])
    xdg_config = env.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else get_home_dir(env) / ".config"
    return base / "gobrew" / "config.json"


def _atomic_save_json(file_path: Path, data: Any, indent: int = 2) -> None:
    """
    原子保存 JSON 数据到文件，防止写入中断导致文件损坏。

    参数:
        file_path: 目标文件路径
        data: 要保存的数据
        indent: JSON 缩进
    """
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
        os.replace(temp_path, file_path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


class ConfigManager(IConfigManager):
    """
    配置管理器类。

    配置按以下顺序合并：内置默认值、JSON 配置文件、环境变量。
    实现 IConfigManager 抽象接口。
    """

    SETTINGS_FIELDS = {
        "root": str,
        "registry_url": str,
        "tags_repo": str,
        "download_timeout": (int, float),
        "remote_timeout": (int, float),
        "chunk_size": int,
    }

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ):
        """
        初始化配置管理器。

        参数:
            config_path: 配置文件路径，为 None 时使用默认路径
            env: 环境变量映射，默认为 os.environ
        """
        self._env = dict(os.environ if env is None else env)
        self.config_path = Path(config_path) if config_path else get_default_config_path(self._env)
        self._file_settings: dict[str, Any] = {}
        self._config: dict[str, Any] = {}

    def _get_builtin_default_config(self) -> dict[str, Any]:
        """获取内置默认配置。"""
        return {
            "root": str(get_home_dir(self._env) / GOBREW_DIR_NAME),
            "registry_url": REGISTRY_URL,
            "tags_repo": TAGS_REPO,
            "download_timeout": 300,
            "remote_timeout": 60,
            "chunk_size": 8192,
        }

    def _read_config_file(self) -> dict[str, Any]:
        """
        读取 JSON 配置文件。

        文件不存在时返回空字典。

        返回:
            文件中的配置字典
        """
        if not self.config_path.exists():
            logger.debug(f"配置文件不存在，使用默认配置: {self.config_path}")
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (IOError, OSError, json.JSONDecodeError) as e:
            raise ConfigLoadError(f"无法加载配置文件 {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigLoadError(f"配置文件 {self.config_path} 顶层必须是 JSON 对象")

        unknown = set(data) - set(self.SETTINGS_FIELDS)
        if unknown:
            logger.warning(f"忽略未知配置项: {', '.join(sorted(unknown))}")
        return {k: v for k, v in data.items() if k in self.SETTINGS_FIELDS}

    def _env_overrides(self) -> dict[str, Any]:
        """获取环境变量覆盖的配置项。"""
        overrides = {}
        if self._env.get(ENV_ROOT):
            overrides["root"] = self._env[ENV_ROOT]
        if self._env.get(ENV_REGISTRY_URL):
            overrides["registry_url"] = self._env[ENV_REGISTRY_URL]
        return overrides

    def load_config(self) -> dict[str, Any]:
        """
        加载并合并配置。

        返回:
            配置字典

        抛出:
            ConfigLoadError: 配置文件无法读取
            ConfigValidationError: 配置值无效
        """
        self._file_settings = self._read_config_file()
        config = self._get_builtin_default_config()
        config.update(self._file_settings)
        config.update(self._env_overrides())
        self.validate_config(config)
        self._config = config
        logger.debug("配置加载成功")
        return self._config

    def validate_config(self, config: dict[str, Any]) -> bool:
        """
        验证配置的有效性。

        参数:
            config: 要验证的配置字典

        返回:
            验证通过返回 True

        抛出:
            ConfigValidationError: 配置验证失败时抛出
        """
        for field, expected_type in self.SETTINGS_FIELDS.items():
            if field not in config:
                raise ConfigValidationError(f"缺少必需字段: {field}")
            value = config[field]
            if isinstance(value, bool) or not isinstance(value, expected_type):
                raise ConfigValidationError(
                    f"字段 '{field}' 类型无效，实际为 {type(value).__name__}"
                )

        try:
            InputValidator.validate_path(config["root"])
            InputValidator.validate_url(config["registry_url"])
            InputValidator.validate_url(config["tags_repo"])
            for field in ("download_timeout", "remote_timeout", "chunk_size"):
                InputValidator.validate_positive_number(field, config[field])
        except InputValidationError as e:
            raise ConfigValidationError(str(e)) from e

        if not config["registry_url"].endswith("/"):
            raise ConfigValidationError("registry_url 必须以 / 结尾")

        return True

    def save_config(self, config: Optional[dict[str, Any]] = None) -> None:
        """
        保存配置文件中显式设置的配置项。

        参数:
            config: 要写入文件的配置项，为 None 时保存当前文件配置
        """
        if config is not None:
            merged = self._get_builtin_default_config()
            merged.update(config)
            self.validate_config(merged)
            self._file_settings = dict(config)

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"保存配置到 {self.config_path}")
            _atomic_save_json(self.config_path, self._file_settings, indent=2)
        except (IOError, OSError) as e:
            logger.error(f"保存配置失败: {e}")
            raise ConfigSaveError(f"无法保存配置到 {self.config_path}: {e}") from e

        self._config = {}

    def set_value(self, key: str, value: Any) -> None:
        """
        设置单个配置项并写入配置文件。

        参数:
            key: 配置项名称
            value: 配置值
        """
        if key not in self.SETTINGS_FIELDS:
            raise ConfigValidationError(f"未知配置项: {key}")
        self.get_config()
        settings = dict(self._file_settings)
        settings[key] = value
        self.save_config(settings)

    def get_config(self) -> dict[str, Any]:
        """获取合并后的配置字典（延迟加载）。"""
        if not self._config:
            self.load_config()
        return self._config

    def get_root(self) -> Path:
        """获取安装根目录。"""
        return Path(self.get_config()["root"]).expanduser()

    def get_registry_url(self) -> str:
        """获取发行包下载地址前缀。"""
        return self.get_config()["registry_url"]

    def get_tags_repo(self) -> str:
        """获取版本标签所在的 git 仓库地址。"""
        return self.get_config()["tags_repo"]

    def get_download_timeout(self) -> float:
        return self.get_config()["download_timeout"]

    def get_remote_timeout(self) -> float:
        return self.get_config()["remote_timeout"]

    def get_chunk_size(self) -> int:
        return self.get_config()["chunk_size"]
