"""
输入验证模块。

提供用户输入与配置值的验证功能。
"""

import re
from typing import Any

from src.utils.logger import get_logger

logger = get_logger()


class InputValidationError(Exception):
    """输入验证错误异常。"""
    pass


class InputValidator:
    """
    输入验证器类。

    版本号按原样接受，仅拒绝空值；版本命名规则不在此处约束。
    """

    MAX_PATH_LENGTH = 1024

    URL_PATTERN = re.compile(
        r'^https?://'
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+'
        r'(?:[A-Z]{2,63}|[A-Z0-9-]{2,})'
        r'|localhost|\d{1,3}(?:\.\d{1,3}){3})'
        r'(?::\d+)?'
        r'(?:/?|[/?]\S+)$',
        re.IGNORECASE
    )

    @classmethod
    def validate_version(cls, version: str) -> bool:
        """
        验证版本号非空。

        参数:
            version: 版本号字符串

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if not version or not version.strip():
            raise InputValidationError("未提供版本号")
        return True

    @classmethod
    def validate_url(cls, url: str) -> bool:
        """
        验证 URL 的有效性。

        参数:
            url: URL 字符串

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if not isinstance(url, str) or not cls.URL_PATTERN.match(url.strip()):
            raise InputValidationError(f"URL 格式无效: {url}")
        return True

    @classmethod
    def validate_path(cls, path: str) -> bool:
        """
        验证路径的有效性。

        参数:
            path: 路径字符串

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if not isinstance(path, str) or not path.strip():
            raise InputValidationError("路径不能为空")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise InputValidationError(f"路径不能超过 {cls.MAX_PATH_LENGTH} 个字符")

        return True

    @classmethod
    def validate_positive_number(cls, name: str, value: Any) -> bool:
        """
        验证数值配置项为正数。

        参数:
            name: 配置项名称
            value: 配置值

        返回:
            验证通过返回 True，否则抛出 InputValidationError
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise InputValidationError(f"{name} 必须为正数，实际为: {value!r}")
        return True
