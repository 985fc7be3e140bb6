"""
Gobrew 工具模块。

提供日志记录和输入验证等工具功能。
"""

from .logger import get_logger, setup_logger, set_log_level
from .input_validator import InputValidator, InputValidationError

__all__ = [
    "get_logger",
    "setup_logger",
    "set_log_level",
    "InputValidator",
    "InputValidationError",
]
