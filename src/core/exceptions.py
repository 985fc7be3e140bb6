"""
版本管理异常定义。
"""


class VersionManagerError(Exception):
    """版本管理错误异常。"""

    def __init__(self, version: str, message: str):
        super().__init__(message)
        self.version = version


class VersionNotFoundError(VersionManagerError):
    """版本未安装错误异常。"""
    pass


class VersionInUseError(VersionManagerError):
    """版本正在使用错误异常。"""
    pass


class SwitchVersionError(VersionManagerError):
    """切换版本错误异常。"""

    def __init__(self, version: str, message: str, path=None):
        super().__init__(version, message)
        self.path = path


class DeleteVersionError(VersionManagerError):
    """删除版本错误异常。"""
    pass
