"""
目录布局模块。

定义安装根目录下的固定目录结构：

    <root>/versions/<version>/go/...
    <root>/current/bin  -> versions/<version>/go/bin
    <root>/current/go   -> versions/<version>/go
    <root>/downloads/
"""

import shutil
from pathlib import Path
from typing import Optional, Union

from src.utils.logger import get_logger
from src.core.config_manager import GOBREW_DIR_NAME

logger = get_logger()


class LayoutError(Exception):
    """目录布局错误异常。"""
    pass


class Layout:
    """
    安装根目录布局类。

    在进程启动时构造一次，由各组件持有；不同根目录的实例互不影响。
    """

    def __init__(self, root: Union[str, Path]):
        """
        初始化目录布局。

        参数:
            root: 安装根目录路径
        """
        self.root = Path(root)
        self.versions_dir = self.root / "versions"
        self.current_dir = self.root / "current"
        self.current_bin_dir = self.current_dir / "bin"
        self.current_go_dir = self.current_dir / "go"
        self.downloads_dir = self.root / "downloads"

    @classmethod
    def from_home(cls, home: Union[str, Path]) -> "Layout":
        """根据用户主目录构造 <home>/.gobrew 布局。"""
        return cls(Path(home) / GOBREW_DIR_NAME)

    def __repr__(self) -> str:
        return f"Layout(root={str(self.root)!r})"

    def version_dir(self, version: str) -> Path:
        """
        获取版本目录路径。

        纯路径计算，不访问文件系统，也不对版本号做任何规范化。

        参数:
            version: 版本号

        返回:
            versions/<version> 路径
        """
        return self.versions_dir / version

    def version_go_dir(self, version: str) -> Path:
        return self.version_dir(version) / "go"

    def version_bin_dir(self, version: str) -> Path:
        return self.version_go_dir(version) / "bin"

    def ensure_skeleton(self, version: Optional[str] = None) -> None:
        """
        创建目录骨架。

        已存在的目录不视为错误。指定版本号时同时创建该版本目录，
        作为“安装进行中”的标记。

        参数:
            version: 正在安装的版本号（可选）

        抛出:
            LayoutError: 目录创建失败
        """
        dirs = [self.root, self.versions_dir, self.current_dir, self.downloads_dir]
        if version:
            dirs.append(self.version_dir(version))

        for path in dirs:
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LayoutError(f"无法创建目录 {path}: {e}") from e
        logger.debug(f"目录骨架已就绪: {self.root}")

    def remove_version_dir(self, version: str) -> None:
        """
        递归删除版本目录，目录不存在时忽略。

        参数:
            version: 版本号
        """
        remove_path(self.version_dir(version))

    def remove_downloads_dir(self) -> None:
        """递归删除整个 downloads 目录，目录不存在时忽略。"""
        remove_path(self.downloads_dir)


def remove_path(path: Path) -> None:
    """
    删除链接、文件或目录树，路径不存在时忽略。

    链接本身被删除，不会跟随到目标目录。

    参数:
        path: 要删除的路径

    抛出:
        LayoutError: 删除失败
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
        else:
            return
    except OSError as e:
        raise LayoutError(f"无法删除 {path}: {e}") from e
    logger.debug(f"已删除 {path}")
