"""
远程版本获取模块。

通过 git ls-remote 读取 Go 仓库的标签列表，解析出可用版本。
"""

import re
import subprocess
from typing import List

from src.utils.logger import get_logger
from src.core.interfaces import IRemoteFetcher

logger = get_logger()

TAG_PATTERN = re.compile(r"tags/go(\S+)")
PEELED_SUFFIX = "^{}"


class RemoteFetcherError(Exception):
    """远程获取错误异常。"""
    pass


def parse_remote_versions(raw: str) -> List[str]:
    """
    从标签列表文本中解析版本号。

    保持列表原有顺序，跳过附注标签的 ^{} 条目和重复项，不做排序。

    参数:
        raw: git ls-remote 输出

    返回:
        版本号列表，如 ["1.16.7", "1.17"]
    """
    versions = []
    seen = set()
    for match in TAG_PATTERN.finditer(raw):
        version = match.group(1)
        if version.endswith(PEELED_SUFFIX):
            version = version[:-len(PEELED_SUFFIX)]
        if version and version not in seen:
            seen.add(version)
            versions.append(version)
    return versions


class RemoteFetcher(IRemoteFetcher):
    """
    远程版本获取器类。

    实现 IRemoteFetcher 抽象接口。
    """

    def __init__(self, tags_repo: str, timeout: float = 60):
        """
        初始化远程版本获取器。

        参数:
            tags_repo: git 仓库地址
            timeout: 命令超时时间（秒）
        """
        self.tags_repo = tags_repo
        self.timeout = timeout

    def _build_command(self) -> List[str]:
        return [
            "git",
            "ls-remote",
            "--sort=version:refname",
            "--tags",
            self.tags_repo,
            "go*",
        ]

    def get_remote_versions(self) -> List[str]:
        """
        获取远程可用的版本列表。

        返回:
            版本号列表

        抛出:
            RemoteFetcherError: git 不可用、超时或命令失败
        """
        cmd = self._build_command()
        logger.info(f"正在获取远程版本: {self.tags_repo}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError as e:
            raise RemoteFetcherError(f"未找到 git 命令: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise RemoteFetcherError(f"获取远程版本超时 ({self.timeout} 秒)") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise RemoteFetcherError(f"获取远程版本失败: {stderr or e}") from e

        versions = parse_remote_versions(result.stdout)
        logger.debug(f"解析到 {len(versions)} 个远程版本")
        return versions
