"""
Gobrew 命令行接口模块。
"""

import argparse
import json
import logging

from src.core.config_manager import ConfigManager, ConfigLoadError, ConfigSaveError, ConfigValidationError
from src.core.version_manager import VersionManager, VersionManagerError
from src.core.installer import InstallationError
from src.core.layout import LayoutError
from src.core.remote_fetcher import RemoteFetcherError
from src.utils.input_validator import InputValidationError
from src.utils.logger import get_logger, setup_logger

logger = get_logger()

HANDLED_ERRORS = (
    InputValidationError,
    InstallationError,
    VersionManagerError,
    LayoutError,
    RemoteFetcherError,
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
)


def create_parser() -> argparse.ArgumentParser:
    """
    创建并配置命令行参数解析器。

    返回:
        配置好的 ArgumentParser 实例
    """
    parser = argparse.ArgumentParser(
        prog="gobrew",
        description="Gobrew - Go 版本管理器",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  gobrew list                列出已安装的 Go 版本
  gobrew list --remote       列出远程可用版本
  gobrew install 1.17        安装 Go 1.17
  gobrew use 1.17            切换到 Go 1.17
  gobrew uninstall 1.16.7    卸载 Go 1.16.7
  gobrew current             显示当前版本
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="启用详细输出",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="配置文件路径",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="日志文件路径",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="命令",
        description="可用的 CLI 命令",
    )

    list_parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="列出已安装的版本",
    )
    list_parser.add_argument(
        "--remote",
        "-r",
        action="store_true",
        help="显示远程可用版本",
    )
    list_parser.add_argument(
        "--format",
        "-f",
        choices=["json", "simple"],
        default="simple",
        help="输出格式",
    )

    install_parser = subparsers.add_parser(
        "install",
        help="下载并安装指定版本",
    )
    install_parser.add_argument(
        "version",
        help="要安装的版本",
    )

    use_parser = subparsers.add_parser(
        "use",
        help="切换到指定版本",
    )
    use_parser.add_argument(
        "version",
        help="要切换到的版本",
    )

    uninstall_parser = subparsers.add_parser(
        "uninstall",
        help="卸载指定版本",
    )
    uninstall_parser.add_argument(
        "version",
        help="要卸载的版本",
    )

    subparsers.add_parser(
        "current",
        help="显示当前版本",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="显示或修改配置",
    )
    config_parser.add_argument(
        "--set",
        "-s",
        type=str,
        help="设置配置值（格式：key=value）",
    )

    return parser


def run_cli(args: argparse.Namespace) -> int:
    """
    运行命令行接口。

    参数:
        args: 解析后的命令行参数

    返回:
        退出码（0 表示成功）
    """
    setup_logger(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        force=True,
    )

    if args.command is None:
        print("未指定命令。使用 --help 查看帮助信息。")
        return 1

    command_handlers = {
        "list": handle_list,
        "ls": handle_list,
        "install": handle_install,
        "use": handle_use,
        "uninstall": handle_uninstall,
        "current": handle_current,
        "config": handle_config,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        print(f"未知命令: {args.command}")
        return 1

    try:
        return handler(args)
    except HANDLED_ERRORS as e:
        logger.error(str(e))
        print(f"错误: {e}")
        return 1


def _get_config_manager(args: argparse.Namespace) -> ConfigManager:
    return ConfigManager(config_path=args.config)


def _get_version_manager(args: argparse.Namespace) -> VersionManager:
    """
    根据命令行参数构造版本管理器。

    参数:
        args: 解析后的命令行参数

    返回:
        VersionManager 实例
    """
    return VersionManager.from_config(_get_config_manager(args))


def handle_list(args: argparse.Namespace) -> int:
    """
    处理 list 命令：列出已安装或远程可用的版本。

    参数:
        args: 解析后的命令行参数

    返回:
        退出码
    """
    version_manager = _get_version_manager(args)

    if args.remote:
        versions = version_manager.list_remote_versions()
        if args.format == "json":
            print(json.dumps(versions, indent=2))
        else:
            for v in versions:
                print(v)
        return 0

    versions = version_manager.list_versions()
    current = version_manager.current_version()

    if args.format == "json":
        print(json.dumps({"current": current, "versions": versions}, indent=2))
        return 0

    if not versions:
        print("未安装任何版本")
        return 0

    for v in versions:
        marker = "*" if v["current"] else ""
        print(f"{v['version']}{marker}")
        if args.verbose:
            print(f"    路径: {v['path']}")

    if current:
        print(f"\ncurrent: {current}")
    return 0


def handle_install(args: argparse.Namespace) -> int:
    """
    处理 install 命令：下载并安装指定版本。

    参数:
        args: 解析后的命令行参数

    返回:
        退出码
    """
    version_manager = _get_version_manager(args)

    if version_manager.install(args.version):
        print(f"成功安装 {args.version}")
    else:
        print(f"版本 {args.version} 已安装")
    return 0


def handle_use(args: argparse.Namespace) -> int:
    """
    处理 use 命令：切换到指定版本。

    参数:
        args: 解析后的命令行参数

    返回:
        退出码
    """
    version_manager = _get_version_manager(args)

    if version_manager.use(args.version):
        print(f"成功切换到 {args.version}")
        print(f"请确认 {version_manager.layout.current_bin_dir} 已加入 PATH")
    else:
        print(f"{args.version} 已经是当前版本")
    return 0


def handle_uninstall(args: argparse.Namespace) -> int:
    version_manager = _get_version_manager(args)
    version_manager.uninstall(args.version)
    print(f"成功卸载 {args.version}")
    return 0


def handle_current(args: argparse.Namespace) -> int:
    version_manager = _get_version_manager(args)
    current = version_manager.current_version()
    print(current or "未设置")
    return 0


def handle_config(args: argparse.Namespace) -> int:
    """
    处理 config 命令：显示或修改配置。

    参数:
        args: 解析后的命令行参数

    返回:
        退出码
    """
    config_manager = _get_config_manager(args)

    if args.set:
        key, _, value = args.set.partition("=")
        if not key or not value:
            print("格式无效。请使用: key=value")
            return 1

        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config_manager.set_value(key, value)
        print(f"已设置 {key} = {value}")
    else:
        print(json.dumps(config_manager.get_config(), indent=2, ensure_ascii=False))

    return 0
