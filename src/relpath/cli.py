"""Command line interface for relpath."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from .config import ConfigLoader
from .errors import NotAnAncestorError
from .logging_utils import setup_logger
from .os_info import AUTO, UNIX, WINDOWS, OSInformation, resolve_os_information
from .relative_path import RelativePath

LOGGER_NAME = "relpath"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="relpath", description="相對路徑正規化與運算工具")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="指定 relpath 資料夾位置（預設 ~/.relpath）",
    )

    subparsers = parser.add_subparsers(dest="command")

    normalize_parser = subparsers.add_parser("normalize", help="正規化路徑")
    normalize_parser.add_argument("path", help="原始路徑")

    inspect_parser = subparsers.add_parser("inspect", help="拆解路徑並輸出 JSON")
    inspect_parser.add_argument("path", help="原始路徑")

    native_parser = subparsers.add_parser("native", help="以原生分隔符輸出路徑")
    native_parser.add_argument("path", help="原始路徑")
    native_parser.add_argument(
        "--os",
        dest="os_name",
        choices=[AUTO, UNIX, WINDOWS],
        default=None,
        help="目標作業系統慣例（預設讀取設定 os.convention）",
    )

    join_parser = subparsers.add_parser("join", help="串接多段路徑")
    join_parser.add_argument("paths", nargs="+", help="路徑片段")

    relative_parser = subparsers.add_parser("relative-to", help="計算相對於上層路徑的剩餘部分")
    relative_parser.add_argument("path", help="完整路徑")
    relative_parser.add_argument("base", help="上層路徑")

    drop_parser = subparsers.add_parser("drop-first", help="移除開頭的路徑片段")
    drop_parser.add_argument("path", help="原始路徑")
    drop_parser.add_argument("count", type=int, help="要移除的片段數")

    config_parser = subparsers.add_parser("config", help="設定管理")
    config_sub = config_parser.add_subparsers(dest="config_command")
    config_get = config_sub.add_parser("get", help="讀取設定")
    config_get.add_argument("key", help="設定鍵，例如 os.convention")
    config_set = config_sub.add_parser("set", help="寫入設定")
    config_set.add_argument("key", help="設定鍵")
    config_set.add_argument("value", help="設定值（YAML 格式）")
    config_sub.add_parser("show", help="顯示合併後的設定與來源")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    data_dir = Path(args.data_dir).expanduser() if args.data_dir else None
    loader = ConfigLoader(data_dir=data_dir)
    logger = _setup_cli_logger(loader)

    try:
        if args.command == "normalize":
            print(RelativePath.from_unsanitized_input(args.path))
        elif args.command == "inspect":
            print(json.dumps(_describe(RelativePath.from_unsanitized_input(args.path)), ensure_ascii=False))
        elif args.command == "native":
            _handle_native(loader, args)
        elif args.command == "join":
            _handle_join(args)
        elif args.command == "relative-to":
            _handle_relative_to(args)
        elif args.command == "drop-first":
            print(RelativePath.from_unsanitized_input(args.path).drop_first(args.count))
        elif args.command == "config":
            _handle_config(loader, args)
        else:
            parser.print_help()
    except NotAnAncestorError as exc:
        logger.debug("relative-to 失敗：%s", exc)
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        logger.error("執行失敗：%s", exc, exc_info=True)
        print(f"發生錯誤：{exc}（詳細資訊請查看 logs/relpath.log）", file=sys.stderr)
        sys.exit(1)


def _setup_cli_logger(loader: ConfigLoader) -> logging.Logger:
    try:
        settings = loader.resolve().effective.get("logging", {})
    except RuntimeError:
        settings = {}
    log_dir = loader.logs_dir if settings.get("json_file", True) else None
    return setup_logger(
        LOGGER_NAME,
        log_dir,
        level=settings.get("level", "INFO"),
        console_level=settings.get("console_level", "WARNING"),
    )


def _describe(path: RelativePath) -> dict[str, Any]:
    return {
        "value": path.value,
        "file_name": path.file_name,
        "extension": path.extension.value,
        "depth": path.depth,
        "parent": path.parent.value,
        "top_parent": path.top_parent.value,
        "parts": list(path.parts),
    }


def _handle_native(loader: ConfigLoader, args: argparse.Namespace) -> None:
    path = RelativePath.from_unsanitized_input(args.path)
    if args.os_name:
        os_info = OSInformation.from_name(args.os_name)
    else:
        os_info = resolve_os_information(loader.resolve().effective)
    print(path.to_native_separators(os_info))


def _handle_join(args: argparse.Namespace) -> None:
    result = RelativePath("")
    for raw in args.paths:
        result = result.join(RelativePath.from_unsanitized_input(raw))
    print(result)


def _handle_relative_to(args: argparse.Namespace) -> None:
    path = RelativePath.from_unsanitized_input(args.path)
    base = RelativePath.from_unsanitized_input(args.base)
    print(path.relative_to(base))


def _handle_config(loader: ConfigLoader, args: argparse.Namespace) -> None:
    if args.config_command == "get":
        value = loader.get_value(args.key)
        if isinstance(value, dict):
            print(yaml.safe_dump(value, allow_unicode=True, sort_keys=False), end="")
        else:
            print(value)
        return
    if args.config_command == "set":
        try:
            parsed_value = yaml.safe_load(args.value)
        except yaml.YAMLError as exc:
            raise ValueError("設定值格式錯誤") from exc
        loader.set_value(args.key, parsed_value)
        print("已更新設定")
        return
    if args.config_command == "show":
        resolution = loader.resolve()
        print(yaml.safe_dump(resolution.annotated(), allow_unicode=True, sort_keys=False), end="")
        return
    raise ValueError("請指定設定指令")
