#!/usr/bin/env python3
"""
EchoMemo - CLI Main Entry Point
CLIアプリケーションのエントリーポイント
"""

import argparse
from pathlib import Path

from colorama import init as colorama_init  # type: ignore[import-untyped]

from .controller import CLIController


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """CLI引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="echo-memo",
        description="Dictate a transcript script into a formatted memo",
    )
    parser.add_argument(
        "-s",
        "--script",
        type=Path,
        default=None,
        metavar="PATH",
        help="Recognizer script (JSON Lines of interim/final/end/error steps)",
    )
    parser.add_argument(
        "-m",
        "--memo",
        type=str,
        default=None,
        metavar="ID",
        help="Continue dictating into an existing memo",
    )
    parser.add_argument(
        "-t",
        "--tag",
        dest="tags",
        action="append",
        default=[],
        metavar="TAG",
        help="Tag to attach to the saved memo (repeatable)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Additional TOML config file (overrides config.toml)",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List saved memos and exit",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Discard the dictated memo instead of saving it",
    )
    args = parser.parse_args(argv)
    if not args.list and args.script is None:
        parser.error("--script is required unless --list is given")
    return args


def main(argv: list[str] | None = None) -> None:
    """エントリーポイント"""
    # CLI引数解析
    args = parse_args(argv)

    # colorama初期化
    colorama_init(autoreset=True)

    controller = CLIController(
        script_path=args.script,
        memo_id=args.memo,
        tags=args.tags,
        config_path=args.config,
        save=not args.no_save,
    )

    # 一覧表示モード
    if args.list:
        controller.list_memos()
        return

    controller.run()


if __name__ == "__main__":
    main()
