"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import (
    DEFAULT_NICKNAME,
    DEFAULT_PREFIX,
    DEFAULT_URL,
    AppConfig,
    default_config,
    load_config,
    parse_superusers,
    save_config,
)
from .kanban import print_banner
from .logformat import ColorFormatter

logger = logging.getLogger("hanabot")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the bot command."""
    parser = argparse.ArgumentParser(prog="hanabot", add_help=False)
    parser.add_argument("-d", action="store_true", help="Enable debug level log and higher.")
    parser.add_argument("-w", action="store_true", help="Enable warning level log and higher.")
    parser.add_argument("-h", action="store_true", help="Display this help.")
    parser.add_argument("-t", default="", help="Set AccessToken of WSClient.")
    parser.add_argument("-u", default=DEFAULT_URL, help="Set Url of WSClient.")
    parser.add_argument("-n", default=DEFAULT_NICKNAME, help="Set default nickname.")
    parser.add_argument("-p", default=DEFAULT_PREFIX, help="Set command prefix.")
    parser.add_argument("-c", default="", help="Run from config file.")
    parser.add_argument("-s", default="", help="Save default config to file and exit.")
    parser.add_argument("superusers", nargs="*", help="Superuser account ids.")
    return parser


def _setup_logging(level: int) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.terminator = ""
        handler.setFormatter(ColorFormatter())
        logger.addHandler(handler)
    logger.setLevel(level)


def _describe(config: AppConfig) -> str:
    urls = ", ".join(w.url for w in config.ws) or "-"
    return f"nickname={config.zero.nickname} prefix={config.zero.command_prefix!r} drivers={urls}"


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, build or load the configuration, and return an exit code."""
    print_banner()
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.h:
        print_banner()
        print("Usage:")
        parser.print_help()
        return 0

    level = logging.INFO
    if args.d and not args.w:
        level = logging.DEBUG
    if args.w:
        level = logging.WARNING
    _setup_logging(level)

    superusers = parse_superusers(args.superusers)

    if args.c:
        config = load_config(args.c)
        logger.info("[main] 从 %s 读取配置文件", args.c)
    else:
        config = default_config(args.u, args.t, args.n, args.p, superusers)
        if args.s:
            save_config(config, args.s)
            logger.info("[main] 配置文件已保存到 %s", args.s)
            return 0

    logger.info("[main] %s", _describe(config))
    return 0