"""CLI entry point: kmplibs [TOKEN] [--catalog PATH] [--output PATH] [--lenient] [-v]."""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from kmplibs.aggregator import run
from kmplibs.core.config import load_settings
from kmplibs.core.logging import setup_logging
from kmplibs.exceptions import ConfigError

log = structlog.get_logger("kmplibs.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kmplibs",
        description="Aggregate Kotlin Multiplatform library metadata into one JSON file",
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="GitHub token (default: $GITHUB_TOKEN, $GH_TOKEN or `gh auth token`)",
    )
    parser.add_argument("--catalog", default=None, help="Library catalog JSON file")
    parser.add_argument(
        "--output", default=None, help="Output JSON file (default: public/data.json)"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        default=None,
        help="Tolerate repositories without a license and stdlib dependencies without a version",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="HTTP timeout in seconds (default: none)"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every HTTP request and variant lookup (same as KMPLIBS_LOG_LEVEL=DEBUG)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else None)

    try:
        settings = load_settings(
            token=args.token,
            catalog=args.catalog,
            output=args.output,
            lenient=args.lenient,
            timeout=args.timeout,
        )
    except ConfigError as exc:
        log.error("config.invalid", error=str(exc))
        return 2

    if not settings.github_token:
        log.warning("github.no_token", hint="unauthenticated requests are heavily rate limited")

    try:
        asyncio.run(run(settings))
    except Exception:
        log.exception("aggregate.failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
