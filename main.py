"""CLI entrypoint: look up and hydrate Hypatia content."""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console

from config import get_settings
from retriever import ContentRetriever
from utils import ContentRetrieverError, setup_logger


logger = logging.getLogger("retriever.cli")

EXAMPLE_URL = "http://www.cnn.com/2016/02/18/entertainment/kanye-west-rants-feat/index.html"


def _timestamp(text: str) -> datetime:
    """ISO-8601 argument; a trailing Z means UTC."""
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid timestamp: {text!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hypatia content retriever")
    parser.add_argument("--timeout", type=float, default=None, help="request timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="fetch and hydrate the content model for a url")
    lookup.add_argument("url", nargs="?", default=EXAMPLE_URL)
    lookup.add_argument("--no-hydrate", action="store_true", help="print the base content model only")
    lookup.add_argument("--factors-url", default=None, help="content factors JSON url")

    recent = sub.add_parser("recent", help="list recently published content")
    recent.add_argument("--type", dest="content_type", default=None)
    recent.add_argument("--data-source", default=None)
    recent.add_argument("--rows", type=int, default=None)
    recent.add_argument("--since", type=_timestamp, default=None, help="ISO-8601 timestamp")

    return parser


async def _run(args: argparse.Namespace) -> dict:
    url = getattr(args, "url", "") or ""
    async with ContentRetriever(url) as retriever:
        if args.timeout is not None:
            retriever.timeout = args.timeout

        if args.command == "recent":
            return await retriever.get_recent_publishes(
                content_type=args.content_type,
                data_source=args.data_source,
                rows=args.rows,
                since=args.since,
            )

        if args.no_hydrate:
            return await retriever.get_base_content_model()
        return await retriever.retrieve(factors_url=args.factors_url)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    log_settings = get_settings().logging
    setup_logger(
        level=log_settings.level,
        log_file=log_settings.file,
        use_rich=log_settings.use_rich,
        debug=args.debug,
    )

    try:
        result = asyncio.run(_run(args))
    except ContentRetrieverError as exc:
        logger.error(str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    Console().print_json(json.dumps(result, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
