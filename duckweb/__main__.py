"""Command line entry point: run the web tools outside an agent loop."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from duckweb import __version__
from duckweb.agent.tools.factory import build_web_tool_registry
from duckweb.config.loader import load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duckweb",
        description="DuckDuckGo search and webpage content tools.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search DuckDuckGo")
    search.add_argument("query", help="Search query")
    search.add_argument(
        "-n",
        "--max-results",
        type=int,
        default=None,
        help="Maximum number of results (1-20, default 10)",
    )

    fetch = sub.add_parser("fetch", help="Fetch a webpage as plain text")
    fetch.add_argument("url", help="Webpage URL")

    sub.add_parser("tools", help="Print tool definitions as JSON")
    return parser


async def run(args: argparse.Namespace) -> str:
    config = load_config(args.config)
    registry = build_web_tool_registry(config.tools.web)

    if args.command == "tools":
        return json.dumps(registry.get_definitions(), indent=2, ensure_ascii=False)

    if args.command == "search":
        params: dict = {"query": args.query}
        if args.max_results is not None:
            params["max_results"] = args.max_results
        return await registry.execute("search", params)

    return await registry.execute("fetch_content", {"url": args.url})


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    output = asyncio.run(run(args))
    print(output)
    return 1 if output.startswith("Error") else 0


if __name__ == "__main__":
    raise SystemExit(main())
