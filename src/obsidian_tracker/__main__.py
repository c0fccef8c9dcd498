"""Entry point: python -m obsidian_tracker [serve|config]

- No args / "serve": MCP server on stdio
- "config":          Print the resolved configuration as JSON
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from obsidian_tracker.config import load_settings


def _setup_logging(level: str) -> None:
    # stdout carries the protocol
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _run_serve() -> None:
    settings = load_settings()
    _setup_logging(settings.log_level)

    from obsidian_tracker.server import main as serve

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass


def _run_config() -> None:
    settings = load_settings()
    _setup_logging(settings.log_level)

    from obsidian_tracker.tools.tracker_tools import call_tool, get_tracker_tools

    payload, _ = call_tool(get_tracker_tools(settings), "getConfig", {})
    print(json.dumps(payload, indent=2))


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "serve"

    if cmd == "serve":
        _run_serve()
    elif cmd == "config":
        _run_config()
    else:
        print("Usage: python -m obsidian_tracker [serve|config]", file=sys.stderr)
        print("  serve   MCP server on stdio (default)", file=sys.stderr)
        print("  config  Print resolved configuration", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
