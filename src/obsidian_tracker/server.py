"""MCP Server: obsidian-tracker (projects, bugs and work sessions in a vault).

Protocol: JSON-RPC 2.0 over stdio (NDJSON). Logs go to stderr.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Mapping
from typing import TextIO

from obsidian_tracker.config import TrackerSettings
from obsidian_tracker.tools.tracker_tools import TOOLS, ToolFn, call_tool, get_tracker_tools

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────

SERVER_NAME = "obsidian-tracker"
SERVER_VERSION = "2.0.0"
PROTOCOL_VERSION = "2024-11-05"

# ── JSON-RPC 2.0 helpers ─────────────────────────────────────


def jsonrpc_result(req_id, result):
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


def jsonrpc_error(req_id, code, message):
    return {"jsonrpc": "2.0", "id": req_id, "error": {"code": code, "message": message}}


def tool_result(payload: dict, is_error: bool = False) -> dict:
    result: dict = {"content": [{"type": "text", "text": json.dumps(payload, indent=2)}]}
    if is_error:
        result["isError"] = True
    return result


# ── Request handler ──────────────────────────────────────────


async def handle_request(req: dict, tools: Mapping[str, ToolFn]) -> dict | None:
    req_id = req.get("id")
    method = req.get("method", "")

    # Notifications (no id) get no response
    if req_id is None:
        if method == "notifications/initialized":
            logger.info("Client initialized")
        return None

    if method == "initialize":
        return jsonrpc_result(req_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        })

    if method == "tools/list":
        return jsonrpc_result(req_id, {"tools": TOOLS})

    if method == "tools/call":
        params = req.get("params") or {}
        if not isinstance(params, dict):
            return jsonrpc_error(req_id, -32602, "Invalid params: expected an object")
        tool_name = params.get("name", "")
        args = params.get("arguments") or {}
        if not isinstance(tool_name, str) or not isinstance(args, dict):
            return jsonrpc_error(
                req_id, -32602, "Invalid params: name must be a string, arguments an object"
            )
        try:
            payload, is_error = call_tool(tools, tool_name, args)
        except Exception as e:
            logger.exception("Tool %s crashed", tool_name)
            payload, is_error = {"error": f"Internal error: {e}"}, True
        return jsonrpc_result(req_id, tool_result(payload, is_error))

    if method == "ping":
        return jsonrpc_result(req_id, {})

    return jsonrpc_error(req_id, -32601, f"Method not found: {method}")


# ── Stdio transport (NDJSON) ─────────────────────────────────


def _write(out: TextIO, response: dict) -> None:
    out.write(json.dumps(response) + "\n")
    out.flush()


async def serve_stream(
    reader: asyncio.StreamReader, out: TextIO, tools: Mapping[str, ToolFn]
) -> None:
    """Answer one request per line until EOF. Bad lines are logged and skipped."""
    while True:
        line = await reader.readline()
        if not line:
            break
        line = line.decode("utf-8", errors="replace").strip()
        if not line:
            continue

        try:
            req = json.loads(line)
            if not isinstance(req, dict):
                logger.warning("Invalid request: %s", line[:200])
                _write(out, jsonrpc_error(None, -32600, "Invalid Request: expected an object"))
                continue
            logger.debug("<- %s", req.get("method", "?"))
            response = await handle_request(req, tools)
            if response:
                _write(out, response)
        except json.JSONDecodeError as e:
            logger.warning("Parse error: %s", e)
        except Exception:
            logger.exception("Handler error")


async def main(settings: TrackerSettings) -> None:
    logger.info("Starting (config_file=%s)", settings.state_file)
    tools = get_tracker_tools(settings)

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await asyncio.get_running_loop().connect_read_pipe(lambda: protocol, sys.stdin)

    await serve_stream(reader, sys.stdout, tools)
