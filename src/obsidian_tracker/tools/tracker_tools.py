"""MCP tools for project tracking in an Obsidian vault.

Each tool takes the raw argument mapping of a tools/call request and returns a
JSON-serialisable dict. Errors are raised as TrackerError; ``call_tool``
converts them into ``{"error": message}`` results so nothing crosses the
boundary as an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from obsidian_tracker.config import TrackerSettings
from obsidian_tracker.errors import InvalidArgument, IOFailure, MissingArgument, TrackerError
from obsidian_tracker.vault import logbook, projects
from obsidian_tracker.vault import search as vault_search
from obsidian_tracker.vault.state import (
    ConfigStore,
    VaultConfig,
    expand_home,
    require_vault,
    resolve_vault_path,
)

logger = logging.getLogger(__name__)

NOT_SET = "NOT SET"

ToolFn = Callable[[Mapping[str, Any]], dict]

TOOLS = [
    {
        "name": "initVault",
        "description": (
            "Initialize Obsidian Tracker with vault path. "
            "MUST be called first before using other tools."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "vaultPath": {
                    "type": "string",
                    "description": (
                        "Full path to Obsidian vault Projects folder "
                        "(e.g., /Users/username/Documents/Obsidian/Projects)"
                    ),
                },
            },
            "required": ["vaultPath"],
        },
    },
    {
        "name": "getConfig",
        "description": "Get current Obsidian Tracker configuration",
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": "listProjects",
        "description": "List all projects from Obsidian vault",
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": "getProject",
        "description": "Get details for a specific project",
        "inputSchema": {
            "type": "object",
            "properties": {"name": {"type": "string", "description": "Project name"}},
            "required": ["name"],
        },
    },
    {
        "name": "createProject",
        "description": "Create a new project in Obsidian",
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Project name"},
                "description": {"type": "string", "description": "Project description"},
                "repository": {"type": "string", "description": "Repository URL"},
                "localPath": {"type": "string", "description": "Local file path"},
            },
            "required": ["name", "description"],
        },
    },
    {
        "name": "addBug",
        "description": "Add a bug report to a project",
        "inputSchema": {
            "type": "object",
            "properties": {
                "project": {"type": "string", "description": "Project name"},
                "title": {"type": "string", "description": "Bug title"},
                "description": {"type": "string", "description": "Bug description"},
                "priority": {
                    "type": "string",
                    "enum": list(logbook.PRIORITIES),
                    "description": "Bug priority",
                },
            },
            "required": ["project", "title", "description"],
        },
    },
    {
        "name": "addSession",
        "description": "Add a session log to a project",
        "inputSchema": {
            "type": "object",
            "properties": {
                "project": {"type": "string", "description": "Project name"},
                "goal": {"type": "string", "description": "Session goal"},
                "actions": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Actions taken",
                },
                "results": {"type": "string", "description": "Results achieved"},
                "nextSteps": {"type": "string", "description": "Next steps"},
            },
            "required": ["project", "goal"],
        },
    },
    {
        "name": "search",
        "description": "Search projects by tags or content",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query (supports tag: syntax)",
                },
            },
            "required": ["query"],
        },
    },
]


def _str_arg(args: Mapping[str, Any], key: str) -> str | None:
    value = args.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidArgument(f"Argument {key!r} must be a string")
    return value


def _list_arg(args: Mapping[str, Any], key: str) -> list[str] | None:
    value = args.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidArgument(f"Argument {key!r} must be a list of strings")
    return value


def get_tracker_tools(settings: TrackerSettings) -> dict[str, ToolFn]:
    """Return a dict of tool_name -> callable for vault operations.

    Config and vault state are re-read from disk on every call.
    """
    store = ConfigStore(settings.state_file)

    def vault() -> Path:
        return require_vault(store.load(), settings.vault_env)

    def init_vault(args: Mapping[str, Any]) -> dict:
        """Persist the vault path, creating the directory if needed."""
        raw = _str_arg(args, "vaultPath")
        if raw is None or not raw.strip():
            raise MissingArgument("vaultPath")
        vault_path = Path(expand_home(raw.strip())).absolute()
        if not vault_path.is_dir():
            try:
                vault_path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise IOFailure(f'Cannot create vault path "{vault_path}": {e}') from e
        store.save(VaultConfig(vault_path=str(vault_path), initialized=True))
        logger.info("Vault initialized at %s", vault_path)
        return {
            "success": True,
            "message": "Obsidian Tracker initialized successfully!",
            "vaultPath": str(vault_path),
            "configFile": str(store.path),
        }

    def get_config(args: Mapping[str, Any]) -> dict:
        config = store.load()
        resolved = resolve_vault_path(config, settings.vault_env)
        return {
            "initialized": config.initialized,
            "vaultPath": str(resolved) if resolved else NOT_SET,
            "configFile": str(store.path),
            "envVar": settings.vault_env or NOT_SET,
        }

    def list_projects(args: Mapping[str, Any]) -> dict:
        return {"projects": projects.list_projects(vault())}

    def get_project(args: Mapping[str, Any]) -> dict:
        return projects.get_project(vault(), _str_arg(args, "name"))

    def create_project(args: Mapping[str, Any]) -> dict:
        name = _str_arg(args, "name")
        path = projects.create_project(
            vault(),
            name,
            _str_arg(args, "description"),
            repository=_str_arg(args, "repository"),
            local_path=_str_arg(args, "localPath"),
        )
        return {
            "success": True,
            "path": str(path),
            "message": f'Project "{name}" created successfully',
        }

    def add_bug(args: Mapping[str, Any]) -> dict:
        title = _str_arg(args, "title")
        path = logbook.add_bug(
            vault(),
            _str_arg(args, "project"),
            title,
            _str_arg(args, "description"),
            priority=_str_arg(args, "priority"),
        )
        return {"success": True, "path": str(path), "message": f'Bug report created: "{title}"'}

    def add_session(args: Mapping[str, Any]) -> dict:
        path = logbook.add_session(
            vault(),
            _str_arg(args, "project"),
            _str_arg(args, "goal"),
            actions=_list_arg(args, "actions"),
            results=_str_arg(args, "results"),
            next_steps=_str_arg(args, "nextSteps"),
        )
        return {"success": True, "path": str(path), "message": "Session logged"}

    def search(args: Mapping[str, Any]) -> dict:
        query = _str_arg(args, "query")
        results = vault_search.search(vault(), query)
        return {"query": query, "results": results, "count": len(results)}

    return {
        "initVault": init_vault,
        "getConfig": get_config,
        "listProjects": list_projects,
        "getProject": get_project,
        "createProject": create_project,
        "addBug": add_bug,
        "addSession": add_session,
        "search": search,
    }


def call_tool(
    tools: Mapping[str, ToolFn],
    name: str,
    arguments: Mapping[str, Any] | None,
) -> tuple[dict, bool]:
    """Run one tool. Returns (payload, is_error)."""
    fn = tools.get(name)
    if fn is None:
        return {"error": f"Unknown tool: {name}"}, True
    try:
        return fn(arguments or {}), False
    except TrackerError as e:
        logger.info("%s failed: %s", name, e)
        return {"error": str(e)}, True
    except OSError as e:
        logger.warning("%s I/O failure: %s", name, e)
        return {"error": str(IOFailure(str(e)))}, True
