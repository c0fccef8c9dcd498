"""Bug reports and per-day session logs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone
from pathlib import Path

from obsidian_tracker.errors import InvalidArgument, MissingArgument, ProjectNotFound
from obsidian_tracker.vault import layout

logger = logging.getLogger(__name__)

PRIORITIES = ("critical", "high", "medium", "low")
DEFAULT_PRIORITY = "medium"


def _require_project(vault_root: Path, name: str | None) -> Path:
    name = layout.validate_project_name(name)
    path = layout.project_path(vault_root, name)
    if not layout.exists(path):
        raise ProjectNotFound(name)
    return path


def _require_text(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise MissingArgument(what)
    return value


def normalize_priority(priority: str | None) -> str:
    if priority is None or not priority.strip():
        return DEFAULT_PRIORITY
    value = priority.strip().lower()
    if value not in PRIORITIES:
        raise InvalidArgument(
            f"Invalid priority {priority!r}: expected one of {', '.join(PRIORITIES)}"
        )
    return value


def _render_bug(title: str, description: str, priority: str, day: str) -> str:
    return (
        f"# {title}\n\n"
        f"## Status\n"
        f"- **Priority:** {priority}\n"
        f"- **Status:** Open\n"
        f"- **Date:** {day}\n\n"
        f"## Description\n"
        f"{description}\n\n"
        f"## Attempted Fixes\n"
        f"| # | Action | Result |\n"
        f"|---|--------|--------|\n\n"
        f"## Next Steps\n\n"
        f"---\n"
        f"#bug #{priority}\n"
    )


def add_bug(
    vault_root: Path,
    project: str | None,
    title: str | None,
    description: str | None,
    priority: str | None = DEFAULT_PRIORITY,
    today: date | None = None,
) -> Path:
    """Write ``BUG - <title>.md``. A report with the same title is replaced."""
    path = _require_project(vault_root, project)
    title = layout.validate_bug_title(title)
    description = _require_text(description, "description")
    priority = normalize_priority(priority)

    bug = layout.bug_path(path, title)
    if bug.exists():
        logger.warning("Overwriting existing bug report %s", bug)
    day = (today or datetime.now(timezone.utc).date()).isoformat()
    layout.atomic_write_text(bug, _render_bug(title, description, priority, day))
    logger.info("Logged bug %r in %s (%s)", title, path.name, priority)
    return bug


def render_session_entry(
    goal: str,
    actions: Sequence[str] | None,
    results: str | None,
    next_steps: str | None,
    now: datetime,
) -> str:
    """One session block. Starts with a blank line so it can follow any content."""
    if actions:
        actions_text = "\n".join(f"- {a}" for a in actions)
    else:
        actions_text = "- No actions recorded"
    return (
        f"\n\n## Session - {now.strftime('%H:%M')} UTC\n\n"
        f"### Goal\n{goal}\n\n"
        f"### Actions\n{actions_text}\n\n"
        f"### Results\n{results or 'In progress...'}\n\n"
        f"### Next Time\n{next_steps or 'TBD'}\n\n"
        f"---\n"
    )


def add_session(
    vault_root: Path,
    project: str | None,
    goal: str | None,
    actions: Sequence[str] | None = None,
    results: str | None = None,
    next_steps: str | None = None,
    now: datetime | None = None,
) -> Path:
    """Append a session entry to today's log, creating the log if needed.

    Prior content is kept byte for byte; the new file content is swapped in
    with a rename so a crash leaves either the old or the new document.
    """
    path = _require_project(vault_root, project)
    goal = _require_text(goal, "goal")
    if isinstance(actions, str):
        actions = [actions]
    now = now or datetime.now(timezone.utc)

    sessions = layout.sessions_path(path)
    sessions.mkdir(parents=True, exist_ok=True)
    log_file = layout.session_file_path(sessions, now.date())

    try:
        existing = log_file.read_bytes()
    except FileNotFoundError:
        existing = b""

    entry = render_session_entry(goal, actions, results, next_steps, now)
    layout.atomic_write_bytes(log_file, existing + entry.encode("utf-8"))
    logger.info("Logged session for %s in %s", path.name, log_file.name)
    return log_file
