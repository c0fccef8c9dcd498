"""Vault layout and path helpers.

File names double as identifiers: a project is its directory name, a bug is
``BUG - <title>.md``, a session log is ``Sessions/Session - <date>.md``.
"""

from __future__ import annotations

import os
import re
from datetime import date
from pathlib import Path

from obsidian_tracker.errors import InvalidName, MissingArgument

DASHBOARD_FILENAME = "!Project Dashboard.md"
README_FILENAME = "README.md"
MD_EXT = ".md"
BUG_PREFIX = "BUG - "
BUG_MARKER = BUG_PREFIX.rstrip()
SESSIONS_DIRNAME = "Sessions"
SESSION_PREFIX = "Session - "

_UNSAFE_CHARS = re.compile(r"[/\\\x00-\x1f\x7f]")


def project_path(vault_root: Path, name: str) -> Path:
    return vault_root / name


def dashboard_path(project: Path) -> Path:
    return project / DASHBOARD_FILENAME


def readme_path(project: Path) -> Path:
    return project / README_FILENAME


def bug_path(project: Path, title: str) -> Path:
    return project / f"{BUG_PREFIX}{title}{MD_EXT}"


def sessions_path(project: Path) -> Path:
    return project / SESSIONS_DIRNAME


def session_file_path(sessions: Path, day: date) -> Path:
    return sessions / f"{SESSION_PREFIX}{day.isoformat()}{MD_EXT}"


def is_bug_file(filename: str) -> bool:
    return filename.startswith(BUG_MARKER)


def bug_title(filename: str) -> str:
    """Inverse of bug_path: strip the prefix and the extension, once each.

    Hand-made files such as ``BUG -typo.md`` lose the bare marker instead.
    """
    if filename.startswith(BUG_PREFIX):
        stem = filename.removeprefix(BUG_PREFIX)
    else:
        stem = filename.removeprefix(BUG_MARKER)
    return stem.removesuffix(MD_EXT)


def exists(path: Path) -> bool:
    """True only for an existing directory. Any error counts as absent."""
    try:
        return path.is_dir()
    except OSError:
        return False


def _validate_file_name(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise MissingArgument(what)
    if value in (".", "..") or _UNSAFE_CHARS.search(value):
        raise InvalidName(
            f"Invalid {what} {value!r}: path separators and control characters are not allowed"
        )
    if value != value.strip():
        raise InvalidName(f"Invalid {what} {value!r}: leading or trailing whitespace")
    return value


def validate_project_name(name: str | None) -> str:
    return _validate_file_name(name, "name")


def validate_bug_title(title: str | None) -> str:
    """Reject titles that would not survive the bug file name round trip."""
    title = _validate_file_name(title, "title")
    if title.startswith(BUG_MARKER) or title.lower().endswith(MD_EXT):
        raise InvalidName(
            f"Invalid title {title!r}: must not start with {BUG_MARKER!r} "
            f"or end with {MD_EXT!r}"
        )
    return title


def atomic_write_text(path: Path, content: str) -> None:
    atomic_write_bytes(path, content.encode("utf-8"))


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write to a sibling temp file, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
