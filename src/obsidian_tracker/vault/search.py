"""Linear scan over project documents: tag or substring match."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from obsidian_tracker.errors import MissingArgument
from obsidian_tracker.vault import layout

logger = logging.getLogger(__name__)

TAG_PREFIX = "tag:"


def tag_pattern(tag: str) -> re.Pattern[str]:
    """``#tag`` followed by whitespace, ``]`` or end of content."""
    return re.compile(rf"#{re.escape(tag)}(?=\s|\]|\Z)", re.IGNORECASE)


def _project_documents(vault_root: Path):
    """Yield (project, file) for every .md file directly inside a project dir."""
    for entry in vault_root.iterdir():
        if not layout.exists(entry):
            continue
        try:
            files = list(entry.iterdir())
        except OSError as e:
            logger.debug("Skipping project %s: %s", entry.name, e)
            continue
        for f in files:
            if f.name.endswith(layout.MD_EXT):
                yield entry.name, f


def search(vault_root: Path, query: str | None) -> list[dict]:
    """Return {project, file, match} for every matching document, in scan order."""
    if query is None or not query.strip():
        raise MissingArgument("query")

    if query.startswith(TAG_PREFIX):
        tag = query[len(TAG_PREFIX) :].strip()
        if not tag:
            raise MissingArgument("tag name")
        pattern = tag_pattern(tag)
        label = f"tag:#{tag}"

        def matches(content: str) -> bool:
            return pattern.search(content) is not None

    else:
        needle = query.lower()
        label = "content"

        def matches(content: str) -> bool:
            return needle in content.lower()

    results: list[dict] = []
    for project, path in _project_documents(vault_root):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable %s: %s", path, e)
            continue
        if matches(content):
            results.append({"project": project, "file": path.name, "match": label})
    logger.debug("search %r: %d result(s)", query, len(results))
    return results
