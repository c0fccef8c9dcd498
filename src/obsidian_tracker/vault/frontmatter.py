"""Lightweight key: value frontmatter for vault documents.

Not YAML: the block is read line by line, each ``key: value`` line becomes a
string field, anything else inside the block is ignored. ``KeyValueHandler``
plugs this format into python-frontmatter so vault documents can be handled
as ``frontmatter.Post`` objects.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

import frontmatter
from frontmatter.default_handlers import BaseHandler

MARKER = "---"

_FIELD_LINE = re.compile(r"^(\w+):\s*(.*)$")
_KEY = re.compile(r"\w+")
_QUOTES = ("'", '"')


def _is_marker(line: str) -> bool:
    return line.rstrip("\r") == MARKER


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _needs_quotes(value: str) -> bool:
    return (
        not value
        or value != value.strip()
        or value[0] in _QUOTES
        or value[-1] in _QUOTES
    )


class KeyValueHandler(BaseHandler):
    """python-frontmatter handler for the ``---`` delimited key: value block."""

    FM_BOUNDARY = re.compile(r"^-{3}\r?$", re.MULTILINE)
    START_DELIMITER = END_DELIMITER = MARKER

    def detect(self, text: str) -> bool:
        return _is_marker(text.split("\n", 1)[0])

    def split(self, text: str) -> tuple[str, str]:
        """Return (block, body). Raises ValueError when there is no complete block."""
        lines = text.split("\n")
        inside = False
        block: list[str] = []
        for i, line in enumerate(lines):
            if not inside:
                if not _is_marker(line):
                    raise ValueError("document does not start with a frontmatter marker")
                inside = True
            elif _is_marker(line):
                return "\n".join(block), "\n".join(lines[i + 1 :])
            else:
                block.append(line)
        raise ValueError("unterminated frontmatter block")

    def load(self, fm: str) -> dict[str, str]:
        """Parse block lines. Duplicate keys: last wins; other lines are skipped."""
        fields: dict[str, str] = {}
        for line in fm.split("\n"):
            match = _FIELD_LINE.match(line.rstrip("\r"))
            if match:
                key, value = match.groups()
                fields[key] = _unquote(value.rstrip())
        return fields

    def export(self, metadata: Mapping[str, object], **kwargs) -> str:
        lines = []
        for key, value in metadata.items():
            if not _KEY.fullmatch(key):
                raise ValueError(f"invalid frontmatter key: {key!r}")
            text = str(value)
            if "\n" in text or "\r" in text:
                raise ValueError(f"frontmatter value for {key!r} spans multiple lines")
            if _needs_quotes(text):
                text = f'"{text}"'
            lines.append(f"{key}: {text}")
        return "\n".join(lines)


_HANDLER = KeyValueHandler()


def parse(text: str) -> tuple[dict[str, str], str]:
    """Split a document into (fields, body).

    Without an opening marker on the first line, or without a closing marker,
    the whole text is returned as the body with no fields.
    """
    try:
        block, body = _HANDLER.split(text)
    except ValueError:
        return {}, text
    return _HANDLER.load(block), body


def format(fields: Mapping[str, object], body: str) -> str:
    """Build a document: one ``key: value`` line per field, in the given order."""
    block = _HANDLER.export(fields)
    head = f"{MARKER}\n{block}\n{MARKER}\n" if block else f"{MARKER}\n{MARKER}\n"
    return head + body


def read_document(path: Path) -> frontmatter.Post:
    """Read and parse a vault document. OSError propagates to the caller."""
    fields, body = parse(path.read_text(encoding="utf-8"))
    post = frontmatter.Post(body, handler=_HANDLER)
    post.metadata.update(fields)
    return post
