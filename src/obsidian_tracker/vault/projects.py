"""Project repository: list, get and create projects in the vault."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path

from obsidian_tracker.errors import MissingArgument, ProjectExists, ProjectNotFound
from obsidian_tracker.vault import frontmatter, layout

logger = logging.getLogger(__name__)

NO_DASHBOARD = "No dashboard found"


def project_tag(name: str) -> str:
    """Tag derived from a project name: lower-case, whitespace runs to hyphens."""
    return re.sub(r"\s+", "-", name.lower())


def _one_line(text: str) -> str:
    return " ".join(text.splitlines())


def _bug_files(project: Path) -> list[str]:
    return sorted(
        entry.name
        for entry in project.iterdir()
        if entry.is_file() and layout.is_bug_file(entry.name)
    )


def list_projects(vault_root: Path) -> list[dict]:
    """Summaries of every project directory that has a readable dashboard."""
    projects: list[dict] = []
    for entry in vault_root.iterdir():
        if not layout.exists(entry):
            continue
        try:
            post = frontmatter.read_document(layout.dashboard_path(entry))
            bugs = len(_bug_files(entry))
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping %s: %s", entry.name, e)
            continue
        projects.append(
            {
                "name": entry.name,
                "status": post.get("status") or "Unknown",
                "description": post.get("description", ""),
                "bugs": bugs,
                "path": str(entry),
            }
        )
    return projects


def get_project(vault_root: Path, name: str | None) -> dict:
    """Dashboard fields and body plus bug titles and session files of one project."""
    name = layout.validate_project_name(name)
    path = layout.project_path(vault_root, name)
    if not layout.exists(path):
        raise ProjectNotFound(name)

    try:
        post = frontmatter.read_document(layout.dashboard_path(path))
        fields, body = dict(post.metadata), post.content
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("No dashboard for %s: %s", name, e)
        fields, body = {}, NO_DASHBOARD

    try:
        bugs = [layout.bug_title(f) for f in _bug_files(path)]
    except OSError as e:
        logger.debug("Cannot list bugs for %s: %s", name, e)
        bugs = []

    sessions_dir = layout.sessions_path(path)
    try:
        sessions = sorted(
            f.name for f in sessions_dir.iterdir() if f.name.endswith(layout.MD_EXT)
        )
    except OSError:
        sessions = []

    return {
        "name": name,
        "path": str(path),
        "frontmatter": fields,
        "dashboard": body,
        "bugs": bugs,
        "sessions": sessions,
    }


def _render_dashboard(
    name: str,
    description: str,
    repository: str | None,
    local_path: str | None,
    created: str,
) -> str:
    tag = project_tag(name)
    fields = {
        "status": "Active",
        "description": _one_line(description),
        "repository": _one_line(repository or ""),
        "localPath": _one_line(local_path or ""),
        "created": created,
        "tags": f"[project, {tag}]",
    }
    body = (
        f"\n"
        f"# {name} - Dashboard\n\n"
        f"## Status\n"
        f"- **Description:** {description}\n"
        f"- **Repository:** {repository or 'N/A'}\n"
        f"- **Local path:** {local_path or 'N/A'}\n"
        f"- **Status:** Active\n"
        f"- **Created:** {created}\n\n"
        f"## Plugins/Subprojects\n\n"
        f"## Known Issues\n\n"
        f"## Quick Commands\n\n"
        f"---\n"
        f"#project #{tag}\n"
    )
    return frontmatter.format(fields, body)


def create_project(
    vault_root: Path,
    name: str | None,
    description: str | None,
    repository: str | None = None,
    local_path: str | None = None,
    today: date | None = None,
) -> Path:
    """Create a project directory with dashboard and README.

    Refuses with ProjectExists when the project already has a dashboard; an
    existing directory without one is adopted. An existing README is kept.
    """
    name = layout.validate_project_name(name)
    if description is None or not description.strip():
        raise MissingArgument("description")

    path = layout.project_path(vault_root, name)
    dashboard = layout.dashboard_path(path)
    if dashboard.exists():
        raise ProjectExists(name)

    created = (today or datetime.now(timezone.utc).date()).isoformat()
    path.mkdir(parents=True, exist_ok=True)
    layout.atomic_write_text(
        dashboard, _render_dashboard(name, description, repository, local_path, created)
    )

    readme = layout.readme_path(path)
    if not readme.exists():
        layout.atomic_write_text(readme, f"# {name}\n\n{description}\n")

    logger.info("Created project: %s", name)
    return path
