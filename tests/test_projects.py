"""Tests for listing, reading and creating projects."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from obsidian_tracker.errors import MissingArgument, ProjectExists, ProjectNotFound
from obsidian_tracker.vault import frontmatter, layout, projects


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root


def _snapshot(root: Path) -> list[str]:
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


class TestProjectTag:
    def test_lowercase_and_hyphens(self):
        assert projects.project_tag("My  Cool\tProject") == "my-cool-project"


class TestCreateProject:
    def test_writes_dashboard_and_readme(self, vault: Path):
        path = projects.create_project(
            vault, "My Project", "demo", repository="https://x/y", today=date(2026, 2, 18)
        )
        assert path == vault / "My Project"
        fields, body = frontmatter.parse(layout.dashboard_path(path).read_text(encoding="utf-8"))
        assert fields == {
            "status": "Active",
            "description": "demo",
            "repository": "https://x/y",
            "localPath": "",
            "created": "2026-02-18",
            "tags": "[project, my-project]",
        }
        assert "# My Project - Dashboard" in body
        assert "- **Local path:** N/A" in body
        assert body.rstrip().endswith("#project #my-project")
        assert (path / "README.md").read_text(encoding="utf-8") == "# My Project\n\ndemo\n"

    def test_multiline_description(self, vault: Path):
        path = projects.create_project(vault, "Alpha", "line one\nline two")
        fields, body = frontmatter.parse(layout.dashboard_path(path).read_text(encoding="utf-8"))
        assert fields["description"] == "line one line two"
        assert "line one\nline two" in body

    def test_missing_arguments(self, vault: Path):
        with pytest.raises(MissingArgument, match="name"):
            projects.create_project(vault, None, "demo")
        with pytest.raises(MissingArgument, match="description"):
            projects.create_project(vault, "Alpha", "  ")
        assert _snapshot(vault) == []

    def test_existing_project_is_rejected(self, vault: Path):
        path = projects.create_project(vault, "Alpha", "first")
        original = layout.dashboard_path(path).read_text(encoding="utf-8")
        with pytest.raises(ProjectExists):
            projects.create_project(vault, "Alpha", "second")
        assert layout.dashboard_path(path).read_text(encoding="utf-8") == original

    def test_adopts_directory_without_dashboard(self, vault: Path):
        (vault / "Alpha").mkdir()
        (vault / "Alpha" / "README.md").write_text("hand written\n", encoding="utf-8")
        projects.create_project(vault, "Alpha", "demo")
        assert layout.dashboard_path(vault / "Alpha").exists()
        assert (vault / "Alpha" / "README.md").read_text(encoding="utf-8") == "hand written\n"


class TestListProjects:
    def test_empty(self, vault: Path):
        assert projects.list_projects(vault) == []

    def test_summaries(self, vault: Path):
        projects.create_project(vault, "Alpha", "demo")
        (vault / "Alpha" / "BUG - one.md").write_text("# one\n")
        (vault / "Alpha" / "BUG - two.md").write_text("# two\n")
        result = projects.list_projects(vault)
        assert result == [
            {
                "name": "Alpha",
                "status": "Active",
                "description": "demo",
                "bugs": 2,
                "path": str(vault / "Alpha"),
            }
        ]

    def test_skips_directories_without_dashboard(self, vault: Path):
        projects.create_project(vault, "Alpha", "demo")
        (vault / "Notes").mkdir()
        (vault / "loose.md").write_text("not a project")
        assert [p["name"] for p in projects.list_projects(vault)] == ["Alpha"]

    def test_dashboard_without_frontmatter(self, vault: Path):
        (vault / "Beta").mkdir()
        layout.dashboard_path(vault / "Beta").write_text("# Beta\n", encoding="utf-8")
        [summary] = projects.list_projects(vault)
        assert summary["status"] == "Unknown"
        assert summary["description"] == ""


class TestGetProject:
    def test_not_found_without_mutation(self, vault: Path):
        before = _snapshot(vault)
        with pytest.raises(ProjectNotFound, match="doesNotExist"):
            projects.get_project(vault, "doesNotExist")
        assert _snapshot(vault) == before

    def test_details(self, vault: Path):
        projects.create_project(vault, "Alpha", "demo")
        (vault / "Alpha" / "BUG - Crash on load.md").write_text("# c\n")
        sessions = vault / "Alpha" / "Sessions"
        sessions.mkdir()
        (sessions / "Session - 2026-02-18.md").write_text("log")
        (sessions / "scratch.txt").write_text("ignored")

        detail = projects.get_project(vault, "Alpha")
        assert detail["name"] == "Alpha"
        assert detail["frontmatter"]["status"] == "Active"
        assert "# Alpha - Dashboard" in detail["dashboard"]
        assert detail["bugs"] == ["Crash on load"]
        assert detail["sessions"] == ["Session - 2026-02-18.md"]

    def test_counts_bug_files_without_space_after_marker(self, vault: Path):
        projects.create_project(vault, "Alpha", "demo")
        (vault / "Alpha" / "BUG -typo.md").write_text("# typo\n")
        (vault / "Alpha" / "BUG - Crash.md").write_text("# crash\n")
        assert projects.get_project(vault, "Alpha")["bugs"] == ["Crash", "typo"]
        assert projects.list_projects(vault)[0]["bugs"] == 2

    def test_degrades_without_dashboard_or_sessions(self, vault: Path):
        (vault / "Bare").mkdir()
        detail = projects.get_project(vault, "Bare")
        assert detail["frontmatter"] == {}
        assert detail["dashboard"] == projects.NO_DASHBOARD
        assert detail["bugs"] == []
        assert detail["sessions"] == []
