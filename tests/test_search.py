"""Tests for the vault search scan."""

from __future__ import annotations

from pathlib import Path

import pytest

from obsidian_tracker.errors import MissingArgument
from obsidian_tracker.vault import projects
from obsidian_tracker.vault.search import search, tag_pattern


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    projects.create_project(root, "Alpha", "demo")
    (root / "Alpha" / "Release notes.md").write_text(
        "Shipping soon #release\n", encoding="utf-8"
    )
    return root


class TestTagPattern:
    @pytest.mark.parametrize(
        "content", ["#release", "#release\n", "see #release now", "[#release]", "#RELEASE "]
    )
    def test_matches_whole_tag(self, content: str):
        assert tag_pattern("release").search(content)

    @pytest.mark.parametrize("content", ["#releases", "#release-1", "release", "#release."])
    def test_rejects_partial(self, content: str):
        assert not tag_pattern("release").search(content)

    def test_escapes_regex_characters(self):
        assert tag_pattern("c++").search("#c++ ")
        assert not tag_pattern("a.b").search("#axb ")


class TestSearch:
    def test_tag_search(self, vault: Path):
        results = search(vault, "tag:release")
        assert results == [
            {"project": "Alpha", "file": "Release notes.md", "match": "tag:#release"}
        ]

    def test_partial_tag_does_not_match(self, vault: Path):
        assert search(vault, "tag:releas") == []

    def test_project_tag_in_dashboard(self, vault: Path):
        results = search(vault, "tag:alpha")
        assert [r["file"] for r in results] == ["!Project Dashboard.md"]

    def test_content_search_case_insensitive(self, vault: Path):
        results = search(vault, "SHIPPING")
        assert results == [{"project": "Alpha", "file": "Release notes.md", "match": "content"}]

    def test_content_search_multiple_files(self, vault: Path):
        files = sorted(r["file"] for r in search(vault, "demo"))
        assert files == ["!Project Dashboard.md", "README.md"]

    def test_ignores_sessions_and_non_markdown(self, vault: Path):
        (vault / "Alpha" / "notes.txt").write_text("needle")
        sessions = vault / "Alpha" / "Sessions"
        sessions.mkdir()
        (sessions / "Session - 2026-02-18.md").write_text("needle")
        (vault / "top-level.md").write_text("needle")
        assert search(vault, "needle") == []

    def test_skips_undecodable_files(self, vault: Path):
        (vault / "Alpha" / "binary.md").write_bytes(b"\xff\xfe needle")
        (vault / "Alpha" / "ok.md").write_text("needle")
        assert [r["file"] for r in search(vault, "needle")] == ["ok.md"]

    def test_blank_query(self, vault: Path):
        with pytest.raises(MissingArgument):
            search(vault, "  ")

    def test_empty_tag(self, vault: Path):
        with pytest.raises(MissingArgument):
            search(vault, "tag:")
