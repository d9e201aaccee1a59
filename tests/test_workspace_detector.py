"""Tests for project root discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jestgen.agents.detectors.workspace import find_project_root

if TYPE_CHECKING:
    from pathlib import Path


class TestFindProjectRoot:
    def test_package_json_marks_root(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")
        source = tmp_path / "src" / "lib" / "math.ts"
        source.parent.mkdir(parents=True)
        source.write_text("", encoding="utf-8")

        assert find_project_root(source) == tmp_path.resolve()

    def test_git_directory_marks_root(self, tmp_path: Path) -> None:
        (tmp_path / "repo" / ".git").mkdir(parents=True)
        source = tmp_path / "repo" / "src" / "math.ts"
        source.parent.mkdir(parents=True)
        source.write_text("", encoding="utf-8")

        assert find_project_root(source) == (tmp_path / "repo").resolve()

    def test_nearest_marker_wins(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / "packages" / "web").mkdir(parents=True)
        (tmp_path / "packages" / "web" / "package.json").write_text("{}", encoding="utf-8")
        source = tmp_path / "packages" / "web" / "index.js"
        source.write_text("", encoding="utf-8")

        assert find_project_root(source) == (tmp_path / "packages" / "web").resolve()

    def test_falls_back_to_source_directory(self, tmp_path: Path) -> None:
        source = tmp_path / "loose" / "math.ts"
        source.parent.mkdir()
        source.write_text("", encoding="utf-8")

        root = find_project_root(source, markers=("does-not-exist.marker",))

        assert root == source.parent.resolve()

    def test_directory_argument(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")
        assert find_project_root(tmp_path) == tmp_path.resolve()
