"""Tests for issuesync.discovery."""

from pathlib import Path

import pytest

from issuesync.discovery import list_files, list_matching_files


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    _touch(tmp_path / "welcome.issue.md")
    _touch(tmp_path / "README.md")
    _touch(tmp_path / "docs" / "release.issue.md")
    _touch(tmp_path / "docs" / "deep" / "nested" / "triage.issue.md")
    _touch(tmp_path / "docs" / "notes.md")
    _touch(tmp_path / "issue.md")
    return tmp_path


class TestListFiles:
    def test_lists_every_file_recursively(self, tree: Path) -> None:
        root = str(tree)
        assert sorted(list_files(root)) == sorted(
            [
                f"{root}/welcome.issue.md",
                f"{root}/README.md",
                f"{root}/docs/release.issue.md",
                f"{root}/docs/deep/nested/triage.issue.md",
                f"{root}/docs/notes.md",
                f"{root}/issue.md",
            ]
        )

    def test_directories_not_listed(self, tree: Path) -> None:
        assert f"{tree}/docs" not in list_files(str(tree))

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert list_files(str(tmp_path)) == []

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            list_files(str(tmp_path / "missing"))


class TestListMatchingFiles:
    def test_filters_by_double_extension(self, tree: Path) -> None:
        root = str(tree)
        assert sorted(list_matching_files(root)) == sorted(
            [
                f"{root}/welcome.issue.md",
                f"{root}/docs/release.issue.md",
                f"{root}/docs/deep/nested/triage.issue.md",
            ]
        )

    def test_bare_issue_md_not_matched(self, tree: Path) -> None:
        assert f"{tree}/issue.md" not in list_matching_files(str(tree))

    def test_custom_suffix(self, tree: Path) -> None:
        assert list_matching_files(str(tree), suffix="notes.md") == [f"{tree}/docs/notes.md"]

    def test_directory_named_like_issue_file_is_walked(self, tmp_path: Path) -> None:
        _touch(tmp_path / "odd.issue.md" / "inner.issue.md")
        assert list_matching_files(str(tmp_path)) == [f"{tmp_path}/odd.issue.md/inner.issue.md"]

    def test_trailing_slash_on_root(self, tree: Path) -> None:
        paths = list_matching_files(f"{tree}/")
        assert f"{tree}/welcome.issue.md" in paths
        assert not any("//" in path for path in paths)

    def test_relative_root_prefix_kept(self, tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tree)
        assert "./welcome.issue.md" in list_matching_files(".")
