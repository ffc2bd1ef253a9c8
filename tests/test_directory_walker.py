"""Tests for recursive directory traversal"""

import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from portafs.core.errors import DirectoryNotFound, InvalidOption
from portafs.core.paths import FsPath
from portafs.infrastructure.filesystem import (
    DirectoryWalker,
    IncludeDirectories,
    IfMissing,
    collect_files,
    walk_directory,
)


def label(path: FsPath) -> str:
    if path.is_directory:
        return path.directory[-1]
    return path.file_name


def labels(root: Path, **options) -> list:
    return [label(p) for p in collect_files(root, **options)]


def is_sub(path: FsPath) -> bool:
    return path.is_directory and path.directory[-1] == "sub"


class TestWalkFilesOnly:
    """Test traversal without visiting directories"""

    def test_visits_every_file_once(self, flat_tree: Path):
        visited = labels(flat_tree, include_directories="none")

        assert sorted(visited) == ["a.txt", "b.txt", "d.txt"]

    def test_does_not_visit_directories(self, flat_tree: Path):
        visited = collect_files(flat_tree, include_directories=IncludeDirectories.NONE)

        assert all(p.is_file for p in visited)

    def test_filter_applies_to_files(self, flat_tree: Path):
        (flat_tree / "c" / "skip.log").write_text("log")

        visited = labels(flat_tree, include_directories="none", test=lambda p: p.type == "txt")

        assert sorted(visited) == ["a.txt", "b.txt", "d.txt"]

    def test_visitor_receives_paths(self, flat_tree: Path):
        visit = Mock()

        walk_directory(flat_tree, visit, include_directories="none")

        assert visit.call_count == 3
        for call in visit.call_args_list:
            assert isinstance(call.args[0], FsPath)


class TestWalkOrdering:
    """Test depth-first and breadth-first directory visits"""

    def test_depth_first_visits_children_before_self(self, nested_tree: Path):
        visited = labels(nested_tree, include_directories="depth_first")

        assert visited == ["f", "g", "sub", nested_tree.name]

    def test_depth_first_is_the_default(self, nested_tree: Path):
        assert labels(nested_tree) == ["f", "g", "sub", nested_tree.name]
        assert DirectoryWalker().include_directories == IncludeDirectories.DEPTH_FIRST

    def test_false_means_files_only(self, nested_tree: Path):
        assert labels(nested_tree, include_directories=False) == ["f", "g"]

    def test_true_means_depth_first(self, nested_tree: Path):
        assert labels(nested_tree, include_directories=True) == labels(
            nested_tree, include_directories=IncludeDirectories.DEPTH_FIRST
        )

    def test_breadth_first_visits_self_before_children(self, nested_tree: Path):
        visited = labels(nested_tree, include_directories="breadth_first")

        assert visited == [nested_tree.name, "f", "sub", "g"]

    def test_breadth_first_prunes_rejected_directory(self, nested_tree: Path):
        visited = labels(
            nested_tree,
            include_directories=IncludeDirectories.BREADTH_FIRST,
            test=lambda p: not is_sub(p),
        )

        assert visited == [nested_tree.name, "f"]

    def test_breadth_first_rejected_root_visits_nothing(self, nested_tree: Path):
        visited = labels(
            nested_tree,
            include_directories=IncludeDirectories.BREADTH_FIRST,
            test=lambda p: not p.is_directory,
        )

        assert visited == []

    def test_depth_first_descends_into_rejected_directory(self, nested_tree: Path):
        visited = labels(
            nested_tree,
            include_directories=IncludeDirectories.DEPTH_FIRST,
            test=lambda p: not is_sub(p),
        )

        assert "g" in visited
        assert "sub" not in visited


class TestWalkOptions:
    """Test missing roots and option validation"""

    def test_missing_root_ignored(self, tmp_path: Path):
        visit = Mock()

        walk_directory(tmp_path / "missing", visit, if_missing="ignore")

        visit.assert_not_called()

    def test_missing_root_error(self, tmp_path: Path):
        with pytest.raises(DirectoryNotFound):
            walk_directory(tmp_path / "missing", Mock(), if_missing=IfMissing.ERROR)

    def test_file_root_is_not_a_directory(self, flat_tree: Path):
        with pytest.raises(DirectoryNotFound):
            walk_directory(flat_tree / "a.txt", Mock())

    def test_invalid_if_missing(self):
        with pytest.raises(InvalidOption) as exc_info:
            DirectoryWalker(if_missing="skip")

        assert exc_info.value.option == "if_missing"

    def test_invalid_include_directories(self):
        with pytest.raises(InvalidOption):
            DirectoryWalker(include_directories="sideways")

    def test_invalid_option_fails_before_io(self, tmp_path: Path):
        visit = Mock()

        with pytest.raises(InvalidOption):
            walk_directory(tmp_path / "missing", visit, if_missing="maybe")

        visit.assert_not_called()


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
class TestWalkSymlinks:
    """Test symlink handling during traversal"""

    def test_unfollowed_directory_link_is_visited_as_file(self, nested_tree: Path):
        (nested_tree / "link").symlink_to(nested_tree / "sub")

        visited = labels(nested_tree, include_directories="none", follow_symlinks=False)

        assert sorted(visited) == ["f", "g", "link"]

    def test_symlink_cycle_terminates(self, nested_tree: Path):
        (nested_tree / "sub" / "loop").symlink_to(nested_tree)

        visited = labels(nested_tree, include_directories="none", follow_symlinks=True)

        assert sorted(visited) == ["f", "g"]
