"""Recursive directory traversal"""
import os
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Union

from portafs.core.errors import DirectoryNotFound, InvalidOption
from portafs.core.paths import (
    FsPath,
    PathLike,
    parse_path,
    pathname_as_directory,
    to_native,
)
from portafs.infrastructure.logging import get_logger
from .directory_lister import DirectoryLister

logger = get_logger(__name__)

Visitor = Callable[[FsPath], None]
Predicate = Callable[[FsPath], bool]


class IncludeDirectories(str, Enum):
    """Whether and when directories themselves are visited"""
    NONE = "none"
    DEPTH_FIRST = "depth_first"
    BREADTH_FIRST = "breadth_first"


class IfMissing(str, Enum):
    """What to do when the traversal root is absent"""
    ERROR = "error"
    IGNORE = "ignore"


def resolve_include_directories(
    value: Union[IncludeDirectories, str, bool, None]
) -> IncludeDirectories:
    # True or None ask for directories without naming an order
    if value is True or value is None:
        return IncludeDirectories.DEPTH_FIRST
    if value is False:
        return IncludeDirectories.NONE
    try:
        return IncludeDirectories(value)
    except ValueError:
        raise InvalidOption(
            "include_directories", value, [m.value for m in IncludeDirectories]
        ) from None


def resolve_if_missing(value: Union[IfMissing, str]) -> IfMissing:
    try:
        return IfMissing(value)
    except ValueError:
        raise InvalidOption("if_missing", value, [m.value for m in IfMissing]) from None


def _accept_all(path: FsPath) -> bool:
    return True


class DirectoryWalker:
    """Applies a visitor to every file (and optionally directory) below a root"""

    def __init__(
        self,
        include_directories: Union[IncludeDirectories, str, bool, None] = IncludeDirectories.DEPTH_FIRST,
        test: Optional[Predicate] = None,
        if_missing: Union[IfMissing, str] = IfMissing.ERROR,
        follow_symlinks: bool = True,
        lister: Optional[DirectoryLister] = None,
    ):
        self.include_directories = resolve_include_directories(include_directories)
        self.if_missing = resolve_if_missing(if_missing)
        self.test = test or _accept_all
        self.follow_symlinks = follow_symlinks
        self.lister = lister or DirectoryLister()

    def walk(self, directory: PathLike, visit: Visitor) -> None:
        """
        Traverse ``directory`` calling ``visit`` on accepted paths

        Raises:
            DirectoryNotFound: If the root is missing and ``if_missing`` is ``error``
        """
        root = pathname_as_directory(parse_path(directory))

        if not to_native(root).is_dir():
            if self.if_missing == IfMissing.IGNORE:
                logger.debug("walk_root_missing_ignored", root=str(root))
                return
            raise DirectoryNotFound(root)

        logger.debug(
            "walk_started",
            root=str(root),
            include_directories=self.include_directories.value,
            follow_symlinks=self.follow_symlinks,
        )
        self._walk_directory(root, visit, frozenset())

    def _walk_directory(
        self, directory: FsPath, visit: Visitor, ancestors: FrozenSet[str]
    ) -> None:
        mode = self.include_directories

        if self.follow_symlinks:
            identity = os.path.realpath(to_native(directory))
            if identity in ancestors:
                logger.warning("symlink_cycle_skipped", path=str(directory))
                return
            ancestors = ancestors | {identity}

        if mode == IncludeDirectories.BREADTH_FIRST:
            if not self.test(directory):
                return
            visit(directory)

        for entry in self.lister.list_directory(directory, self.follow_symlinks):
            if entry.is_directory:
                self._walk_directory(entry.path, visit, ancestors)
            elif self.test(entry.path):
                visit(entry.path)

        if mode == IncludeDirectories.DEPTH_FIRST and self.test(directory):
            visit(directory)


def walk_directory(
    directory: PathLike,
    visit: Visitor,
    include_directories: Union[IncludeDirectories, str, bool, None] = IncludeDirectories.DEPTH_FIRST,
    test: Optional[Predicate] = None,
    if_missing: Union[IfMissing, str] = IfMissing.ERROR,
    follow_symlinks: bool = True,
) -> None:
    DirectoryWalker(
        include_directories=include_directories,
        test=test,
        if_missing=if_missing,
        follow_symlinks=follow_symlinks,
    ).walk(directory, visit)


def collect_files(
    directory: PathLike,
    include_directories: Union[IncludeDirectories, str, bool, None] = IncludeDirectories.DEPTH_FIRST,
    test: Optional[Predicate] = None,
    if_missing: Union[IfMissing, str] = IfMissing.ERROR,
    follow_symlinks: bool = True,
) -> List[FsPath]:
    """Walk ``directory`` and return the visited paths in visit order"""
    visited: List[FsPath] = []
    walk_directory(
        directory,
        visited.append,
        include_directories=include_directories,
        test=test,
        if_missing=if_missing,
        follow_symlinks=follow_symlinks,
    )
    return visited
