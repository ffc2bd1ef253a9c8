"""Enumeration of a directory's immediate entries"""
import os
from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, Set

from portafs.core.errors import DirectoryNotFound, FilesystemError, WildcardNotAllowed
from portafs.core.paths import (
    DirectoryEntry,
    EntryKind,
    FsPath,
    PathLike,
    canonicalize,
    directory_wildcard,
    parse_path,
    pathname_as_directory,
    to_native,
)
from portafs.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _scan_wildcard(wildcard: FsPath) -> Iterator[os.DirEntry]:
    """OS enumeration of every entry the wildcard matches, in name order"""
    directory = to_native(replace(wildcard, name=None, type=None, wildcard=False))
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise DirectoryNotFound(directory) from e
    except OSError as e:
        raise FilesystemError(
            f"Failed to list directory: {e}", {"path": str(directory)}
        ) from e
    return iter(entries)


def _entry_path(native: str, is_directory: bool = False) -> FsPath:
    path = canonicalize(native)
    return pathname_as_directory(path) if is_directory else path


class DirectoryLister:
    """Lists immediate entries of concrete directories"""

    def list_directory(
        self, directory: PathLike, follow_symlinks: bool = True
    ) -> List[DirectoryEntry]:
        """
        List the immediate entries of ``directory``

        Args:
            directory: Concrete directory to list
            follow_symlinks: Resolve entries to their real targets and drop
                entries that resolve to the same place

        Returns:
            Entries sorted by name; directories are directory-form

        Raises:
            WildcardNotAllowed: If ``directory`` is a wildcard
            DirectoryNotFound: If ``directory`` does not exist
        """
        directory = parse_path(directory)
        if directory.wildcard:
            raise WildcardNotAllowed(directory, "list_directory")

        wildcard = directory_wildcard(directory)
        if follow_symlinks:
            entries = self._resolved_entries(wildcard)
        else:
            entries = self._raw_entries(wildcard)

        logger.debug(
            "directory_listed",
            path=str(directory),
            count=len(entries),
            follow_symlinks=follow_symlinks,
        )
        return entries

    def _raw_entries(self, wildcard: FsPath) -> List[DirectoryEntry]:
        entries = []
        for entry in _scan_wildcard(wildcard):
            if entry.is_symlink():
                entries.append(DirectoryEntry(_entry_path(entry.path), EntryKind.SYMLINK))
            elif entry.is_dir(follow_symlinks=False):
                entries.append(DirectoryEntry(_entry_path(entry.path, True), EntryKind.DIRECTORY))
            else:
                entries.append(DirectoryEntry(_entry_path(entry.path), EntryKind.FILE))
        return entries

    def _resolved_entries(self, wildcard: FsPath) -> List[DirectoryEntry]:
        entries = []
        seen: Set[str] = set()
        for entry in _scan_wildcard(wildcard):
            real = os.path.realpath(entry.path)
            if real in seen:
                continue
            seen.add(real)

            target = Path(real)
            if target.is_dir():
                entries.append(DirectoryEntry(_entry_path(real, True), EntryKind.DIRECTORY))
            elif target.exists():
                entries.append(DirectoryEntry(_entry_path(real), EntryKind.FILE))
            else:
                # Dangling symlink
                entries.append(DirectoryEntry(_entry_path(entry.path), EntryKind.SYMLINK))
        return entries


def list_directory(directory: PathLike, follow_symlinks: bool = True) -> List[DirectoryEntry]:
    return DirectoryLister().list_directory(directory, follow_symlinks)
