"""Path model type definitions"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


WILD = "*"
PARENT = ".."
CURRENT = "."


class PathKind(str, Enum):
    """Whether a path is rooted"""
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class PathForm(str, Enum):
    """Whether a path denotes a directory or a file"""
    DIRECTORY = "directory"
    FILE = "file"


class EntryKind(str, Enum):
    """Discriminator for listed directory entries"""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class FsPath:
    """Immutable structured filesystem path

    ``directory`` holds the directory components in order. A path with a
    ``name`` is file-form; without one it is directory-form. ``wildcard`` marks
    the match-all variant built by ``directory_wildcard``.
    """
    kind: PathKind = PathKind.RELATIVE
    directory: Tuple[str, ...] = field(default_factory=tuple)
    name: Optional[str] = None
    type: Optional[str] = None
    version: Optional[str] = None
    wildcard: bool = False

    def __post_init__(self):
        if not isinstance(self.directory, tuple):
            object.__setattr__(self, "directory", tuple(self.directory))
        if not isinstance(self.kind, PathKind):
            object.__setattr__(self, "kind", PathKind(self.kind))

    @property
    def form(self) -> PathForm:
        if self.name is None and self.type is None:
            return PathForm.DIRECTORY
        return PathForm.FILE

    @property
    def is_absolute(self) -> bool:
        return self.kind == PathKind.ABSOLUTE

    @property
    def is_relative(self) -> bool:
        return self.kind == PathKind.RELATIVE

    @property
    def is_directory(self) -> bool:
        return self.form == PathForm.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.form == PathForm.FILE

    @property
    def file_name(self) -> Optional[str]:
        """Name and type joined as they appear on disk"""
        if self.form == PathForm.DIRECTORY:
            return None
        if self.type is None:
            return self.name
        return f"{self.name or ''}.{self.type}"

    def __str__(self) -> str:
        from .canonical import render_path

        return render_path(self)


@dataclass(frozen=True)
class DirectoryEntry:
    """A listed path with what it turned out to be on disk"""
    path: FsPath
    kind: EntryKind

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY
