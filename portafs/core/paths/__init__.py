"""Structured path model and composition"""
from .path_types import (
    FsPath,
    PathKind,
    PathForm,
    EntryKind,
    DirectoryEntry,
    WILD,
)
from .canonical import (
    PathLike,
    parse_path,
    render_path,
    to_native,
    canonicalize,
    canonically_equal,
)
from .composer import (
    merge_as_directory,
    merge_as_file,
    directory_wildcard,
    pathname_as_directory,
    pathname_as_file,
    in_directory,
    relativize,
)

__all__ = [
    'FsPath',
    'PathKind',
    'PathForm',
    'EntryKind',
    'DirectoryEntry',
    'WILD',
    'PathLike',
    'parse_path',
    'render_path',
    'to_native',
    'canonicalize',
    'canonically_equal',
    'merge_as_directory',
    'merge_as_file',
    'directory_wildcard',
    'pathname_as_directory',
    'pathname_as_file',
    'in_directory',
    'relativize',
]
