"""Composition of FsPath values"""
from dataclasses import replace
from typing import Iterable, List, Tuple

from portafs.core.errors import NotADirectoryPath, WildcardNotAllowed
from .canonical import PathLike, canonicalize, parse_path
from .path_types import CURRENT, PARENT, WILD, FsPath, PathKind


def _concrete(paths: Iterable[PathLike], operation: str) -> List[FsPath]:
    parsed = [parse_path(p) for p in paths]
    for path in parsed:
        if path.wildcard:
            raise WildcardNotAllowed(path, operation)
    return parsed


def _fold_directories(paths: List[FsPath]) -> Tuple[PathKind, Tuple[str, ...]]:
    """Left-to-right fold: absolute paths replace, relative paths extend"""
    kind = paths[0].kind
    components = list(paths[0].directory)
    for path in paths[1:]:
        if path.is_absolute:
            kind = PathKind.ABSOLUTE
            components = list(path.directory)
        else:
            components.extend(path.directory)
    return kind, tuple(components)


def merge_as_directory(paths: Iterable[PathLike]) -> FsPath:
    """
    Merge paths into a single canonical directory-form path

    Later absolute paths start over from their own root; later relative paths
    extend what has been accumulated so far. File parts are discarded.

    Args:
        paths: Ordered paths to merge

    Returns:
        Directory-form path, or the empty path for empty input
    """
    parsed = _concrete(paths, "merge_as_directory")
    if not parsed:
        return FsPath()

    kind, components = _fold_directories(parsed)
    return canonicalize(FsPath(kind=kind, directory=components))


def merge_as_file(paths: Iterable[PathLike]) -> FsPath:
    """
    Merge paths into a single canonical file-form path

    Directory parts of all but the last path are folded as in
    ``merge_as_directory``; only the file part (name, type, version) of the
    last path is attached.
    """
    parsed = _concrete(paths, "merge_as_file")
    if not parsed:
        return FsPath()

    kind, components = PathKind.RELATIVE, ()
    if len(parsed) > 1:
        kind, components = _fold_directories(parsed[:-1])
    last = parsed[-1]
    return canonicalize(
        FsPath(
            kind=kind,
            directory=components,
            name=last.name,
            type=last.type,
            version=last.version,
        )
    )


def pathname_as_directory(path: PathLike) -> FsPath:
    """Turn a file-form path into the directory of the same name"""
    path = parse_path(path)
    if path.wildcard:
        raise WildcardNotAllowed(path, "pathname_as_directory")
    if path.is_directory:
        return path
    return FsPath(kind=path.kind, directory=path.directory + (path.file_name,))


def pathname_as_file(path: PathLike) -> FsPath:
    """Turn a directory-form path into a file-form path naming its last component"""
    path = parse_path(path)
    if path.wildcard:
        raise WildcardNotAllowed(path, "pathname_as_file")
    if path.is_file or not path.directory or path.directory[-1] in (CURRENT, PARENT):
        return path
    return replace(parse_path(path.directory[-1]), kind=path.kind, directory=path.directory[:-1])


def directory_wildcard(directory: PathLike) -> FsPath:
    """
    Build the match-all wildcard for the immediate entries of ``directory``

    Raises:
        NotADirectoryPath: If ``directory`` is already a wildcard
    """
    directory = parse_path(directory)
    if directory.wildcard:
        raise NotADirectoryPath(directory)
    base = pathname_as_directory(directory)
    return FsPath(
        kind=base.kind,
        directory=base.directory,
        name=WILD,
        type=WILD,
        wildcard=True,
    )


def in_directory(directory: PathLike, path: PathLike) -> FsPath:
    """Resolve ``path`` against ``directory``; absolute paths win"""
    path = parse_path(path)
    if path.wildcard:
        raise WildcardNotAllowed(path, "in_directory")
    path_directory = FsPath(kind=path.kind, directory=path.directory)
    return merge_as_file([pathname_as_directory(directory), path_directory, path])


def relativize(root: PathLike, path: PathLike) -> FsPath:
    """
    Express ``path`` relative to ``root`` when ``root`` is a prefix of it

    Paths outside ``root`` (or of a different kind) are returned canonicalized
    but otherwise unchanged.
    """
    root = canonicalize(pathname_as_directory(root))
    path = canonicalize(path)
    if root.kind != path.kind:
        return path
    size = len(root.directory)
    if path.directory[:size] != root.directory:
        return path
    return replace(path, kind=PathKind.RELATIVE, directory=path.directory[size:])
