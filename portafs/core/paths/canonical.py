"""Parsing, rendering and canonicalization of FsPath values"""
import os
import pathlib
from typing import List, Optional, Tuple, Union

from portafs.core.errors import WildcardNotAllowed
from .path_types import CURRENT, PARENT, WILD, FsPath, PathKind

PathLike = Union[str, os.PathLike, FsPath]

_SEPARATORS = {"/", os.sep} | ({os.altsep} if os.altsep else set())


def _split_file_part(part: str) -> Tuple[str, Optional[str]]:
    """Split ``report.tar.gz`` into (``report.tar``, ``gz``)"""
    dot = part.rfind(".")
    if dot <= 0:
        return part, None
    return part[:dot], part[dot + 1:]


def parse_path(value: PathLike) -> FsPath:
    """
    Parse a string or path-like object into an FsPath

    Args:
        value: Native path string, ``os.PathLike`` or an FsPath (returned as is)

    Returns:
        Structured path; a trailing separator or a final "." / ".." component
        yields a directory-form path
    """
    if isinstance(value, FsPath):
        return value

    text = os.fspath(value)
    if isinstance(text, bytes):
        text = os.fsdecode(text)

    for sep in _SEPARATORS - {"/"}:
        text = text.replace(sep, "/")

    if not text:
        return FsPath()

    kind = PathKind.ABSOLUTE if text.startswith("/") else PathKind.RELATIVE
    trailing = text.endswith("/")
    parts = [p for p in text.split("/") if p]

    if not parts or trailing or parts[-1] in (CURRENT, PARENT):
        return FsPath(kind=kind, directory=tuple(parts))

    name, type_ = _split_file_part(parts[-1])
    return FsPath(kind=kind, directory=tuple(parts[:-1]), name=name, type=type_)


def render_path(path: FsPath) -> str:
    """Render an FsPath as a native "/"-separated string"""
    head = "/" if path.is_absolute else ""
    body = "".join(f"{component}/" for component in path.directory)
    if path.wildcard:
        return f"{head}{body}{WILD}"
    return f"{head}{body}{path.file_name or ''}"


def to_native(path: PathLike) -> pathlib.Path:
    """Convert to a ``pathlib.Path`` for handing to the OS"""
    if isinstance(path, FsPath):
        if path.wildcard:
            raise WildcardNotAllowed(path, "to_native")
        rendered = render_path(path)
        return pathlib.Path(rendered or ".")
    return pathlib.Path(path)


def canonicalize(path: PathLike) -> FsPath:
    """
    Reduce a path's directory components to normal form

    "." components are dropped and ".." cancels the preceding real component.
    A ".." with nothing to cancel (at an absolute root, or leading a relative
    path) is kept. Kind, name, type and version are preserved.

    Raises:
        WildcardNotAllowed: If ``path`` is a directory wildcard
    """
    path = parse_path(path)
    if path.wildcard:
        raise WildcardNotAllowed(path, "canonicalize")

    stack: List[str] = []
    for component in path.directory:
        if component == CURRENT:
            continue
        if component == PARENT:
            if stack and stack[-1] != PARENT:
                stack.pop()
                continue
        stack.append(component)

    return FsPath(
        kind=path.kind,
        directory=tuple(stack),
        name=path.name,
        type=path.type,
        version=path.version,
    )


def canonically_equal(a: PathLike, b: PathLike) -> bool:
    return canonicalize(a) == canonicalize(b)
