"""
Scoped temporary files, directories and FIFOs.

Every context manager here creates its resource before the body runs and
removes it on every exit path, including exceptions. The body may delete the
resource itself; cleanup tolerates that.

The base directory defaults to ``settings.temp_directory`` and can be
overridden per call.
"""
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from portafs.core.config import settings
from portafs.core.errors import FilesystemError
from portafs.core.paths import PathLike, to_native
from portafs.infrastructure.logging import get_logger
from .file_writer import write_bytes
from .text_io import write_text

logger = get_logger(__name__)

FIFO_NAME_ATTEMPTS = 10


class TempNameGenerator(ABC):
    """Creates a uniquely named, empty file inside a base directory"""

    @abstractmethod
    def generate(self, directory: Path, prefix: str, suffix: str) -> Path:
        ...


class MkstempNameGenerator(TempNameGenerator):
    """Unique names from ``tempfile.mkstemp``; the file is created to reserve the name"""

    def generate(self, directory: Path, prefix: str, suffix: str) -> Path:
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
        os.close(fd)
        return Path(name)


_default_generator: TempNameGenerator = MkstempNameGenerator()


def default_generator() -> TempNameGenerator:
    return _default_generator


def _base_directory(directory: Optional[PathLike]) -> Path:
    base = to_native(directory) if directory is not None else settings.temp_directory
    base.mkdir(parents=True, exist_ok=True)
    return base


def _suffix(suffix: Optional[str]) -> str:
    if not suffix:
        return ""
    return suffix if suffix.startswith(".") else f".{suffix}"


def temp_file_name(
    suffix: Optional[str] = None,
    directory: Optional[PathLike] = None,
    prefix: Optional[str] = None,
    generator: Optional[TempNameGenerator] = None,
) -> Path:
    """
    Reserve a unique file name

    Args:
        suffix: File extension, with or without the leading dot
        directory: Base directory; ``settings.temp_directory`` when omitted
        prefix: Name prefix; ``settings.temp_prefix`` when omitted
        generator: Name generator; the platform default when omitted

    Returns:
        Path of a newly created empty file the caller owns
    """
    generator = generator or default_generator()
    try:
        return generator.generate(
            _base_directory(directory),
            settings.temp_prefix if prefix is None else prefix,
            _suffix(suffix),
        )
    except OSError as e:
        raise FilesystemError(f"Failed to create temp file: {e}") from e


def _remove(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
        logger.debug("temp_resource_removed", path=str(path))
    except OSError as e:
        logger.warning("temp_resource_cleanup_failed", path=str(path), error=str(e))


@contextmanager
def temporary_file(
    suffix: Optional[str] = None,
    directory: Optional[PathLike] = None,
    prefix: Optional[str] = None,
    generator: Optional[TempNameGenerator] = None,
) -> Generator[Path, None, None]:
    """
    Yield the path of a new empty temp file, deleting it afterwards

    Example:
        >>> with temporary_file(suffix="json") as tmp_path:
        ...     tmp_path.write_text("{}")
    """
    tmp_path = temp_file_name(suffix, directory, prefix, generator)
    try:
        yield tmp_path
    finally:
        _remove(tmp_path)


@contextmanager
def temporary_file_of(
    content: Union[str, bytes],
    suffix: Optional[str] = None,
    directory: Optional[PathLike] = None,
    encoding: Optional[str] = None,
) -> Generator[Path, None, None]:
    """Yield the path of a temp file pre-filled with ``content``"""
    with temporary_file(suffix, directory) as tmp_path:
        if isinstance(content, bytes):
            write_bytes(tmp_path, content)
        else:
            write_text(tmp_path, content, encoding)
        yield tmp_path


@contextmanager
def temporary_directory(
    directory: Optional[PathLike] = None,
    prefix: Optional[str] = None,
) -> Generator[Path, None, None]:
    """Yield a new empty directory, deleting it and its contents afterwards"""
    try:
        tmp_dir = Path(
            tempfile.mkdtemp(
                prefix=settings.temp_prefix if prefix is None else prefix,
                dir=_base_directory(directory),
            )
        )
    except OSError as e:
        raise FilesystemError(f"Failed to create temp directory: {e}") from e

    logger.debug("temp_directory_created", path=str(tmp_dir))
    try:
        yield tmp_dir
    finally:
        _remove(tmp_dir)


@contextmanager
def temporary_fifo(
    directory: Optional[PathLike] = None,
    prefix: Optional[str] = None,
    generator: Optional[TempNameGenerator] = None,
) -> Generator[Path, None, None]:
    """Yield the path of a new named pipe, deleting it afterwards"""
    if not hasattr(os, "mkfifo"):
        raise FilesystemError("Named pipes are not supported on this platform")

    fifo_path = None
    for _ in range(FIFO_NAME_ATTEMPTS):
        candidate = temp_file_name(None, directory, prefix, generator)
        candidate.unlink()
        try:
            os.mkfifo(candidate, 0o600)
        except FileExistsError:
            continue
        except OSError as e:
            raise FilesystemError(f"Failed to create FIFO: {e}", {"path": str(candidate)}) from e
        fifo_path = candidate
        break

    if fifo_path is None:
        raise FilesystemError("Failed to find a free name for a FIFO")

    logger.debug("temp_fifo_created", path=str(fifo_path))
    try:
        yield fifo_path
    finally:
        _remove(fifo_path)
