"""Raw byte writing operations"""
import os
import shutil
import tempfile
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from portafs.core.config import settings
from portafs.core.errors import DestinationExistsError, FilesystemError, InvalidOption
from portafs.core.paths import PathLike, to_native
from portafs.infrastructure.logging import get_logger

logger = get_logger(__name__)


DEFAULT_FILE_MODE = 0o666


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class IfExists(str, Enum):
    """What to do when the destination file already exists"""
    SUPERSEDE = "supersede"
    APPEND = "append"
    ERROR = "error"


def resolve_if_exists(value: Union[IfExists, str]) -> IfExists:
    try:
        return IfExists(value)
    except ValueError:
        raise InvalidOption("if_exists", value, [p.value for p in IfExists]) from None


class FileWriter:
    """Handles raw byte writing only"""

    def __init__(self, atomic: Optional[bool] = None):
        self.atomic = settings.atomic_writes if atomic is None else atomic

    def write_file(
        self,
        path: PathLike,
        content: bytes,
        if_exists: Union[IfExists, str] = IfExists.SUPERSEDE,
    ) -> Path:
        """
        Write content to file under an if-exists policy

        Args:
            path: Destination file
            content: Bytes to write
            if_exists: ``supersede`` replaces, ``append`` extends, ``error``
                refuses an existing destination

        Returns:
            The native path written

        Raises:
            DestinationExistsError: If the policy is ``error`` and the file exists
            FilesystemError: If the OS write fails
        """
        policy = resolve_if_exists(if_exists)
        full_path = to_native(path)

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)

            if policy == IfExists.ERROR:
                with open(full_path, "xb") as f:
                    f.write(content)
            elif policy == IfExists.APPEND:
                with open(full_path, "ab") as f:
                    f.write(content)
            elif self.atomic:
                self._replace_atomically(full_path, content)
            else:
                with open(full_path, "wb") as f:
                    f.write(content)

        except FileExistsError as e:
            raise DestinationExistsError(full_path) from e
        except PermissionError as e:
            raise FilesystemError(f"Permission denied: {full_path}", {"path": str(full_path)}) from e
        except OSError as e:
            raise FilesystemError(f"Failed to write file: {e}", {"path": str(full_path)}) from e

        logger.debug(
            "file_written",
            path=str(full_path),
            size=len(content),
            if_exists=policy.value,
        )
        return full_path

    def _replace_atomically(self, full_path: Path, content: bytes) -> None:
        """Write to a sibling temp file, then rename over the destination"""
        with tempfile.NamedTemporaryFile(
            dir=full_path.parent,
            prefix=f".{full_path.name}.",
            delete=False
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)

        try:
            with open(tmp_path, "wb") as f:
                f.write(content)

            if full_path.exists():
                shutil.copymode(full_path, tmp_path)
            else:
                os.chmod(tmp_path, DEFAULT_FILE_MODE & ~_current_umask())

            os.replace(tmp_path, full_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


def write_bytes(
    path: PathLike,
    content: bytes,
    if_exists: Union[IfExists, str] = IfExists.SUPERSEDE,
) -> Path:
    return FileWriter().write_file(path, content, if_exists)
