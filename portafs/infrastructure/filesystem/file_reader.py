"""Raw byte reading operations"""
import os

from portafs.core.errors import FilesystemError
from portafs.core.paths import PathLike, to_native
from portafs.infrastructure.logging import get_logger

logger = get_logger(__name__)


class FileReader:
    """Handles raw byte reading only"""

    def read_file(self, path: PathLike) -> bytes:
        """Read entire file content"""
        full_path = to_native(path)

        try:
            with open(full_path, "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            raise FilesystemError(f"File not found: {full_path}", {"path": str(full_path)}) from e
        except PermissionError as e:
            raise FilesystemError(f"Permission denied: {full_path}", {"path": str(full_path)}) from e
        except OSError as e:
            raise FilesystemError(f"Failed to read file: {e}", {"path": str(full_path)}) from e

        logger.debug("file_read", path=str(full_path), size=len(data))
        return data

    def file_length(self, path: PathLike) -> int:
        """Length of the file in bytes as reported by the OS"""
        full_path = to_native(path)
        try:
            return os.stat(full_path).st_size
        except OSError as e:
            raise FilesystemError(f"Failed to stat file: {e}", {"path": str(full_path)}) from e


def read_bytes(path: PathLike) -> bytes:
    return FileReader().read_file(path)
