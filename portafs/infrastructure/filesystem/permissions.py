"""Owner write-permission queries and changes"""
import os
import stat

from portafs.core.errors import FilesystemError
from portafs.core.paths import PathLike, to_native
from portafs.infrastructure.logging import get_logger

logger = get_logger(__name__)


class PermissionManager:
    """Reads and sets the owner write flag of existing files"""

    WRITE_FLAG = stat.S_IWUSR

    def is_writable(self, path: PathLike) -> bool:
        """Whether the owner write flag is set on ``path``

        Looks at the mode bits rather than ``os.access`` so the answer does not
        depend on the calling user's privileges.
        """
        full_path = to_native(path)
        try:
            mode = os.stat(full_path).st_mode
        except OSError as e:
            raise FilesystemError(f"Failed to stat file: {e}", {"path": str(full_path)}) from e
        return bool(mode & self.WRITE_FLAG)

    def make_writable(self, path: PathLike) -> None:
        """Set the owner write flag, keeping every other bit"""
        full_path = to_native(path)
        try:
            mode = stat.S_IMODE(os.stat(full_path).st_mode)
            os.chmod(full_path, mode | self.WRITE_FLAG)

            logger.debug(
                "write_permission_set",
                path=str(full_path),
                mode=oct(mode | self.WRITE_FLAG)
            )

        except OSError as e:
            logger.error(
                "write_permission_failed",
                path=str(full_path),
                error=str(e)
            )
            raise FilesystemError(
                f"Failed to make file writable: {e}", {"path": str(full_path)}
            ) from e


def is_writable(path: PathLike) -> bool:
    return PermissionManager().is_writable(path)


def make_writable(path: PathLike) -> None:
    PermissionManager().make_writable(path)
