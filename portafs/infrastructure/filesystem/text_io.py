"""Text file I/O with encoding fallback and write-permission recovery

Reads and writes try the declared encoding first and then UTF-8. When both
fail an ``EncodingError`` with ``recoverable=True`` is raised; the caller may
repeat the operation exactly once through ``EncodingError.retry_with`` with an
explicit encoding. A failure there is final (``recoverable=False``).

Writing to an existing file without the owner write flag raises
``WritePermissionError``; retrying with ``force_writable=True`` sets the flag
and proceeds.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from portafs.core.config import settings
from portafs.core.errors import EncodingError, FilesystemError, WritePermissionError
from portafs.core.paths import PathLike, to_native
from portafs.infrastructure.logging import get_logger
from .encoding import UTF8, detect_encoding, is_utf8
from .file_reader import FileReader
from .file_writer import FileWriter, IfExists, resolve_if_exists
from .permissions import PermissionManager

logger = get_logger(__name__)


@dataclass
class EncodingAttempt:
    """One decode or encode attempt made during a single I/O call"""
    encoding: str
    fallback: bool
    succeeded: bool
    error: Optional[str] = None


def _candidates(declared: str) -> List[Tuple[str, bool]]:
    if is_utf8(declared):
        return [(declared, False)]
    return [(declared, False), (UTF8, True)]


class EncodingAwareTextIO:
    """Reads and writes text files on top of the raw byte collaborators"""

    def __init__(
        self,
        reader: Optional[FileReader] = None,
        writer: Optional[FileWriter] = None,
        permissions: Optional[PermissionManager] = None,
        detector: Optional[Callable[[bytes], str]] = None,
    ):
        self.reader = reader or FileReader()
        self.writer = writer or FileWriter()
        self.permissions = permissions or PermissionManager()
        self.detector = detector or detect_encoding

    # Reading

    def read_text(self, path: PathLike, encoding: Optional[str] = None) -> str:
        """
        Read a file as text

        Args:
            path: File to read
            encoding: Declared encoding; detected from the content when omitted

        Raises:
            EncodingError: Recoverable, when neither the declared encoding nor
                UTF-8 decodes the content
        """
        data = self._read_bytes(path)
        declared = encoding or self.detector(data)
        return self._decode(
            path, data, _candidates(declared), retry=lambda enc: self.read_text_as(path, enc)
        )

    def read_text_as(self, path: PathLike, encoding: str) -> str:
        """Read with exactly ``encoding``; no fallback, failure is final"""
        data = self._read_bytes(path)
        return self._decode(path, data, [(encoding, False)])

    def _read_bytes(self, path: PathLike) -> bytes:
        data = self.reader.read_file(path)
        length = self.reader.file_length(path)
        if len(data) != length:
            # Decoding covers only what was actually read
            logger.debug(
                "file_length_mismatch",
                path=str(path),
                declared_length=length,
                bytes_read=len(data),
            )
        return data

    def _decode(
        self,
        path: PathLike,
        data: bytes,
        candidates: List[Tuple[str, bool]],
        retry: Optional[Callable[[str], str]] = None,
    ) -> str:
        attempts: List[EncodingAttempt] = []
        for encoding, fallback in candidates:
            try:
                text = data.decode(encoding)
            except (UnicodeDecodeError, LookupError) as e:
                attempts.append(EncodingAttempt(encoding, fallback, False, str(e)))
                continue

            attempts.append(EncodingAttempt(encoding, fallback, True))
            if fallback:
                logger.info(
                    "encoding_fallback_used",
                    path=str(path),
                    declared=attempts[0].encoding,
                    encoding=encoding,
                )
            return text

        logger.warning(
            "text_decode_failed",
            path=str(path),
            encodings=[a.encoding for a in attempts],
            recoverable=retry is not None,
        )
        raise EncodingError(
            path, "read", attempts, recoverable=retry is not None, retry=retry
        )

    # Writing

    def write_text(
        self,
        path: PathLike,
        text: str,
        encoding: Optional[str] = None,
        if_exists: Union[IfExists, str] = IfExists.SUPERSEDE,
        force_writable: bool = False,
    ) -> Path:
        """
        Write text to a file, creating parent directories as needed

        Args:
            path: Destination file
            text: Content to write
            encoding: Declared encoding; the configured default when omitted
            if_exists: Policy handed to the byte writer
            force_writable: Set the write flag on a read-only destination

        Raises:
            WritePermissionError: Destination is read-only and ``force_writable``
                is false
            EncodingError: Recoverable, when neither the declared encoding nor
                UTF-8 can represent ``text``
        """
        declared = encoding or settings.default_encoding
        return self._write(
            path, text, _candidates(declared), if_exists, force_writable,
            retry=lambda enc: self.write_text_as(path, text, enc, if_exists, force_writable),
        )

    def write_text_as(
        self,
        path: PathLike,
        text: str,
        encoding: str,
        if_exists: Union[IfExists, str] = IfExists.SUPERSEDE,
        force_writable: bool = False,
    ) -> Path:
        """Write with exactly ``encoding``; no fallback, failure is final"""
        return self._write(path, text, [(encoding, False)], if_exists, force_writable)

    def _write(
        self,
        path: PathLike,
        text: str,
        candidates: List[Tuple[str, bool]],
        if_exists: Union[IfExists, str],
        force_writable: bool,
        retry: Optional[Callable[[str], Path]] = None,
    ) -> Path:
        policy = resolve_if_exists(if_exists)
        full_path = to_native(path)

        if full_path.exists() and not self.permissions.is_writable(full_path):
            if not force_writable:
                logger.warning("write_target_not_writable", path=str(full_path))
                raise WritePermissionError(full_path)
            self.permissions.make_writable(full_path)

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Failed to create parent directories: {e}",
                {"path": str(full_path.parent)},
            ) from e

        data = self._encode(full_path, text, candidates, retry)
        return self.writer.write_file(full_path, data, policy)

    def _encode(
        self,
        path: Path,
        text: str,
        candidates: List[Tuple[str, bool]],
        retry: Optional[Callable[[str], Path]] = None,
    ) -> bytes:
        attempts: List[EncodingAttempt] = []
        for encoding, fallback in candidates:
            try:
                data = text.encode(encoding)
            except (UnicodeEncodeError, LookupError) as e:
                attempts.append(EncodingAttempt(encoding, fallback, False, str(e)))
                continue

            if fallback:
                logger.info(
                    "encoding_fallback_used",
                    path=str(path),
                    declared=attempts[0].encoding,
                    encoding=encoding,
                )
            return data

        logger.warning(
            "text_encode_failed",
            path=str(path),
            encodings=[a.encoding for a in attempts],
            recoverable=retry is not None,
        )
        raise EncodingError(
            path, "write", attempts, recoverable=retry is not None, retry=retry
        )


def read_text(path: PathLike, encoding: Optional[str] = None) -> str:
    return EncodingAwareTextIO().read_text(path, encoding)


def read_text_as(path: PathLike, encoding: str) -> str:
    return EncodingAwareTextIO().read_text_as(path, encoding)


def write_text(
    path: PathLike,
    text: str,
    encoding: Optional[str] = None,
    if_exists: Union[IfExists, str] = IfExists.SUPERSEDE,
    force_writable: bool = False,
) -> Path:
    return EncodingAwareTextIO().write_text(path, text, encoding, if_exists, force_writable)


def write_text_as(
    path: PathLike,
    text: str,
    encoding: str,
    if_exists: Union[IfExists, str] = IfExists.SUPERSEDE,
    force_writable: bool = False,
) -> Path:
    return EncodingAwareTextIO().write_text_as(path, text, encoding, if_exists, force_writable)
