"""Exception hierarchy for portafs"""

from typing import Any, Callable, Dict, List, Optional, Sequence


class PortafsError(Exception):
    """Base exception for all portafs errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidComposition(PortafsError):
    """A structurally invalid path was passed to a path operation"""
    pass


class WildcardNotAllowed(InvalidComposition):
    """A wildcard path was passed where a concrete path is required"""

    def __init__(self, path: Any, operation: str):
        self.path = path
        self.operation = operation
        super().__init__(
            f"Wildcard path not allowed in {operation}: {path}",
            {"path": str(path), "operation": operation},
        )


class NotADirectoryPath(InvalidComposition):
    """A path cannot be turned into a directory wildcard"""

    def __init__(self, path: Any):
        self.path = path
        super().__init__(
            f"Not a directory path: {path}",
            {"path": str(path)},
        )


class DirectoryNotFound(PortafsError):
    """Directory does not exist"""

    def __init__(self, path: Any):
        self.path = path
        super().__init__(f"Directory not found: {path}", {"path": str(path)})


class InvalidOption(PortafsError):
    """Unrecognized option value"""

    def __init__(self, option: str, value: Any, allowed: Sequence[Any]):
        self.option = option
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid value for {option}: {value!r} (expected one of "
            f"{', '.join(repr(a) for a in self.allowed)})",
            {"option": option, "value": repr(value), "allowed": [str(a) for a in self.allowed]},
        )


class EncodingError(PortafsError):
    """Text could not be decoded or encoded under any attempted encoding

    ``recoverable`` is true when only the automatic fallbacks were tried; the
    caller may then call ``retry_with`` once with an explicit encoding.
    """

    def __init__(
        self,
        path: Any,
        operation: str,
        attempts: List[Any],
        recoverable: bool = True,
        retry: Optional[Callable[[str], Any]] = None,
    ):
        self.path = path
        self.operation = operation
        self.attempts = list(attempts)
        self.recoverable = recoverable
        self._retry = retry if recoverable else None
        tried = [a.encoding for a in self.attempts]
        super().__init__(
            f"Failed to {operation} {path} with encodings: {', '.join(tried)}",
            {
                "path": str(path),
                "operation": operation,
                "encodings": tried,
                "recoverable": recoverable,
            },
        )

    @property
    def encodings(self) -> List[str]:
        return [a.encoding for a in self.attempts]

    def retry_with(self, encoding: str) -> Any:
        """Repeat the failed operation once with exactly ``encoding``

        Raises this error again when it is final or was already retried.
        A failure of the retry itself is a non-recoverable ``EncodingError``.
        """
        retry, self._retry = self._retry, None
        if retry is None:
            raise self
        return retry(encoding)


class WritePermissionError(PortafsError):
    """Destination exists without write permission

    Recoverable: retry the write with ``force_writable=True``.
    """

    def __init__(self, path: Any):
        self.path = path
        self.recoverable = True
        super().__init__(f"File is not writable: {path}", {"path": str(path)})


class FilesystemError(PortafsError):
    """Filesystem operation error"""
    pass


class DestinationExistsError(FilesystemError):
    """Destination exists and the if-exists policy rejects it"""

    def __init__(self, path: Any):
        self.path = path
        super().__init__(f"File already exists: {path}", {"path": str(path)})
