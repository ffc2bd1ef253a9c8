"""Core path model and error types"""
from .errors import (
    PortafsError,
    InvalidComposition,
    WildcardNotAllowed,
    NotADirectoryPath,
    DirectoryNotFound,
    InvalidOption,
    EncodingError,
    WritePermissionError,
    FilesystemError,
    DestinationExistsError,
)

__all__ = [
    'PortafsError',
    'InvalidComposition',
    'WildcardNotAllowed',
    'NotADirectoryPath',
    'DirectoryNotFound',
    'InvalidOption',
    'EncodingError',
    'WritePermissionError',
    'FilesystemError',
    'DestinationExistsError',
]
