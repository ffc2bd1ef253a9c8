"""Filesystem infrastructure module."""
from .file_reader import FileReader, read_bytes
from .file_writer import FileWriter, IfExists, write_bytes
from .permissions import PermissionManager, is_writable, make_writable
from .encoding import detect_encoding, detect_file_encoding, external_format
from .directory_lister import DirectoryLister, list_directory
from .directory_walker import (
    DirectoryWalker,
    IncludeDirectories,
    IfMissing,
    walk_directory,
    collect_files,
)
from .text_io import (
    EncodingAwareTextIO,
    EncodingAttempt,
    read_text,
    read_text_as,
    write_text,
    write_text_as,
)
from .temp_resources import (
    TempNameGenerator,
    MkstempNameGenerator,
    temp_file_name,
    temporary_file,
    temporary_file_of,
    temporary_directory,
    temporary_fifo,
)

__all__ = [
    'FileReader',
    'read_bytes',
    'FileWriter',
    'IfExists',
    'write_bytes',
    'PermissionManager',
    'is_writable',
    'make_writable',
    'detect_encoding',
    'detect_file_encoding',
    'external_format',
    'DirectoryLister',
    'list_directory',
    'DirectoryWalker',
    'IncludeDirectories',
    'IfMissing',
    'walk_directory',
    'collect_files',
    'EncodingAwareTextIO',
    'EncodingAttempt',
    'read_text',
    'read_text_as',
    'write_text',
    'write_text_as',
    'TempNameGenerator',
    'MkstempNameGenerator',
    'temp_file_name',
    'temporary_file',
    'temporary_file_of',
    'temporary_directory',
    'temporary_fifo',
]
