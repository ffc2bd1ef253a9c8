"""Encoding detection and codec name mapping"""
import codecs
from typing import Optional

import chardet

from portafs.core.config import settings
from portafs.core.paths import PathLike, to_native

UTF8 = "utf-8"


def external_format(encoding: str) -> str:
    """
    Map an encoding name to the canonical codec token

    ``"UTF8"``, ``"utf_8"`` and ``"utf-8"`` all map to ``"utf-8"``.

    Raises:
        LookupError: If Python has no codec for ``encoding``
    """
    return codecs.lookup(encoding).name


def is_utf8(encoding: str) -> bool:
    try:
        return external_format(encoding) == UTF8
    except LookupError:
        return False


def detect_encoding(data: bytes, default: Optional[str] = None) -> str:
    """Recommend an encoding for ``data``; empty or undecidable input gets the default"""
    default = default or settings.default_encoding
    if not data:
        return default

    result = chardet.detect(data[: settings.encoding_sample_size])
    encoding = result.get("encoding")
    if not encoding:
        return default

    try:
        return external_format(encoding)
    except LookupError:
        return default


def detect_file_encoding(path: PathLike, default: Optional[str] = None) -> str:
    with open(to_native(path), "rb") as f:
        return detect_encoding(f.read(settings.encoding_sample_size), default)
