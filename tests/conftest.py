"""Pytest configuration and fixtures"""

from pathlib import Path

import pytest

from portafs.core.config import settings
from portafs.infrastructure.filesystem import EncodingAwareTextIO


@pytest.fixture
def temp_base_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point the default temp directory at a per-test directory"""
    base_dir = tmp_path / "temp-base"
    base_dir.mkdir()
    monkeypatch.setattr(settings, "temp_directory", base_dir)
    return base_dir


@pytest.fixture
def flat_tree(tmp_path: Path) -> Path:
    """root/a.txt, root/b.txt, root/c/d.txt"""
    root = tmp_path / "flat"
    (root / "c").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "b.txt").write_text("b")
    (root / "c" / "d.txt").write_text("d")
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """root/f, root/sub/g"""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "f").write_text("f")
    (root / "sub" / "g").write_text("g")
    return root


@pytest.fixture
def text_io() -> EncodingAwareTextIO:
    return EncodingAwareTextIO()
