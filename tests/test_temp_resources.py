"""Tests for scoped temporary resources"""

import os
import stat
from pathlib import Path

import pytest

from portafs.infrastructure.filesystem import (
    TempNameGenerator,
    temp_file_name,
    temporary_directory,
    temporary_fifo,
    temporary_file,
    temporary_file_of,
)


class CountingGenerator(TempNameGenerator):
    """Deterministic names for tests"""

    def __init__(self):
        self.count = 0

    def generate(self, directory: Path, prefix: str, suffix: str) -> Path:
        self.count += 1
        path = directory / f"{prefix}{self.count}{suffix}"
        path.touch(exist_ok=False)
        return path


class TestTempFileName:
    """Test unique name reservation"""

    def test_reserves_name_in_default_directory(self, temp_base_dir: Path):
        path = temp_file_name(suffix="txt")

        assert path.parent == temp_base_dir
        assert path.name.endswith(".txt")
        assert path.exists()

    def test_names_are_unique(self, temp_base_dir: Path):
        names = {temp_file_name() for _ in range(20)}

        assert len(names) == 20

    def test_directory_override(self, temp_base_dir: Path, tmp_path: Path):
        other = tmp_path / "other"

        path = temp_file_name(directory=other)

        assert path.parent == other

    def test_custom_generator(self, temp_base_dir: Path):
        generator = CountingGenerator()

        path = temp_file_name(suffix=".c", prefix="gen_", generator=generator)

        assert path == temp_base_dir / "gen_1.c"


class TestTemporaryFile:
    """Test temp file scoping"""

    def test_removed_after_scope(self, temp_base_dir: Path):
        with temporary_file(suffix="json") as tmp_path:
            assert tmp_path.exists()
            tmp_path.write_text("{}")

        assert not tmp_path.exists()

    def test_removed_after_error(self, temp_base_dir: Path):
        with pytest.raises(RuntimeError):
            with temporary_file() as tmp_path:
                raise RuntimeError("boom")

        assert not tmp_path.exists()

    def test_body_may_remove_file(self, temp_base_dir: Path):
        with temporary_file() as tmp_path:
            tmp_path.unlink()

        assert not tmp_path.exists()

    def test_body_may_replace_file_with_directory(self, temp_base_dir: Path):
        with temporary_file() as tmp_path:
            tmp_path.unlink()
            (tmp_path / "nested").mkdir(parents=True)

        assert not tmp_path.exists()

    def test_file_of_text(self, temp_base_dir: Path):
        with temporary_file_of("héllo", suffix="txt") as tmp_path:
            assert tmp_path.read_bytes() == "héllo".encode("utf-8")

        assert not tmp_path.exists()

    def test_file_of_bytes(self, temp_base_dir: Path):
        with temporary_file_of(b"\x00\x01\x02") as tmp_path:
            assert tmp_path.read_bytes() == b"\x00\x01\x02"

        assert not tmp_path.exists()


class TestTemporaryDirectory:
    """Test temp directory scoping"""

    def test_removed_with_contents(self, temp_base_dir: Path):
        with temporary_directory() as tmp_dir:
            assert tmp_dir.is_dir()
            assert tmp_dir.parent == temp_base_dir
            (tmp_dir / "a" / "b").mkdir(parents=True)
            (tmp_dir / "a" / "b" / "f.txt").write_text("x")

        assert not tmp_dir.exists()

    def test_removed_after_error(self, temp_base_dir: Path):
        with pytest.raises(ValueError):
            with temporary_directory() as tmp_dir:
                raise ValueError("boom")

        assert not tmp_dir.exists()

    def test_directory_override(self, temp_base_dir: Path, tmp_path: Path):
        with temporary_directory(directory=tmp_path) as tmp_dir:
            assert tmp_dir.parent == tmp_path


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs unsupported")
class TestTemporaryFifo:
    """Test temp FIFO scoping"""

    def test_creates_named_pipe(self, temp_base_dir: Path):
        with temporary_fifo() as fifo:
            assert stat.S_ISFIFO(os.stat(fifo).st_mode)
            assert fifo.parent == temp_base_dir

        assert not fifo.exists()

    def test_removed_after_error(self, temp_base_dir: Path):
        with pytest.raises(RuntimeError):
            with temporary_fifo() as fifo:
                raise RuntimeError("boom")

        assert not fifo.exists()
