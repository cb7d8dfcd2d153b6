"""Tests for the file system gateway."""

from __future__ import annotations

from pathlib import Path

import pytest

from rsmern.errors import FileSystemError
from rsmern.scaffolder import FileSystemGateway


pytestmark = pytest.mark.unit


@pytest.fixture
def gateway() -> FileSystemGateway:
    return FileSystemGateway()


class TestFileSystemGateway:
    def test_write_creates_parents(self, gateway: FileSystemGateway, tmp_path: Path):
        path = gateway.write_file(tmp_path / "a" / "b" / "c.txt", "hello")
        assert path.read_text(encoding="utf-8") == "hello"

    def test_write_overwrites(self, gateway: FileSystemGateway, tmp_path: Path):
        target = tmp_path / "c.txt"
        gateway.write_file(target, "one")
        gateway.write_file(target, "two")
        assert gateway.read_text(target) == "two"

    def test_mkdir_is_idempotent(self, gateway: FileSystemGateway, tmp_path: Path):
        gateway.mkdir(tmp_path / "x" / "y")
        gateway.mkdir(tmp_path / "x" / "y")
        assert (tmp_path / "x" / "y").is_dir()

    def test_mkdir_over_file_reports_path(self, gateway: FileSystemGateway, tmp_path: Path):
        blocker = tmp_path / "frontend"
        blocker.write_text("not a dir", encoding="utf-8")

        with pytest.raises(FileSystemError) as exc_info:
            gateway.mkdir(blocker)

        assert exc_info.value.path == blocker
        assert str(blocker) in str(exc_info.value)

    def test_read_missing_file(self, gateway: FileSystemGateway, tmp_path: Path):
        with pytest.raises(FileSystemError):
            gateway.read_text(tmp_path / "missing.json")

    def test_remove_tree(self, gateway: FileSystemGateway, tmp_path: Path):
        tree = tmp_path / "src"
        (tree / "nested").mkdir(parents=True)
        (tree / "nested" / "file.js").write_text("x", encoding="utf-8")

        gateway.remove_tree(tree)

        assert not tree.exists()

    def test_remove_missing_tree_is_noop(self, gateway: FileSystemGateway, tmp_path: Path):
        gateway.remove_tree(tmp_path / "nope")

    def test_exists(self, gateway: FileSystemGateway, tmp_path: Path):
        assert gateway.exists(tmp_path)
        assert not gateway.exists(tmp_path / "nope")

    def test_encoding(self, tmp_path: Path):
        gateway = FileSystemGateway(encoding="latin-1")
        gateway.write_file(tmp_path / "f.txt", "café")
        assert (tmp_path / "f.txt").read_bytes() == "café".encode("latin-1")
