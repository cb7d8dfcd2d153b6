"""File system access for the generators.

Every mutation the scaffolder performs goes through :class:`FileSystemGateway`
so that failures surface uniformly as :class:`~rsmern.errors.FileSystemError`
carrying the offending path.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from rsmern.errors import FileSystemError


class FileSystemGateway:
    """Thin wrapper around :mod:`pathlib` and :mod:`shutil`."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def exists(self, path: str | Path) -> bool:
        return Path(path).exists()

    def mkdir(self, path: str | Path) -> Path:
        """Create a directory (and parents) if it does not exist."""
        dir_path = Path(path)
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(dir_path, _describe(exc)) from exc
        return dir_path

    def write_file(self, path: str | Path, content: str) -> Path:
        """Create or overwrite *path* with *content*, creating parent dirs."""
        file_path = Path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding=self.encoding)
        except OSError as exc:
            raise FileSystemError(file_path, _describe(exc)) from exc
        return file_path

    def read_text(self, path: str | Path) -> str:
        file_path = Path(path)
        try:
            return file_path.read_text(encoding=self.encoding)
        except OSError as exc:
            raise FileSystemError(file_path, _describe(exc)) from exc

    def remove_tree(self, path: str | Path) -> None:
        """Remove a directory subtree. A missing path is not an error."""
        tree = Path(path)
        if not tree.exists():
            return
        try:
            if tree.is_dir() and not tree.is_symlink():
                shutil.rmtree(tree)
            else:
                tree.unlink()
        except OSError as exc:
            raise FileSystemError(tree, _describe(exc)) from exc


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)
