"""Exception hierarchy shared by the dispatcher, the generators and the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class RsmernError(Exception):
    """Base class for every error the CLI reports to the user."""


class ValidationError(RsmernError):
    """Raised when a command argument is rejected before any work is done."""


class ExternalToolError(RsmernError):
    """Raised (or recorded) when an external tool exits unsuccessfully."""

    def __init__(
        self,
        command: str,
        cwd: str | Path,
        returncode: int,
        diagnostic: str = "",
        result: Any = None,
    ) -> None:
        self.command = command
        self.cwd = Path(cwd)
        self.returncode = returncode
        self.diagnostic = diagnostic
        # Partial ScaffoldResult, attached when a strict pipeline aborts.
        self.result = result
        message = f"`{command}` failed in {cwd} (exit {returncode})"
        if diagnostic:
            message = f"{message}: {diagnostic}"
        super().__init__(message)


class FileSystemError(RsmernError):
    """Raised when the file system gateway cannot complete an operation."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{path}: {message}")


class ProjectExistsError(FileSystemError):
    """Raised when ``init`` targets a path that already exists."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(
            path,
            "already exists. Remove it, pick another name, or pass --merge "
            "to scaffold into the existing directory.",
        )


class UnknownTemplateError(RsmernError, KeyError):
    """Raised when the template catalog has no entry for an identifier."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"unknown template '{template_id}'")

    def __str__(self) -> str:
        return f"unknown template '{self.template_id}'"
