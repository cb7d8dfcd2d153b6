"""Blocking invocation of external tools (npm, npx).

The runner never raises for a failing tool: it returns a :class:`ToolResult`
and leaves the failure policy to the caller.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rsmern.utils import run_command

# Number of trailing output lines kept in ``ToolResult.diagnostic``.
_DIAGNOSTIC_LINES = 10


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external tool invocation."""

    command: str
    cwd: Path
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """The tail of stderr, or of stdout when stderr is empty."""
        text = self.stderr or self.stdout
        lines = text.splitlines()
        return "\n".join(lines[-_DIAGNOSTIC_LINES:])


class ProcessRunner:
    """Runs an executable with arguments inside a working directory."""

    def __init__(self, env: dict[str, str] | None = None, capture: bool = True) -> None:
        self.env = env
        self.capture = capture

    def run(self, cwd: str | Path, argv: Sequence[str]) -> ToolResult:
        returncode, stdout, stderr = run_command(
            argv, cwd=cwd, capture=self.capture, env=self.env
        )
        return ToolResult(
            command=shlex.join(argv),
            cwd=Path(cwd),
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
