"""Shared utility functions for rsmern.

Provides blocking command execution and the Rich-based console helpers used
for progress and status reporting.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: Sequence[str],
    cwd: str | Path | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command and block until it exits.

    Args:
        cmd: Executable followed by its arguments. The executable is looked
            up on ``PATH`` so that ``npm`` resolves to ``npm.cmd`` on Windows.
        cwd: Working directory for the child process.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A missing executable is
        reported as return code 127 rather than raised.
    """
    argv = list(cmd)
    if not argv:
        raise ValueError("cmd must contain at least the executable")
    executable = shutil.which(argv[0]) or argv[0]

    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    try:
        completed = subprocess.run(
            [executable, *argv[1:]],
            cwd=str(cwd) if cwd else None,
            env=merged_env,
            stdin=subprocess.DEVNULL,
            capture_output=capture,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as exc:
        return (127, "", f"{argv[0]}: command not found ({exc.strerror})")
    except OSError as exc:
        return (126, "", f"{argv[0]}: {exc}")

    stdout_str = (completed.stdout or "").strip()
    stderr_str = (completed.stderr or "").strip()
    return (completed.returncode, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_section(title: str, color: str = "bright_cyan") -> None:
    """Print a full-width rule announcing a command."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_step(message: str) -> None:
    """Print a progress message that precedes a pipeline phase."""
    console.print(f"[cyan]>[/cyan] {escape(message)}")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
