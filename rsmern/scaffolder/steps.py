"""Units of work executed by the project initializer.

Each step knows how to apply itself against the injected collaborators
(:class:`StepServices`) and reports a :class:`StepOutcome`. Only tool steps
produce failed outcomes; gateway failures raise
:class:`~rsmern.errors.FileSystemError` and abort the caller.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, Union

from rsmern.errors import ExternalToolError, FileSystemError

from .manifest import dump_manifest, parse_manifest
from .process import ToolResult


class Gateway(Protocol):
    def exists(self, path: str | Path) -> bool: ...
    def mkdir(self, path: str | Path) -> Path: ...
    def write_file(self, path: str | Path, content: str) -> Path: ...
    def read_text(self, path: str | Path) -> str: ...
    def remove_tree(self, path: str | Path) -> None: ...


class Runner(Protocol):
    def run(self, cwd: str | Path, argv: list[str]) -> ToolResult: ...


class Catalog(Protocol):
    def render(self, template_id: str, **params: Any) -> str: ...


@dataclass(frozen=True)
class StepServices:
    """The collaborators a step may drive."""

    gateway: Gateway
    runner: Runner
    catalog: Catalog


@dataclass(frozen=True)
class StepOutcome:
    """Result of applying one step."""

    step: "Step"
    error: ExternalToolError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DirectoryStep:
    """Create ``path``; with ``clean`` the existing subtree is removed first."""

    path: Path
    clean: bool = False
    message: str | None = None

    kind = "directory"

    @property
    def artifact(self) -> Path:
        return self.path

    def describe(self) -> str:
        verb = "recreate" if self.clean else "mkdir"
        return f"{verb} {self.path}"

    def apply(self, services: StepServices) -> StepOutcome:
        if self.clean:
            services.gateway.remove_tree(self.path)
        services.gateway.mkdir(self.path)
        return StepOutcome(self)


@dataclass(frozen=True)
class ToolStep:
    """Run ``executable args...`` inside ``cwd`` and wait for it to exit."""

    cwd: Path
    executable: str
    args: tuple[str, ...] = ()
    message: str | None = None

    kind = "tool"

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    @property
    def command(self) -> str:
        return shlex.join(self.argv)

    @property
    def artifact(self) -> None:
        return None

    def describe(self) -> str:
        return f"{self.command} (in {self.cwd})"

    def apply(self, services: StepServices) -> StepOutcome:
        result = services.runner.run(self.cwd, self.argv)
        if result.ok:
            return StepOutcome(self)
        error = ExternalToolError(
            self.command, self.cwd, result.returncode, result.diagnostic
        )
        return StepOutcome(self, error=error)


@dataclass(frozen=True)
class FileStep:
    """Render ``template_id`` with ``params`` and write it to ``path``."""

    path: Path
    template_id: str
    params: Mapping[str, Any] = field(default_factory=dict)
    message: str | None = None

    kind = "file"

    @property
    def artifact(self) -> Path:
        return self.path

    def describe(self) -> str:
        return f"write {self.path} ({self.template_id})"

    def apply(self, services: StepServices) -> StepOutcome:
        content = services.catalog.render(self.template_id, **self.params)
        services.gateway.write_file(self.path, content)
        return StepOutcome(self)


@dataclass(frozen=True)
class PatchStep:
    """Read the JSON document at ``path``, transform it, write it back."""

    path: Path
    transform: Callable[[dict[str, Any]], dict[str, Any]]
    message: str | None = None

    kind = "patch"

    @property
    def artifact(self) -> Path:
        return self.path

    def describe(self) -> str:
        return f"patch {self.path}"

    def apply(self, services: StepServices) -> StepOutcome:
        if not services.gateway.exists(self.path):
            raise FileSystemError(
                self.path, "cannot patch a missing file (did the step creating it fail?)"
            )
        text = services.gateway.read_text(self.path)
        try:
            data = parse_manifest(text)
        except ValueError as exc:
            raise FileSystemError(self.path, f"not a valid JSON document: {exc}") from exc
        services.gateway.write_file(self.path, dump_manifest(self.transform(data)))
        return StepOutcome(self)


Step = Union[DirectoryStep, ToolStep, FileStep, PatchStep]
