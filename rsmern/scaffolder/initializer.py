"""Project scaffolding orchestrator.

Builds the fixed, ordered list of steps that produces a two-tier project
(Vite + React frontend, Express + TypeScript + Mongoose backend) and executes
it one step at a time. Later steps rely on the files earlier steps produced
(the manifest patch needs ``npm init``, the Tailwind config needs the Vite
app), so the order is part of the contract and nothing runs in parallel.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from rsmern.config import Config, ExistingPathPolicy
from rsmern.errors import ExternalToolError, ProjectExistsError
from rsmern.utils import (
    console,
    format_duration,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)

from .manifest import patch_backend_manifest
from .steps import (
    DirectoryStep,
    FileStep,
    PatchStep,
    Step,
    StepOutcome,
    StepServices,
    ToolStep,
)


@dataclass
class ScaffoldResult:
    """Aggregated outcome of one ``init`` run."""

    root: Path
    outcomes: list[StepOutcome] = field(default_factory=list)
    completed: bool = False

    @property
    def failures(self) -> list[StepOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def success(self) -> bool:
        return self.completed and not self.failures

    @property
    def artifacts(self) -> list[Path]:
        """Paths of every directory or file produced so far, in order."""
        paths: list[Path] = []
        for outcome in self.outcomes:
            artifact = outcome.step.artifact
            if artifact is not None and artifact not in paths:
                paths.append(artifact)
        return paths


class ProjectInitializer:
    """Scaffolds a new project directory named after the project.

    The collaborators are injected so tests can substitute a recording
    process runner; the step list itself is available from
    :meth:`build_steps` without touching the file system.
    """

    def __init__(
        self,
        services: StepServices,
        config: Config | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self.services = services
        self.config = config or Config()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    # -- Public API --------------------------------------------------------

    def initialize(self, project_name: str) -> ScaffoldResult:
        """Run every step for *project_name* in declared order.

        Raises:
            ProjectExistsError: The project directory already exists and the
                existing-path policy is ``fail``. Nothing has been touched.
            FileSystemError: A directory, file or patch step failed.
            ExternalToolError: A tool failed under the ``strict`` policy. The
                partial result is attached as ``error.result``.
        """
        root = self.base_dir / project_name
        if (
            self.config.existing_path_policy is ExistingPathPolicy.FAIL
            and self.services.gateway.exists(root)
        ):
            raise ProjectExistsError(root)

        started = time.monotonic()
        result = ScaffoldResult(root=root)
        for step in self.build_steps(project_name):
            if step.message:
                print_step(step.message)
            outcome = self._apply(step)
            result.outcomes.append(outcome)
            if outcome.error is not None:
                print_warning(f"  {outcome.error}")
                if self.config.strict:
                    outcome.error.result = result
                    raise outcome.error

        result.completed = True
        elapsed = format_duration(time.monotonic() - started)
        print_success(f"All done. Project created at {root} in {elapsed}.")
        if result.failures:
            print_warning(
                f"{len(result.failures)} tool step(s) failed; the project may be incomplete."
            )
            print_summary_table(
                {outcome.step.describe(): _short(outcome.error) for outcome in result.failures},
                title="Failed tool steps",
            )
        return result

    def build_steps(self, project_name: str) -> list[Step]:
        """Return the ordered steps that scaffold *project_name*."""
        tools = self.config.toolchain
        npm, npx = tools.npm, tools.npx
        params = self.config.template_context(project_name)

        root = self.base_dir / project_name
        frontend = root / "frontend"
        backend = root / "backend"

        def emit(path: Path, template_id: str, message: str | None = None) -> FileStep:
            return FileStep(path, template_id, params, message=message)

        return [
            DirectoryStep(root),
            # Frontend
            ToolStep(
                root, npm,
                ("create", "vite@latest", "frontend", "--", "--template", tools.vite_template),
                message="Initializing frontend..",
            ),
            ToolStep(frontend, npm, ("install",), message="Running npm install in frontend.."),
            ToolStep(
                frontend, npm, ("install", *tools.frontend_packages),
                message="Installing react router and axios..",
            ),
            # Backend
            DirectoryStep(backend, message="Initializing backend.."),
            ToolStep(backend, npm, ("init", "-y")),
            ToolStep(
                backend, npm, ("install", *tools.backend_packages),
                message="Installing packages in backend..",
            ),
            emit(backend / ".env", "backend/env"),
            ToolStep(
                backend, npm, ("install", "-D", *tools.backend_dev_packages),
                message="Setting up typescript..",
            ),
            emit(backend / "tsconfig.json", "backend/tsconfig"),
            PatchStep(
                backend / "package.json", patch_backend_manifest,
                message="Updating package.json..",
            ),
            emit(frontend / "jsconfig.json", "frontend/jsconfig"),
            emit(frontend / "vite.config.js", "frontend/vite_config", "Updating vite configuration.."),
            # Source code
            emit(backend / "src" / "server.ts", "backend/server", "Writing some code for you.."),
            emit(backend / "src" / "routes.ts", "backend/routes"),
            DirectoryStep(frontend / "src", clean=True),
            emit(frontend / "src" / "main.jsx", "frontend/main_jsx"),
            emit(frontend / "src" / "screens" / "index_screen.jsx", "frontend/index_screen"),
            # Tailwind
            ToolStep(
                frontend, npm, ("install", "-D", *tools.css_packages),
                message="Setting up tailwind..",
            ),
            ToolStep(frontend, npx, ("tailwindcss", "init", "-p")),
            emit(frontend / "tailwind.config.js", "frontend/tailwind_config"),
            emit(frontend / "src" / "main.css", "frontend/main_css"),
            emit(frontend / "src" / "config" / "api.js", "frontend/api_config"),
            # Ignore files, shared types and middlewares
            emit(root / ".gitignore", "project/gitignore", "Generating config and middlewares.."),
            emit(backend / ".gitignore", "backend/gitignore"),
            emit(backend / "src" / "types" / "index.d.ts", "backend/types"),
            emit(backend / "src" / "middlewares" / "response.ts", "backend/response_middleware"),
            emit(backend / "src" / "middlewares" / "pagination.ts", "backend/pagination_middleware"),
        ]

    # -- Internals ---------------------------------------------------------

    def _apply(self, step: Step) -> StepOutcome:
        if isinstance(step, ToolStep):
            with console.status(f"[dim]{escape(step.command)}[/dim]"):
                return step.apply(self.services)
        return step.apply(self.services)


def _short(error: ExternalToolError | None) -> str:
    if error is None:
        return ""
    last_line = error.diagnostic.splitlines()[-1] if error.diagnostic else ""
    return f"exit {error.returncode}" + (f": {last_line}" if last_line else "")
