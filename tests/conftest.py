"""Shared pytest fixtures for the rsmern test suite.

Provides reusable fixtures for:
- A recording fake process runner that simulates what ``npm init`` and
  ``npm create vite`` leave on disk, and can be told to fail commands
- Real gateway/catalog collaborators bundled as ``StepServices``
- A ready-made initializer and feature generator rooted in ``tmp_path``
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import pytest

from rsmern.config import Config
from rsmern.scaffolder import (
    FeatureGenerator,
    FileSystemGateway,
    ProjectInitializer,
    StepServices,
    TemplateCatalog,
    ToolResult,
)


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_rsmern_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep RSMERN_* variables from the developer's shell out of the tests."""
    for name in (
        "RSMERN_TOOL_FAILURE_POLICY",
        "RSMERN_EXISTING_PATH_POLICY",
        "RSMERN_NPM",
        "RSMERN_NPX",
        "RSMERN_BACKEND_PORT",
        "RSMERN_FRONTEND_PORT",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Fake process runner
# ---------------------------------------------------------------------------

NPM_INIT_MANIFEST = {
    "name": "backend",
    "version": "1.0.0",
    "description": "",
    "main": "index.js",
    "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
    "keywords": [],
    "author": "",
    "license": "ISC",
}


class FakeRunner:
    """Records every invocation instead of spawning processes.

    Commands whose joined argv contains one of ``fail_on`` return exit code 1.
    Successful ``npm init -y`` and ``npm create vite`` calls write the files
    the real tools would, so later steps find what they expect.
    """

    def __init__(self, fail_on: Sequence[str] = ()) -> None:
        self.fail_on = list(fail_on)
        self.calls: list[tuple[Path, list[str]]] = []

    @property
    def commands(self) -> list[str]:
        return [" ".join(argv) for _, argv in self.calls]

    def run(self, cwd: str | Path, argv: Sequence[str]) -> ToolResult:
        cwd = Path(cwd)
        argv = list(argv)
        self.calls.append((cwd, argv))
        command = " ".join(argv)

        if any(pattern in command for pattern in self.fail_on):
            return ToolResult(
                command=command,
                cwd=cwd,
                returncode=1,
                stderr=f"npm ERR! simulated failure of {command}",
            )

        if argv[1:3] == ["init", "-y"]:
            (cwd / "package.json").write_text(
                json.dumps(NPM_INIT_MANIFEST, indent=2) + "\n", encoding="utf-8"
            )
        elif argv[1:3] == ["create", "vite@latest"]:
            app = cwd / argv[3]
            (app / "src" / "assets").mkdir(parents=True, exist_ok=True)
            (app / "src" / "App.jsx").write_text("export default function App() {}\n")
            (app / "src" / "main.jsx").write_text("// vite default\n")
            (app / "index.html").write_text("<div id=\"root\"></div>\n")
            (app / "vite.config.js").write_text("// vite default config\n")
            (app / "package.json").write_text('{"name": "frontend"}\n')

        return ToolResult(command=command, cwd=cwd, returncode=0, stdout="ok")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


# ---------------------------------------------------------------------------
# Collaborators and generators
# ---------------------------------------------------------------------------

@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Empty working directory the commands run in."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def catalog() -> TemplateCatalog:
    return TemplateCatalog()


@pytest.fixture
def services(fake_runner: FakeRunner, catalog: TemplateCatalog) -> StepServices:
    return StepServices(gateway=FileSystemGateway(), runner=fake_runner, catalog=catalog)


@pytest.fixture
def initializer(services: StepServices, base_dir: Path) -> ProjectInitializer:
    return ProjectInitializer(services, config=Config(), base_dir=base_dir)


@pytest.fixture
def backend_dir(base_dir: Path) -> Path:
    """A minimal backend root, as ``init`` would leave it."""
    backend = base_dir / "demo" / "backend"
    (backend / "src").mkdir(parents=True)
    (backend / "package.json").write_text(json.dumps(NPM_INIT_MANIFEST), encoding="utf-8")
    (backend / "src" / "routes.ts").write_text("// routes\n", encoding="utf-8")
    return backend


@pytest.fixture
def feature_generator(catalog: TemplateCatalog, backend_dir: Path) -> FeatureGenerator:
    return FeatureGenerator(FileSystemGateway(), catalog, base_dir=backend_dir)


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative posix path) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    """The :func:`snapshot` helper, exposed as a fixture."""
    return snapshot
