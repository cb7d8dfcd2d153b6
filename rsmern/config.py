"""rsmern configuration.

Typed settings for the scaffolding commands. All settings use Pydantic v2
models so they are validated at construction time and can be loaded from a
JSON file or from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class ToolFailurePolicy(str, Enum):
    """What the initializer does when an external tool exits non-zero."""

    LENIENT = "lenient"
    STRICT = "strict"


class ExistingPathPolicy(str, Enum):
    """What ``init`` does when the project directory already exists."""

    FAIL = "fail"
    MERGE = "merge"


class ToolchainConfig(BaseModel):
    """Executables and package lists handed to the external tools."""

    npm: str = Field(default="npm")
    npx: str = Field(default="npx")
    vite_template: str = Field(default="react")
    frontend_packages: list[str] = Field(
        default_factory=lambda: ["react-router-dom", "axios"]
    )
    backend_packages: list[str] = Field(
        default_factory=lambda: [
            "express",
            "@types/express",
            "body-parser",
            "@types/body-parser",
            "helmet",
            "cors",
            "@types/cors",
            "mongoose",
            "morgan",
            "@types/morgan",
            "dotenv",
        ]
    )
    backend_dev_packages: list[str] = Field(
        default_factory=lambda: ["typescript", "nodemon"]
    )
    # ``tailwindcss init`` only exists in the 3.x line.
    css_packages: list[str] = Field(
        default_factory=lambda: ["tailwindcss@3", "postcss", "autoprefixer"]
    )


class PortConfig(BaseModel):
    """Ports baked into the generated ``.env`` and Vite configuration."""

    backend: int = Field(default=5000, ge=1, le=65535)
    frontend: int = Field(default=3000, ge=1, le=65535)


class Config(BaseModel):
    """Global rsmern configuration.

    Created once by the CLI entry point (or by tests) and passed to the
    generators.
    """

    tool_failure_policy: ToolFailurePolicy = Field(default=ToolFailurePolicy.LENIENT)
    existing_path_policy: ExistingPathPolicy = Field(default=ExistingPathPolicy.FAIL)
    encoding: str = Field(default="utf-8")
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    ports: PortConfig = Field(default_factory=PortConfig)

    @property
    def strict(self) -> bool:
        return self.tool_failure_policy is ToolFailurePolicy.STRICT

    def template_context(self, project_name: str) -> dict[str, Any]:
        """Parameters handed to every template rendered by ``init``."""
        return {
            "project_name": project_name,
            "backend_port": self.ports.backend,
            "frontend_port": self.ports.frontend,
        }

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from a JSON file.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            RSMERN_TOOL_FAILURE_POLICY, RSMERN_EXISTING_PATH_POLICY,
            RSMERN_NPM, RSMERN_NPX, RSMERN_BACKEND_PORT, RSMERN_FRONTEND_PORT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("RSMERN_TOOL_FAILURE_POLICY"):
            kwargs["tool_failure_policy"] = os.environ["RSMERN_TOOL_FAILURE_POLICY"].lower()
        if os.environ.get("RSMERN_EXISTING_PATH_POLICY"):
            kwargs["existing_path_policy"] = os.environ["RSMERN_EXISTING_PATH_POLICY"].lower()

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("RSMERN_NPM"):
            toolchain_kwargs["npm"] = os.environ["RSMERN_NPM"]
        if os.environ.get("RSMERN_NPX"):
            toolchain_kwargs["npx"] = os.environ["RSMERN_NPX"]

        # Ports stay strings here; PortConfig coerces and range-checks them.
        port_kwargs: dict[str, Any] = {}
        if os.environ.get("RSMERN_BACKEND_PORT"):
            port_kwargs["backend"] = os.environ["RSMERN_BACKEND_PORT"]
        if os.environ.get("RSMERN_FRONTEND_PORT"):
            port_kwargs["frontend"] = os.environ["RSMERN_FRONTEND_PORT"]

        return cls(
            toolchain=ToolchainConfig(**toolchain_kwargs),
            ports=PortConfig(**port_kwargs),
            **kwargs,
        )
