"""Model/controller/router generation for a named feature.

Runs inside an existing backend directory (the one ``init`` produced) and
writes three TypeScript files derived from the feature name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from rsmern.errors import ValidationError
from rsmern.utils import print_step, print_success, print_warning

from .steps import Catalog, Gateway

# (role, parent directory, template identifier), in generation order.
FEATURE_ROLES: list[tuple[str, str, str]] = [
    ("model", "src/models", "feature/model"),
    ("controller", "src/controllers", "feature/controller"),
    ("router", "src/routers", "feature/router"),
]

FEATURE_EXTENSION = ".ts"

# Leading letter, then letters, digits, '-' or '_': every casing of such a
# name is a valid TypeScript identifier and safe inside a string literal.
FEATURE_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


def check_feature_name(feature_name: str) -> str:
    """Return *feature_name*, or raise ``ValidationError`` if it cannot be used."""
    if not FEATURE_NAME_PATTERN.fullmatch(feature_name):
        raise ValidationError(
            f"'{feature_name}' is not a valid feature name: start with a letter "
            "and use only letters, digits, '-' or '_'."
        )
    return feature_name


@dataclass
class FeatureResult:
    """Files written for one feature, keyed by role."""

    feature_name: str
    files: dict[str, Path] = field(default_factory=dict)

    @property
    def paths(self) -> list[Path]:
        return list(self.files.values())


def feature_paths(feature_name: str, base_dir: str | Path = ".") -> dict[str, Path]:
    """Return ``{role: path}`` for the triplet of *feature_name*."""
    base = Path(base_dir)
    return {
        role: base / parent / f"{feature_name}_{role}{FEATURE_EXTENSION}"
        for role, parent, _ in FEATURE_ROLES
    }


class FeatureGenerator:
    """Writes the model, controller and router files for a feature."""

    def __init__(
        self,
        gateway: Gateway,
        catalog: Catalog,
        base_dir: str | Path | None = None,
    ) -> None:
        self.gateway = gateway
        self.catalog = catalog
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def create_feature(self, feature_name: str) -> FeatureResult:
        check_feature_name(feature_name)
        if not self.gateway.exists(self.base_dir / "package.json"):
            print_warning(
                f"No package.json in {self.base_dir}; "
                "create:feature is meant to run from a backend directory."
            )

        paths = feature_paths(feature_name, self.base_dir)
        result = FeatureResult(feature_name=feature_name)
        for role, _, template_id in FEATURE_ROLES:
            print_step(f"Generating {role} for {feature_name}..")
            content = self.catalog.render(template_id, feature_name=feature_name)
            result.files[role] = self.gateway.write_file(paths[role], content)

        print_success(
            f"All done! Make sure to add the new router in your routes.ts file "
            f"(import it from ./routers/{feature_name}_router)."
        )
        return result
