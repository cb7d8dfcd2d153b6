"""Maps command names to the generators, validating the argument first."""

from __future__ import annotations

from typing import Any, Protocol

from rsmern.errors import ValidationError
from rsmern.scaffolder.feature import check_feature_name
from rsmern.utils import print_error

INIT = "init"
CREATE_FEATURE = "create:feature"

USAGE: dict[str, str] = {
    INIT: "Please give a name for the project: `rsmern init <project-name>`",
    CREATE_FEATURE: "Enter a name for the feature: `rsmern create:feature <feature>`",
}


class Initializer(Protocol):
    def initialize(self, project_name: str) -> Any: ...


class FeatureCreator(Protocol):
    def create_feature(self, feature_name: str) -> Any: ...


def validate_name(raw: str | None, usage: str) -> str:
    """Return the trimmed name, or raise ``ValidationError`` with *usage*.

    A name must be non-empty after trimming and must be a single path
    component, since it becomes a directory or file name.
    """
    name = (raw or "").strip()
    if not name:
        raise ValidationError(usage)
    if "/" in name or "\\" in name or name in (".", ".."):
        raise ValidationError(f"'{name}' must not contain path separators. {usage}")
    return name


class CommandDispatcher:
    """Validates the argument and forwards it to exactly one generator."""

    def __init__(self, initializer: Initializer, feature_generator: FeatureCreator) -> None:
        self.initializer = initializer
        self.feature_generator = feature_generator

    def dispatch(self, command: str, argument: str | None) -> Any:
        try:
            if command not in USAGE:
                known = ", ".join(sorted(USAGE))
                raise ValidationError(f"unknown command '{command}' (expected one of: {known})")
            name = validate_name(argument, USAGE[command])
            if command == CREATE_FEATURE:
                check_feature_name(name)
        except ValidationError as exc:
            print_error(str(exc))
            raise

        if command == INIT:
            return self.initializer.initialize(name)
        return self.feature_generator.create_feature(name)
