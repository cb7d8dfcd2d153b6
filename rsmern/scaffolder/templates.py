"""Jinja2 template rendering for project scaffolding.

Provides the :class:`TemplateRenderer`, which loads Jinja2 templates from the
``rsmern/scaffolder/templates/`` directory, and the :class:`TemplateCatalog`,
which maps stable template identifiers (``"backend/server"``,
``"feature/model"``, ...) to pure ``(**params) -> str`` rendering functions.
Casing transforms are registered as filters and applied inside the templates,
so callers only ever pass raw names.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from rsmern.errors import UnknownTemplateError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Undefined variables raise instead of rendering as empty strings, so a
    template that needs a parameter the caller forgot fails loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["snake_case"] = _snake_case_filter
        self.env.filters["camel_case"] = _camel_case_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"backend/server.ts.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# TemplateCatalog
# ---------------------------------------------------------------------------

# Template identifier -> template file, relative to the template directory.
TEMPLATES: dict[str, str] = {
    "project/gitignore": "project/gitignore.j2",
    "backend/env": "backend/env.j2",
    "backend/gitignore": "backend/gitignore.j2",
    "backend/tsconfig": "backend/tsconfig.json.j2",
    "backend/server": "backend/server.ts.j2",
    "backend/routes": "backend/routes.ts.j2",
    "backend/types": "backend/index.d.ts.j2",
    "backend/response_middleware": "backend/response.ts.j2",
    "backend/pagination_middleware": "backend/pagination.ts.j2",
    "frontend/jsconfig": "frontend/jsconfig.json.j2",
    "frontend/vite_config": "frontend/vite.config.js.j2",
    "frontend/main_jsx": "frontend/main.jsx.j2",
    "frontend/index_screen": "frontend/index_screen.jsx.j2",
    "frontend/tailwind_config": "frontend/tailwind.config.js.j2",
    "frontend/main_css": "frontend/main.css.j2",
    "frontend/api_config": "frontend/api.js.j2",
    "feature/model": "feature/model.ts.j2",
    "feature/controller": "feature/controller.ts.j2",
    "feature/router": "feature/router.ts.j2",
}


class TemplateCatalog:
    """Maps template identifiers to rendering functions.

    ``catalog.get("feature/model")`` returns a callable taking the template
    parameters as keyword arguments; ``catalog.render(...)`` is the shortcut
    that looks up and calls it in one go. Output is deterministic for equal
    inputs.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        templates: dict[str, str] | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.templates = dict(TEMPLATES if templates is None else templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self.templates

    def ids(self) -> list[str]:
        return sorted(self.templates)

    def get(self, template_id: str) -> Callable[..., str]:
        try:
            template_path = self.templates[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id) from None
        return functools.partial(_render_with_params, self.renderer, template_path)

    def render(self, template_id: str, **params: Any) -> str:
        return self.get(template_id)(**params)


def _render_with_params(renderer: TemplateRenderer, template_path: str, **params: Any) -> str:
    return renderer.render(template_path, params)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

# Each filter starts with ``str(value)`` so a missing parameter surfaces as
# Jinja2's ``UndefinedError`` rather than a ``TypeError`` from ``re``.


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Words that are already mixed case keep their inner capitals, so
    ``userProfile`` becomes ``UserProfile`` rather than ``Userprofile``.
    """
    parts = re.split(r"[^0-9a-zA-Z]+", str(value))
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", str(value))
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[^0-9a-zA-Z]+", "_", s2).strip("_").lower()


def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = _pascal_case_filter(str(value))
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""
