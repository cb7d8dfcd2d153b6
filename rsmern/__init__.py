"""rsmern -- scaffolds React + Express/TypeScript + MongoDB projects.

Two commands are exposed: ``init`` creates a frontend/backend project tree by
driving npm and rendering Jinja2 templates in a fixed order, and
``create:feature`` adds a model/controller/router triplet to an existing
backend.
"""

__version__ = "0.1.0"
