"""rsmern command line interface.

Usage::

    rsmern init my-app
    rsmern init my-app --strict
    cd my-app/backend && rsmern create:feature user
"""

from __future__ import annotations

import argparse
from pathlib import Path

from pydantic import ValidationError as ConfigValidationError

from rsmern import __version__
from rsmern.config import Config, ExistingPathPolicy, ToolFailurePolicy
from rsmern.dispatcher import CREATE_FEATURE, INIT, CommandDispatcher
from rsmern.errors import ExternalToolError, RsmernError, ValidationError
from rsmern.scaffolder import (
    FeatureGenerator,
    FileSystemGateway,
    ProcessRunner,
    ProjectInitializer,
    ScaffoldResult,
    StepServices,
    TemplateCatalog,
)
from rsmern.utils import print_error, print_section


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rsmern",
        description="Scaffold React + Express/TypeScript + MongoDB projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  rsmern init my-app\n"
            "  rsmern init my-app --strict\n"
            "  cd my-app/backend && rsmern create:feature user\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON configuration file (default: read RSMERN_* environment variables)",
    )
    parser.add_argument(
        "-C", "--directory",
        type=Path,
        default=None,
        help="Run as if started in this directory (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(INIT, help="scaffold a new project")
    init_parser.add_argument("name", nargs="?", default="", help="Project directory name")
    init_parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first failing npm/npx command instead of continuing",
    )
    init_parser.add_argument(
        "--merge",
        action="store_true",
        help="Scaffold into an existing directory instead of failing",
    )

    feature_parser = subparsers.add_parser(
        CREATE_FEATURE, help="generate model, controller and router files for a feature"
    )
    feature_parser.add_argument("name", nargs="?", default="", help="Feature name, e.g. 'user'")

    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Resolve configuration: file or environment, then command line flags."""
    config = Config.load(args.config) if args.config else Config.from_env()
    updates: dict[str, object] = {}
    if getattr(args, "strict", False):
        updates["tool_failure_policy"] = ToolFailurePolicy.STRICT
    if getattr(args, "merge", False):
        updates["existing_path_policy"] = ExistingPathPolicy.MERGE
    return config.model_copy(update=updates) if updates else config


def build_dispatcher(config: Config, base_dir: Path) -> CommandDispatcher:
    gateway = FileSystemGateway(encoding=config.encoding)
    catalog = TemplateCatalog()
    services = StepServices(gateway=gateway, runner=ProcessRunner(), catalog=catalog)
    return CommandDispatcher(
        ProjectInitializer(services, config=config, base_dir=base_dir),
        FeatureGenerator(gateway, catalog, base_dir=base_dir),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``rsmern`` and ``python -m rsmern``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ConfigValidationError) as exc:
        print_error(f"Error: could not load configuration: {exc}")
        return 1

    base_dir = args.directory or Path.cwd()
    dispatcher = build_dispatcher(config, base_dir)

    print_section(f"rsmern {args.command}")
    try:
        result = dispatcher.dispatch(args.command, args.name)
    except ValidationError:
        # The dispatcher already printed the usage guidance.
        return 1
    except ExternalToolError as exc:
        print_error(f"Error: {exc}")
        print_error("Aborted (strict mode). The partially created project was left in place.")
        return 1
    except RsmernError as exc:
        print_error(f"Error: {exc}")
        return 1

    if isinstance(result, ScaffoldResult) and not result.success:
        return 1
    return 0
