"""pillars command-line interface.

Usage::

    pillars create my-api --typescript
    pillars add resource invoice
    pillars add md user --project-dir ./my-api
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape

from pillars import __version__
from pillars.config import Config
from pillars.scaffolder import (
    ComponentGenerator,
    DependencyInstaller,
    PackageManager,
    ProjectConfig,
    ProjectContext,
    ProjectInitializer,
    ScaffoldError,
)
from pillars.utils import (
    configure_logging,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pillars",
        description="Node.js project scaffolder -- create projects and add layered components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  pillars create my-api --typescript\n"
            "  pillars add resource invoice\n"
            "  pillars add ct user --project-dir ./my-api\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a new Node.js project")
    create.add_argument("project_name", help="Name of the project directory")
    create.add_argument(
        "--typescript",
        action="store_true",
        help="Create a TypeScript project",
    )
    create.add_argument(
        "--package-manager",
        choices=[m.value for m in PackageManager],
        default=None,
        help="Package manager to install with (prompted if omitted)",
    )
    create.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the new project (default: current directory)",
    )

    add = subparsers.add_parser("add", help="Add a component file")
    add.add_argument(
        "type",
        help="model (md), repository (rp), service (sv), controller (ct), "
        "route (r), resource (rs) or test",
    )
    add.add_argument("name", help="Entity name, e.g. user")
    add.add_argument(
        "--project-dir", "-C",
        default=None,
        help="Project root (default: current directory)",
    )

    return parser


async def run_create(args: argparse.Namespace, config: Config) -> Path:
    project = ProjectConfig(name=args.project_name, typescript=args.typescript)
    output_dir = Path(args.output) if args.output else config.output_dir
    manager = PackageManager(args.package_manager) if args.package_manager else None

    initializer = ProjectInitializer(
        project, installer=DependencyInstaller(timeout=config.install_timeout)
    )
    root = await initializer.create(output_dir, package_manager=manager)

    language = "TypeScript" if project.typescript else "JavaScript"
    print_success(f'Project "{project.name}" created successfully with {language}.')
    console.print("\nTo start the project:")
    console.print(f"   cd {escape(str(root))}")
    console.print(f"   {initializer.package_manager.value} run dev")
    return root


async def run_add(args: argparse.Namespace, config: Config) -> list[Path]:
    project_dir = Path(args.project_dir) if args.project_dir else config.project_dir
    context = ProjectContext.detect(project_dir)
    generator = ComponentGenerator(
        context, installer=DependencyInstaller(timeout=config.install_timeout)
    )
    written = await generator.generate(args.type, args.name)

    print_summary_table(
        {str(i): str(path) for i, path in enumerate(written, start=1)},
        title=f'Generated {args.type} "{args.name}"',
    )
    print_success(f"Created {len(written)} file(s).")
    return written


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``pillars`` and ``python -m pillars``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except (ValidationError, ValueError) as exc:
        print_error(f"Invalid PILLARS_* environment settings: {exc}")
        return 1
    if args.verbose:
        config.log_level = "DEBUG"
    configure_logging(config.log_level)

    try:
        if args.command == "create":
            asyncio.run(run_create(args, config))
        else:
            asyncio.run(run_add(args, config))
    except ValidationError as exc:
        print_error(f"Error: {exc.errors()[0]['msg']}")
        return 1
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        if exc.written:
            print_warning("Files written before the failure were kept:")
            for path in exc.written:
                console.print(f"  {escape(str(path))}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
