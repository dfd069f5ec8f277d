"""Command line entry point.

Builds a ``ProjectConfig`` from flags (or a saved JSON config), prints a
summary and writes ``{project_name}.zip`` into the output directory.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from rich.markup import escape

from initializr.catalog import CATEGORIES, entries_by_category, get_entry
from initializr.config import (
    Database,
    Packaging,
    ProjectConfig,
    PythonVersion,
    Settings,
    Structure,
)
from initializr.scaffolder import ProjectGenerator, TemplateRenderer, command_preview
from initializr.utils import (
    console,
    create_progress,
    format_size,
    print_dependency_table,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``initializr`` command."""
    parser = argparse.ArgumentParser(
        prog="initializr",
        description="FastAPI Initializr -- generate a FastAPI starter project as a zip archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  initializr my-api\n"
            "  initializr my-api --structure structured --packaging poetry --dep python_jose\n"
            "  initializr my-api --structure enterprise --dry-run\n"
            "  initializr --list-dependencies --category auth\n"
        ),
    )

    parser.add_argument("project_name", nargs="?", help="Project name (archive root directory)")
    parser.add_argument("--description", default="", help="Short project description")
    parser.add_argument("--package-name", default="app", help="Package name used in the run command")
    parser.add_argument(
        "--python",
        dest="python_version",
        default=None,
        help=f"Target Python version ({', '.join(v.value for v in PythonVersion)})",
    )
    parser.add_argument(
        "--packaging",
        default=None,
        help=f"Packaging manager ({', '.join(p.value for p in Packaging)})",
    )
    parser.add_argument(
        "--structure",
        default=Structure.SIMPLE.value,
        help=f"Project structure ({', '.join(s.value for s in Structure)})",
    )
    parser.add_argument(
        "--database",
        default=Database.NONE.value,
        help=f"Database ({', '.join(d.value for d in Database)})",
    )
    parser.add_argument(
        "--dep",
        dest="dependencies",
        action="append",
        default=[],
        metavar="ID",
        help="Catalog dependency id to include (repeatable)",
    )
    parser.add_argument("--config", default=None, help="Load the configuration from a JSON file")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: $INITIALIZR_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resolved dependencies and file tree without writing",
    )
    parser.add_argument(
        "--list-dependencies",
        action="store_true",
        help="List the dependency catalog and exit",
    )
    parser.add_argument(
        "--category",
        default=None,
        help=f"Restrict --list-dependencies to one category ({', '.join(CATEGORIES)})",
    )
    return parser


def config_from_args(args: argparse.Namespace, settings: Settings) -> ProjectConfig:
    """Build the project configuration from parsed arguments.

    Raises:
        ValueError: If the arguments do not form a valid configuration.
        OSError: If ``--config`` cannot be read.
    """
    if args.config:
        return ProjectConfig.load(Path(args.config))
    if not args.project_name:
        raise ValueError("a project name is required (or pass --config)")

    form: dict[str, Any] = {
        "project_name": args.project_name,
        "description": args.description,
        "package_name": args.package_name,
        "python_version": args.python_version or settings.python_version.value,
        "packaging": args.packaging or settings.packaging.value,
        "structure": args.structure,
        "database": args.database,
        "dependencies": args.dependencies,
    }
    return ProjectConfig.from_form(form)


def _list_dependencies(category: str | None) -> None:
    if category is not None and category not in CATEGORIES:
        raise ValueError(f"unknown category '{category}' (expected one of: {', '.join(CATEGORIES)})")
    title = f"Dependencies: {category}" if category else "Dependencies"
    print_dependency_table(entries_by_category(category), title=title)


def _print_plan(config: ProjectConfig, generator: ProjectGenerator) -> None:
    print_summary_table(
        {
            "Project": config.project_name,
            "Structure": config.structure.value,
            "Packaging": config.packaging.value,
            "Python": config.python_version.value,
            "Database": config.database.value,
            "Packages": ", ".join(generator.dependencies),
        },
        title="FastAPI Initializr",
    )
    if config.locked_dependencies:
        print_dependency_table(
            [get_entry(dep_id) for dep_id in config.effective_dependencies],
            title="Selected dependencies",
            locked=config.locked_dependencies,
        )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``initializr`` / ``python -m initializr.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()

    if args.list_dependencies:
        try:
            _list_dependencies(args.category)
        except ValueError as exc:
            print_error(str(exc))
            sys.exit(1)
        return

    try:
        config = config_from_args(args, settings)
    except (ValueError, OSError) as exc:
        print_error(str(exc))
        sys.exit(1)

    if (
        config.structure is Structure.ENTERPRISE
        and not args.config
        and args.database not in (Database.NONE.value, Database.POSTGRES.value)
    ):
        print_warning(f"Enterprise projects use PostgreSQL; ignoring --database {args.database}")

    output_dir = Path(args.output) if args.output else settings.output_dir

    try:
        generator = ProjectGenerator(config, TemplateRenderer(settings.template_dir))
        _print_plan(config, generator)

        if args.dry_run:
            print_file_tree(config.project_name, [spec.path for spec in generator.plan()])
            console.print(f"[dim]$[/dim] {escape(command_preview(config))}")
            return

        with create_progress() as progress:
            progress.add_task(f"Generating {config.project_name}...", total=None)
            archive_path = asyncio.run(generator.generate(output_dir))
    except (LookupError, ValueError, RuntimeError, OSError) as exc:
        print_error(str(exc))
        sys.exit(1)

    print_success(f"Wrote {escape(str(archive_path))} ({format_size(archive_path.stat().st_size)})")
    console.print(f"[dim]$[/dim] {escape(command_preview(config))}")


if __name__ == "__main__":
    main()
