"""Command-line interface: ``blueprintgen generate|destroy|list``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from .context import InstallContext
from .errors import BlueprintError, ConflictAbort, UsageError
from .generate import destroy_from_blueprint, generate_from_blueprint
from .models import Entity
from .packages import CommandPackageGateway
from .project import Project
from .registry import BlueprintRegistry
from .strings import camelize
from .ui import ConsoleUI
from .utils import console, print_error, print_summary_table, print_warning, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blueprintgen",
        description="Generate and destroy project files from blueprints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  blueprintgen generate http-mock users\n"
            "  blueprintgen generate component x-foo --pod --dry-run\n"
            "  blueprintgen destroy http-proxy api http://localhost:5000\n"
            "  blueprintgen list\n"
        ),
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging and extra notices",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("generate", "Generate files from a blueprint"),
        ("destroy", "Remove files generated by a blueprint"),
    ):
        cmd = sub.add_parser(command, help=help_text)
        cmd.add_argument("blueprint", help="Blueprint name or path to a blueprint directory")
        cmd.add_argument("entity", nargs="?", default=None, help="Entity name, e.g. x-foo")
        cmd.add_argument("extra", nargs="*", default=[], help="Extra arguments for the blueprint")
        cmd.add_argument("--dry-run", "-d", action="store_true", help="Report changes without writing")
        cmd.add_argument("--pod", "-p", action="store_true", help="Use the pod file structure")
        cmd.add_argument("--dummy", action="store_true", help="Target the addon's dummy app")
        cmd.add_argument("--in-repo-addon", "--in-repo", default=None, metavar="NAME",
                         help="Target the in-repo addon lib/NAME")
        cmd.add_argument("--target-files", nargs="+", default=[], metavar="GLOB",
                         help="Only process output files matching these globs")
        cmd.add_argument("--project", default=".", help="Project root (default: current directory)")
        cmd.add_argument("--verbose", "-v", action="store_true", dest="sub_verbose",
                         help=argparse.SUPPRESS)

    list_cmd = sub.add_parser("list", help="List available blueprints")
    list_cmd.add_argument("--project", default=".", help="Project root (default: current directory)")
    return parser


def parse_entity_options(unknown: list[str]) -> dict[str, Any]:
    """Turn leftover ``--key[=value]`` words into entity options.

    ``--key=value`` maps to a string, a bare ``--key`` to ``True``.
    Keys are camelized (``--my-opt`` -> ``myOpt``).
    """
    options: dict[str, Any] = {}
    for word in unknown:
        if not word.startswith("--"):
            raise UsageError(f"Unexpected argument: {word}")
        key, sep, value = word[2:].partition("=")
        options[camelize(key)] = value if sep else True
    return options


async def _run_generate(
    args: argparse.Namespace, unknown: list[str], raw_args: list[str], destroy: bool
) -> int:
    root = Path(args.project).resolve()
    project = Project.from_root(root)
    entity_options = parse_entity_options(unknown)
    positional = [args.blueprint] + ([args.entity] if args.entity else []) + list(args.extra)

    context = InstallContext(
        target=root,
        entity=Entity(name=args.entity, options=entity_options),
        project=project,
        ui=ConsoleUI(interactive=sys.stdin.isatty()),
        packages=CommandPackageGateway(project),
        dry_run=args.dry_run,
        verbose=args.verbose or args.sub_verbose,
        pod=args.pod,
        dummy=args.dummy,
        in_repo_addon=args.in_repo_addon,
        target_files=list(args.target_files),
        args=positional,
        raw_args=raw_args,
    )
    task = destroy_from_blueprint if destroy else generate_from_blueprint
    results = await task(args.blueprint, context)

    if context.verbose:
        summary = {}
        for result in results:
            for decision, paths in result.files.items():
                summary[f"{result.blueprint}: {decision}"] = str(len(paths))
        if summary:
            print_summary_table(summary, title="Files")
    return 0


def _run_list(args: argparse.Namespace) -> int:
    registry = BlueprintRegistry.from_project(Project.from_root(Path(args.project).resolve()))
    seen: set[str] = set()
    for label, blueprints in registry.list_blueprints().items():
        console.print(f"[bold]{label}[/bold]")
        for blueprint in blueprints:
            shadowed = " [dim](overridden)[/dim]" if blueprint.name in seen else ""
            seen.add(blueprint.name)
            description = f" - {blueprint.description}" if blueprint.description else ""
            console.print(f"  {blueprint.name}{description}{shadowed}")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``blueprintgen``."""
    parser = build_parser()
    raw_args = list(sys.argv[1:] if argv is None else argv)
    args, unknown = parser.parse_known_args(raw_args)
    verbose = args.verbose or getattr(args, "sub_verbose", False)
    setup_logging(verbose)

    if args.command == "list":
        if unknown:
            parser.error(f"unrecognized arguments: {' '.join(unknown)}")
        sys.exit(_run_list(args))

    try:
        code = asyncio.run(
            _run_generate(args, unknown, raw_args, destroy=args.command == "destroy")
        )
    except ConflictAbort as exc:
        print_warning(str(exc))
        code = 0
    except UsageError as exc:
        print_error(str(exc))
        code = 1
    except BlueprintError as exc:
        logger.debug("Blueprint failure", exc_info=True)
        print_error(f"Error: {exc}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
