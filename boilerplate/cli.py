"""Command line entry point.

Usage::

    boilerplate list
    boilerplate gen headless-service -d ./out
    boilerplate gen -t spa --params answers.yaml --no-input
    boilerplate gen cobra --dry-run
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import GeneratorConfig
from .params import load_parameter_file
from .prompts import ParameterCollector
from .scaffolder.errors import BoilerplateError
from .scaffolder.filesystem import MemoryFilesystem
from .scaffolder.generator import Materializer
from .scaffolder.repository import DirectoryTemplateRepository
from .utils import console, print_error, print_file_tree, print_success, print_summary_table

_GEN_DESCRIPTION = """\
Creates a new code project based on a packaged template.

Supported project types:

  cobra               A CLI tool built on the Cobra framework.
  headless-service    A standalone headless service with metrics and health endpoints.
  spa                 A React single page application served by a Go binary.
  indirect-selection  A gRPC service with JWT based authentication.

You are asked for the project name, description, maintainer and the other
parameters of the chosen type.  Without --dest-dir the project is created in
the current working directory.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boilerplate",
        description="Code generation tool -- creates a minimally usable codebase from a template",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List the available project types")

    gen = sub.add_parser(
        "gen",
        help="Create a new project",
        description=_GEN_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    gen.add_argument("project_type", nargs="?", default=None, help="Project type")
    gen.add_argument(
        "--type", "-t", dest="type_flag", default=None,
        help="Project type (if not specified, you'll be prompted to select)",
    )
    gen.add_argument(
        "--dest-dir", "-d", default=None, help="Destination directory (defaults to CWD)"
    )
    gen.add_argument(
        "--params", "-p", default=None,
        help="YAML or JSON file with parameter answers keyed by name (e.g. ProjectName)",
    )
    gen.add_argument(
        "--no-input", action="store_true",
        help="Never prompt; use supplied answers and defaults",
    )
    gen.add_argument(
        "--dry-run", action="store_true", help="Show the files that would be created without writing"
    )
    return parser


def run_list(repository: DirectoryTemplateRepository) -> int:
    for name in repository.list_archetypes():
        console.print(name)
    return 0


def run_gen(args: argparse.Namespace, config: GeneratorConfig) -> int:
    repository = DirectoryTemplateRepository(config.template_dir)
    collector = ParameterCollector(
        console, max_attempts=config.max_prompt_attempts, interactive=not args.no_input
    )

    project_type = args.type_flag or args.project_type
    if project_type is None:
        if args.no_input:
            print_error("A project type is required with --no-input.")
            return 1
        project_type = collector.choose_archetype(repository.list_archetypes())

    if not repository.is_valid_archetype(project_type):
        valid = ", ".join(repository.list_archetypes())
        print_error(f"Invalid project type: {project_type!r}. Valid project types are: {valid}")
        return 1

    if args.dest_dir:
        config = config.model_copy(update={"dest_dir": Path(args.dest_dir)})

    console.print(f"Creating new project of type {project_type!r}")

    answers = load_parameter_file(args.params) if args.params else {}
    params = collector.collect(project_type, answers)
    datamap = params.as_map()

    filesystem = MemoryFilesystem() if args.dry_run else None
    materializer = Materializer(config, repository=repository, filesystem=filesystem)
    result = materializer.materialize(project_type, config.dest_dir, datamap)

    if args.dry_run:
        print_file_tree(result.destination, result.files, title=f"{result.destination} (dry run)")
        print_summary_table(
            {
                "Project type": result.archetype,
                "Directories": str(len(result.directories)),
                "Files": str(len(result.files)),
            },
            title="Dry run",
        )
        return 0

    print_success(f"New project created in ./{datamap['ProjectName']}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``boilerplate`` / ``python -m boilerplate``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = GeneratorConfig.from_env()

    try:
        if args.command == "list":
            return run_list(DirectoryTemplateRepository(config.template_dir))
        return run_gen(args, config)
    except BoilerplateError as exc:
        print_error(str(exc))
        return 1
    except KeyboardInterrupt:
        print_error("Aborted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
