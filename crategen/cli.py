"""Command-line entry point.

Usage::

    crategen generate petstore https://petstore3.swagger.io/api/v3 \\
        --api-spec-url https://petstore3.swagger.io/api/v3/openapi.json
    crategen generate my-api https://api.example.com --spec-file ./openapi.yaml -o ./crates
    crategen test-generation -o /tmp/crategen
    crategen install-cargo-make
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.panel import Panel

from crategen import __version__
from crategen.config import Command, Config, ProjectPath
from crategen.errors import CrategenError
from crategen.generator_config import RustGeneratorConfigs, copy_spec_file
from crategen.scaffolder import install_cargo_make, scaffold_crate
from crategen.utils import console, print_error, print_success, print_summary_table

INSTALL_CARGO_MAKE = "install-cargo-make"

TEST_API_NAME = "petstore"
TEST_API_URL = "https://petstore3.swagger.io/api/v3"
TEST_SPEC_FILE_NAME = "petstore.yaml"


async def run(config: Config) -> Path:
    """Scaffold the crate, then write the generator config and copy the spec."""
    console.print(
        Panel(
            f"[bold bright_cyan]crategen {__version__}[/bold bright_cyan]\n"
            f"API     : {config.site_or_api_name} ({config.api_url})\n"
            f"Crate   : {config.get_output_project_dir()}\n"
            f"Command : {config.command.value}",
            title="[bold]Scaffold[/bold]",
            border_style="bright_cyan",
        )
    )
    project_dir = await scaffold_crate(config)
    await RustGeneratorConfigs.new(config).write_to_yaml_file(config)
    await copy_spec_file(config)

    print_summary_table(
        {
            "Crate": str(project_dir),
            "Makefile": str(config.get_output_project_subpath(ProjectPath.MAKEFILE)),
            "Spec file": config.try_get_spec_file_name(),
            "Next step": "cargo make generate-all",
        },
        title="Scaffold complete",
    )
    return project_dir


def _add_common_options(parser: argparse.ArgumentParser, spec_file: bool = True) -> None:
    parser.add_argument(
        "--api-spec-url",
        default=None,
        help="URL the OpenAPI specification can be downloaded from",
    )
    # test-generation writes the Petstore spec itself
    if spec_file:
        parser.add_argument(
            "--spec-file",
            type=Path,
            default=None,
            help="Local OpenAPI specification file to copy into the crate",
        )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("."),
        help="Directory the crate directory is created in (default: .)",
    )
    parser.add_argument(
        "--lib-name",
        default=None,
        help="Crate name (default: derived from the API name)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crategen",
        description="Scaffold a Rust client crate generated from an OpenAPI specification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  crategen generate petstore https://petstore3.swagger.io/api/v3 "
            "--spec-file openapi.yaml\n"
            "  crategen test-generation -o /tmp/crategen\n"
            "  crategen install-cargo-make\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(Command.GENERATE.value, help="Scaffold a new crate")
    generate.add_argument("site_or_api_name", help="Name of the API or site")
    generate.add_argument("api_url", help="Base URL of the API")
    _add_common_options(generate)

    test_generation = subparsers.add_parser(
        Command.TEST_GENERATION.value,
        help="Scaffold a throwaway crate from the built-in Petstore spec",
    )
    test_generation.add_argument("site_or_api_name", nargs="?", default=TEST_API_NAME)
    test_generation.add_argument("api_url", nargs="?", default=TEST_API_URL)
    _add_common_options(test_generation, spec_file=False)

    subparsers.add_parser(INSTALL_CARGO_MAKE, help="Force install cargo-make")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Resolve parsed arguments into a ``Config``.

    Test generation always writes its spec to ``petstore.yaml`` inside the
    crate directory.
    """
    command = Command(args.command)
    config = Config(
        site_or_api_name=args.site_or_api_name,
        api_url=args.api_url,
        api_spec_url=args.api_spec_url,
        local_api_spec_filepath=getattr(args, "spec_file", None),
        output_dir=args.output,
        lib_name=args.lib_name,
        command=command,
    )
    if command is Command.TEST_GENERATION:
        spec_path = config.get_output_project_dir() / TEST_SPEC_FILE_NAME
        config = config.model_copy(update={"local_api_spec_filepath": spec_path})
    return config


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``crategen`` and ``python -m crategen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == INSTALL_CARGO_MAKE:
            asyncio.run(install_cargo_make())
        else:
            asyncio.run(run(config_from_args(args)))
    except CrategenError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_success("Done.")
