# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the classgen command-line interface."""

import argparse
import sys
from pathlib import Path

from classgen import __version__
from classgen.errors import ClassgenError
from classgen.generator import ClassGenerator
from classgen.logging_config import configure_logging
from classgen.model.entities import ParseOptions
from classgen.workspace.config import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    find_workspace_config,
    load_workspace_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the classgen CLI."""
    parser = _build_parser()
    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(verbose=getattr(args, "verbose", False))
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classgen",
        description="classgen - generate source files from data type schemas",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate one output file per data type",
        description=(
            "Generate an output file for each data type found in the schema documents, "
            "using the given template."
        ),
    )
    generate_parser.add_argument(
        "schemas_directory",
        nargs="?",
        help="Directory containing the schema documents (*.json, *.yaml, *.yml)",
    )
    generate_parser.add_argument(
        "template_file",
        nargs="?",
        help="Template file rendered for every data type",
    )
    generate_parser.add_argument(
        "--output-directory",
        help="Directory where all generated files are saved (default: a new temporary directory)",
    )
    generate_parser.add_argument(
        "--extensions-directory",
        help="Directory containing extension scripts loaded before generation",
    )
    generate_parser.add_argument(
        "--output-extension",
        help="Suffix of generated files (default: the template file's suffix)",
    )
    generate_parser.add_argument(
        "--alphabetize",
        action="store_true",
        help="List class properties and enum values in alphabetical order",
    )
    generate_parser.add_argument(
        "--alphabetize-properties",
        action="store_true",
        default=None,
        help="List class properties in alphabetical order",
    )
    generate_parser.add_argument(
        "--alphabetize-enum-values",
        action="store_true",
        default=None,
        help="List enum values in alphabetical order",
    )
    generate_parser.add_argument(
        "--remove-output-files",
        action="store_true",
        default=None,
        help="Delete existing files in the output directory instead of failing",
    )
    generate_parser.add_argument(
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    generate_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    return parser


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    try:
        config = _load_config(args.config)
    except WorkspaceConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    schemas_directory = _path_option(args.schemas_directory, config.schemas_directory)
    template_file = _path_option(args.template_file, config.template)
    if schemas_directory is None or template_file is None:
        print(
            "Error: a schemas directory and a template file are required "
            f"(as arguments or in {CONFIG_FILE_NAME}).",
            file=sys.stderr,
        )
        return 1

    generator = ClassGenerator(
        schemas_directory,
        template_file,
        output_directory=_path_option(args.output_directory, config.output_directory),
        extensions_directory=_path_option(args.extensions_directory, config.extensions_directory),
        parse_options=ParseOptions(
            alphabetize_properties=args.alphabetize
            or _flag_option(args.alphabetize_properties, config.alphabetize_properties),
            alphabetize_enum_values=args.alphabetize
            or _flag_option(args.alphabetize_enum_values, config.alphabetize_enum_values),
        ),
        remove_output_files=_flag_option(args.remove_output_files, config.remove_output_files),
        output_extension=args.output_extension if args.output_extension is not None else config.output_extension,
    )

    try:
        result = generator.generate()
    except (ClassgenError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Generated {len(result.written_files)} file(s) in '{result.output_directory}'.")
    return 0


def _load_config(config_path: str | None) -> WorkspaceConfig:
    if config_path is not None:
        return load_workspace_config(Path(config_path))
    found = find_workspace_config(Path.cwd())
    if found is None:
        return WorkspaceConfig()
    return load_workspace_config(found)


def _path_option(value: str | None, configured: Path | None) -> Path | None:
    """Prefer a command line path over the configured one."""
    if value is not None:
        return Path(value)
    return configured


def _flag_option(value: bool | None, configured: bool) -> bool:
    return configured if value is None else value
