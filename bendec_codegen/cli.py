"""
Command-line interface for bendec_codegen.

Reads a JSON schema (a list of normalized type definitions) and emits the
generated declarations to a file or to standard output.
"""

import argparse
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigError,
    GeneratorConfig,
    get_generator,
    get_language_info,
    list_supported_languages,
    load_config,
    save_config,
    write_output,
)
from .codegen.core.generator import generate_code
from .codegen.registry import RegistryError, is_language_supported
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_schema, load_schema_from_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Diagnostics go to stderr so generated code on stdout can be piped.
console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bendec-codegen",
        description="Generate layout-exact declarations from binary type schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bendec-codegen types.json -o types.h
  bendec-codegen --attribute '[[gnu::visibility("default")]]' types.json
  bendec-codegen --type-map Timestamp=std::uint64_t --stdin < types.json
  bendec-codegen --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="JSON schema file")
    input_group.add_argument("--url", help="URL to fetch the JSON schema from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the JSON schema from standard input"
    )

    parser.add_argument(
        "--language",
        "-l",
        default="cpp",
        help="Target language for code generation (default: cpp)",
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--save-config",
        metavar="PATH",
        help="Write the merged configuration to PATH as JSON and exit",
    )

    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--attribute",
        help="Decoration emitted before every struct, enum and union",
    )
    gen_group.add_argument(
        "--type-map",
        metavar="NAME=TYPE",
        action="append",
        default=[],
        help="Map a schema type name to a target type (repeatable)",
    )
    gen_group.add_argument(
        "--lenient-references",
        action="store_true",
        help="Pass unknown type names through instead of failing",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--verbose", action="store_true", help="Show generation metadata"
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def _parse_type_map(entries: List[str]) -> dict:
    mapping = {}
    for entry in entries:
        name, sep, target = entry.partition("=")
        if not sep or not name.strip() or not target.strip():
            raise CLIError(f"Invalid --type-map entry '{entry}', expected NAME=TYPE")
        mapping[name.strip()] = target.strip()
    return mapping


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI overrides."""
    overrides = {}

    if args.attribute is not None:
        overrides["attribute"] = args.attribute

    type_mapping = _parse_type_map(args.type_map)
    if type_mapping:
        overrides["type_mapping"] = type_mapping

    if args.lenient_references:
        overrides["strict_references"] = False

    if args.output:
        overrides["output_file"] = args.output

    try:
        return load_config(
            get_language_name(args.language),
            custom_config=overrides,
            config_file=args.config,
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def get_language_name(language: str) -> str:
    """Primary name of a supported language."""
    if not is_language_supported(language):
        supported = ", ".join(list_supported_languages())
        raise CLIError(f"Unsupported language '{language}' (supported: {supported})")
    return get_language_info(language)["name"]


def _load_input(args: argparse.Namespace) -> list:
    try:
        if args.file:
            return load_schema(file_path=args.file)[1]
        elif args.url:
            return load_schema(url=args.url)[1]
        elif args.stdin:
            return load_schema_from_stream(sys.stdin)[1]
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e

    raise CLIError("Input source required (file, --url, or --stdin)")


def _list_languages() -> int:
    """List supported languages."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(language, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def _save_config(config: GeneratorConfig, path: str) -> int:
    """Write the merged configuration so it can be reused with --config."""
    try:
        save_config(config, path)
    except ConfigError as e:
        raise CLIError(str(e)) from e
    console.print(
        f"[green]✓[/green] Configuration saved to [cyan]{escape(path)}[/cyan]"
    )
    return 0


def _generate_and_output(
    types: list, language: str, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate code and write it to the configured destination."""
    generator = get_generator(language, config)
    result = generate_code(generator, types)

    if not result.success:
        console.print(f"[red]✗ {escape(result.error_message)}[/red]")
        return 1

    if config.output_file:
        try:
            output_path = write_output(result.code, config.output_file)
        except OSError as e:
            console.print(
                f"[red]✗ Failed to write to {escape(config.output_file)}:[/red] "
                f"{escape(str(e))}"
            )
            return 1
        console.print(
            f"[green]✓[/green] Written [cyan]{escape(str(output_path))}[/cyan]"
        )
    elif sys.stdout.isatty():
        Console().print(Syntax(result.code, language, theme="monokai"))
    else:
        sys.stdout.write(result.code)

    if args.verbose and result.metadata:
        table = Table(
            title="Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Property", style="bold")
        table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            table.add_row(key.replace("_", " ").title(), str(value))
        console.print(table)

    if result.warnings:
        console.print(
            Panel(
                "\n".join(f"• {escape(warning)}" for warning in result.warnings),
                title="Warnings",
                border_style="yellow",
            )
        )

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the ``bendec-codegen`` command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.list_languages:
            return _list_languages()

        language = get_language_name(args.language)
        config = _build_config(args)
        if args.save_config:
            return _save_config(config, args.save_config)

        types = _load_input(args)

        logger.debug("Loaded %d type definitions", len(types))
        return _generate_and_output(types, language, config, args)

    except (CLIError, RegistryError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
