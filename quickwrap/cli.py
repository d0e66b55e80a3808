"""
Command-line interface for QuickWrap

Selects a target type from a type catalog, generates its interface and
delegating implementation, and writes them to disk or prints them.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import yaml

from quickwrap import __version__
from quickwrap.api import GenerationResult, QuickWrap
from quickwrap.config import QuickWrapConfig
from quickwrap.errors import QuickWrapError
from quickwrap.rich_output import RichOutputManager

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="quickwrap",
        description="QuickWrap - generate mockable service wrappers for .NET types",
        epilog='Use "quickwrap <command> --help" for detailed command help.',
    )

    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output and debug logging",
    )
    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable rich terminal output (use plain text)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Generate interface and implementation for a type"
    )
    generate_parser.add_argument("catalog", help="Path to the type catalog (YAML or JSON)")
    generate_parser.add_argument(
        "--type", "-t", dest="type_name", required=True, help="Full name of the type to wrap"
    )
    generate_parser.add_argument(
        "--namespace", "-n", help="Namespace for generated code (default: <type namespace>.Services)"
    )
    generate_parser.add_argument("--docs", help="XML documentation file for member summaries")
    generate_parser.add_argument("--output-dir", "-o", help="Directory to write generated files to")
    generate_parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite existing generated files"
    )
    generate_parser.add_argument(
        "--stdout", action="store_true", help="Print generated sources instead of writing files"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show the wrappable surface of a type")
    inspect_parser.add_argument("catalog", help="Path to the type catalog (YAML or JSON)")
    inspect_parser.add_argument(
        "--type", "-t", dest="type_name", required=True, help="Full name of the type to inspect"
    )
    inspect_parser.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (default: text)",
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Show or create configuration")
    config_group = config_parser.add_mutually_exclusive_group(required=True)
    config_group.add_argument("--show", action="store_true", help="Show effective configuration")
    config_group.add_argument("--init", metavar="PATH", help="Write a default configuration file")

    return parser


def _print_warnings(output: RichOutputManager, result: GenerationResult) -> None:
    if not result.warnings:
        return
    output.print_warning(
        f"{len(result.warnings)} member(s) of {result.type_name} not reproduced faithfully"
    )
    table = output.create_table("Unsupported member shapes", "Member", "Reason")
    for warning in result.warnings:
        table.add_row(warning.member, warning.reason)
    output.print_table(table)


def cmd_generate(args: argparse.Namespace, quickwrap: QuickWrap, output: RichOutputManager) -> int:
    result = quickwrap.generate(
        args.catalog,
        args.type_name,
        output_namespace=args.namespace,
        documentation=args.docs,
    )

    if args.stdout:
        output.print_code(result.interface_source, title=result.interface_file_name)
        output.print_code(result.class_source, title=result.class_file_name)
    else:
        overwrite = True if args.overwrite else None
        for path in quickwrap.write(result, args.output_dir, overwrite=overwrite):
            output.print_success(f"Wrote {path}")

    _print_warnings(output, result)
    return 0


def cmd_inspect(args: argparse.Namespace, quickwrap: QuickWrap, output: RichOutputManager) -> int:
    model = quickwrap.inspect(args.catalog, args.type_name)

    if args.format == "json":
        print(json.dumps(model.to_dict(), indent=2))
    elif args.format == "yaml":
        print(yaml.dump(model.to_dict(), default_flow_style=False, sort_keys=False))
    else:
        output.print_surface(model)
        output.print_info(f"Namespaces: {', '.join(sorted(model.namespaces)) or '(none)'}")
    return 0


def cmd_config(args: argparse.Namespace, quickwrap: QuickWrap, output: RichOutputManager) -> int:
    if args.init:
        fmt = "yaml" if args.init.endswith((".yaml", ".yml")) else "json"
        QuickWrapConfig.default().to_file(args.init, format=fmt)
        output.print_success(f"Wrote default configuration to {args.init}")
    else:
        output.console.print(quickwrap.config.get_config_summary(), markup=False)
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "inspect": cmd_inspect,
    "config": cmd_config,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(getattr(args, "verbose", False))
    output = RichOutputManager(use_rich=not args.no_rich)

    try:
        config = QuickWrapConfig.load(args.config)
        return COMMANDS[args.command](args, QuickWrap(config), output)
    except QuickWrapError as e:
        logger.debug("Generation failed", exc_info=True)
        output.print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
