"""
Command-line entry point for converting accessibility dumps.
"""

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config.tree_config import load_config
from .encoding.encoder import conversion_stats, encode_flat
from .errors import AxTreeError
from .query.parser import parse_query
from .services.converter import convert_dump
from .tools.accessibility.dump_parser import parse_dump
from .tools.accessibility.flattener import flatten
from .utils.logging import setup_logging

console = Console()
error_console = Console(stderr=True)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _print_stats(original: str, encoded: str) -> None:
    stats = conversion_stats(original, encoded)
    table = Table(title="Conversion", show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column(justify="right")
    table.add_row("Original", f"{stats.original_size:,} bytes")
    table.add_row("Encoded", f"{stats.encoded_size:,} bytes")
    table.add_row("Saved", f"{stats.saved_bytes:,} bytes ({stats.savings_ratio:.1%})")
    error_console.print(table)


def convert(args: argparse.Namespace) -> int:
    """Run the convert command and return the exit code."""
    config = load_config(args.config)
    if args.max_elements is not None:
        config.max_elements = args.max_elements
    if args.include_zero_size:
        config.include_zero_size = True
    if args.pretty:
        config.pretty = True

    text = _read_input(args.dump_file)

    if args.flat or args.query:
        root = parse_dump(text)
        query = parse_query(args.query) if args.query else None
        elements = flatten(
            root,
            max_elements=config.max_elements,
            include_zero_size=config.include_zero_size,
            query=query,
        )
        output = encode_flat(elements, pretty=config.pretty, include_ids=config.include_ids)
    else:
        output = convert_dump(text, pretty=config.pretty, include_ids=config.include_ids)

    console.print(output, markup=False, highlight=False, soft_wrap=True)
    if args.stats:
        _print_stats(text, output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="axtree",
        description="Accessibility tree flattening, querying and lightweight encoding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with detailed logs",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser(
        "convert", help="Convert a text accessibility dump to lightweight JSON"
    )
    convert_parser.add_argument("dump_file", help="Dump file path, or - for stdin")
    convert_parser.add_argument(
        "--pretty", action="store_true", help="Indent output and sort keys"
    )
    convert_parser.add_argument(
        "--stats", action="store_true", help="Print size savings to stderr"
    )
    convert_parser.add_argument(
        "--query", type=str, default=None, help='Filter query, e.g. "role=Button"'
    )
    convert_parser.add_argument(
        "--max-elements", type=int, default=None, help="Element ceiling for flat output"
    )
    convert_parser.add_argument(
        "--include-zero-size",
        action="store_true",
        help="Keep elements with zero width and height",
    )
    convert_parser.add_argument(
        "--flat", action="store_true", help="Flatten instead of keeping the hierarchy"
    )
    convert_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="command_verbose",
        help="Enable verbose output with detailed logs",
    )
    convert_parser.set_defaults(handler=convert)

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the command and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose or getattr(args, "command_verbose", False))

    try:
        return args.handler(args)
    except (AxTreeError, OSError, ValueError) as e:
        error_console.print(Text(f"Error: {e}", style="bold red"))
        return 1


def cli():
    """CLI entry point with argument parsing."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        error_console.print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    cli()
