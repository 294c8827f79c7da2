"""Main CLI entry point for msgpackvalue."""

from __future__ import annotations

import argparse
import logging
import sys

import structlog

from .. import __version__
from ..codec.decoder import DEFAULT_MAX_DEPTH
from ..exceptions import MessagePackError
from .dump import dump_stream, read_input


def setup_logging(verbose: bool = False) -> None:
    """Send structlog output to stderr, hiding debug events unless verbose."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the msgpackvalue CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="msgpackvalue",
        description="msgpackvalue: MessagePack value codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  msgpackvalue --inspect data.bin            Print every value in a packed file
  echo "95 00 01 02 03 04" | msgpackvalue --inspect - --hex
  msgpackvalue --version                     Show version
        """,
    )

    parser.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Decode and print every value in FILE ('-' for stdin)",
    )

    parser.add_argument(
        "--hex",
        action="store_true",
        help="Treat the input as hexadecimal text",
    )

    parser.add_argument(
        "--max-depth",
        metavar="N",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Deepest array/map nesting to accept (default {DEFAULT_MAX_DEPTH})",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug events to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"msgpackvalue {__version__}",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.max_depth < 1:
        parser.error("--max-depth must be at least 1")

    # Handle --inspect
    if args.inspect:
        try:
            data = read_input(args.inspect, hex_input=args.hex)
        except FileNotFoundError:
            print(f"Error: File not found: {args.inspect}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: Invalid hex input: {e}", file=sys.stderr)
            return 1

        try:
            dump_stream(data, max_depth=args.max_depth)
            return 0
        except MessagePackError as e:
            print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
