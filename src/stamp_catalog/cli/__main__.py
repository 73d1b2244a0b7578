"""
Command-line entry point for the stamp catalog.

Usage:
    python -m stamp_catalog [INPUT] [options]

Reads stamp and query lines from INPUT (a file path, or stdin when omitted or
``-``), prints the stamps matching each query on stdout and writes one
``Error in line N: ...`` diagnostic per rejected line on stderr.

Examples:
    # Read from stdin
    python -m stamp_catalog < catalog.txt

    # Read a file and export rejected lines
    python -m stamp_catalog catalog.txt --errors-csv logs/rejected.csv

    # Show structured debug logs on stderr
    python -m stamp_catalog catalog.txt --log-level DEBUG
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from stamp_catalog.config import get_settings
from stamp_catalog.config.settings import VALID_LOG_LEVELS
from stamp_catalog.domain.catalog.service import emit_result, run_catalog
from stamp_catalog.io.readers.line_reader import (
    LineReadError,
    read_file_lines,
    read_lines,
)
from stamp_catalog.utils.logging import bind_context, set_log_level

STDIN_MARKER = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stamp-catalog",
        description="Answer year-range queries over a stamp catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input format:
  <name> <price> <year> <post office>    stamp lines, before any query
  <begin year> <end year>                query lines

Examples:
  stamp-catalog < catalog.txt
  stamp-catalog catalog.txt --errors-csv logs/rejected.csv
        """,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=STDIN_MARKER,
        help="Input file (default: stdin)",
    )
    parser.add_argument(
        "--errors-csv",
        type=Path,
        default=None,
        help="Also export rejected lines to this CSV file",
    )
    parser.add_argument(
        "--encoding",
        default=None,
        help="Input file encoding (default: from settings, utf-8)",
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Structured log level on stderr (default: from LOG_LEVEL)",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """
    Run the catalog CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        stdin/stdout/stderr: Stream overrides (default: the sys streams)

    Returns:
        Exit code: 0 for any input content, 1 when the input file is unreadable
    """
    args = build_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    settings = get_settings()
    if args.log_level:
        set_log_level(args.log_level)

    errors_csv = args.errors_csv
    if errors_csv is None and settings.errors_csv_path:
        errors_csv = Path(settings.errors_csv_path)

    source_name = "stdin" if args.input == STDIN_MARKER else args.input
    logger = bind_context(source=source_name)

    if args.input == STDIN_MARKER:
        lines = read_lines(stdin)
    else:
        try:
            lines = read_file_lines(
                args.input, encoding=args.encoding or settings.input_encoding
            )
        except LineReadError as exc:
            logger.error("cli.input_unreadable", error=str(exc))
            stderr.write(f"{exc}\n")
            return 1

    result = run_catalog(lines)
    emit_result(result, stdout, stderr, errors_csv=errors_csv, source_name=source_name)

    logger.info("cli.run_completed", **result.as_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
