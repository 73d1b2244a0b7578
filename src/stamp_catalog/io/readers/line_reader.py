"""
Text line reading for catalog input.

The whole input is buffered before processing starts. Streams are read in
text mode (universal newlines) and each line is returned without its
terminator; any other whitespace is left in place for the grammar.
"""

import logging
from pathlib import Path
from typing import List, TextIO, Union

logger = logging.getLogger(__name__)


class LineReadError(Exception):
    """Raised when an input file cannot be read."""

    pass


def read_lines(source: TextIO) -> List[str]:
    """Read ``source`` to the end and return its lines without terminators."""
    lines: List[str] = []
    for raw in source:
        lines.append(raw[:-1] if raw.endswith("\n") else raw)
    return lines


def read_file_lines(file_path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """
    Read every line of a text file.

    Args:
        file_path: Path to the input file
        encoding: Text encoding of the file

    Returns:
        Lines without terminators

    Raises:
        LineReadError: If the file is missing, unreadable or not decodable
    """
    path = Path(file_path)
    try:
        with path.open("r", encoding=encoding) as handle:
            lines = read_lines(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise LineReadError(f"Cannot read input file {path}: {exc}") from exc

    logger.debug("Read %d lines from %s", len(lines), path)
    return lines
