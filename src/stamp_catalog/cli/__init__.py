"""Command-line interface for the stamp catalog."""

from stamp_catalog.cli.__main__ import build_parser, main

__all__ = ["build_parser", "main"]
