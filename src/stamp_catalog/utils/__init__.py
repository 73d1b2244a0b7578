"""Shared utilities: structured logging and line error reporting."""
