#!/usr/bin/env python3
"""Console output helpers for the srtshift command line.

The library modules never print; everything user-facing goes through the
functions here so quiet mode can be honoured in one place.
"""
from __future__ import annotations

import sys

from .errors import SrtError


# ============================================================
# Logging
# ============================================================

def log(msg: str, *, quiet: bool = False) -> None:
    """Print a log message to stdout unless quiet mode is enabled.

    Args:
        msg: Message to log
        quiet: If True, suppress output
    """
    if not quiet:
        print(msg, flush=True)


def warn(msg: str, *, quiet: bool = False) -> None:
    """Print a warning message to stderr unless quiet mode is enabled."""
    if not quiet:
        print(f"WARNING: {msg}", file=sys.stderr, flush=True)


def die(msg: str, code: int = 1) -> int:
    """Print an error message to stderr and return an exit code.

    Errors are printed even in quiet mode.

    Args:
        msg: Error message to display
        code: Exit code to return (default: 1)

    Returns:
        The exit code provided
    """
    print(f"ERROR: {msg}", file=sys.stderr, flush=True)
    return code


# ============================================================
# Error Formatting
# ============================================================

def describe_error(exc: BaseException) -> str:
    """Render an exception for console output.

    srtshift errors are prefixed with their kind (``BadSubtitleStructure: ...``)
    so users can tell a malformed file from an I/O problem at a glance.
    """
    if isinstance(exc, SrtError):
        return f"{type(exc).__name__}: {exc}"
    return str(exc)


def format_offset(milliseconds: int) -> str:
    """Format a signed millisecond count for logs, e.g. ``-2.500s``."""
    sign = "-" if milliseconds < 0 else "+"
    ms = abs(milliseconds)
    return f"{sign}{ms // 1000}.{ms % 1000:03d}s"
