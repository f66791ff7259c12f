#!/usr/bin/env python3
"""Lexical helpers shared by the timestamp and subtitle parsers.

This module provides digit-run parsing with fixed storage widths and the
document normalization steps applied before a file is split into blocks.
"""
from __future__ import annotations

import re
from typing import List

from .errors import IntegerParseError


# ============================================================
# Integer Fields
# ============================================================

U8_MAX = 0xFF
U16_MAX = 0xFFFF
USIZE_MAX = 0xFFFF_FFFF_FFFF_FFFF

_DIGITS_RE = re.compile(r"[0-9]+")


def parse_unsigned(text: str, max_value: int) -> int:
    """Parse an ASCII decimal digit run into an integer bounded by max_value.

    Unlike int(), no sign, whitespace, underscores or non-ASCII digits are
    accepted, and values above max_value are an error rather than truncated.

    Args:
        text: Digit run to parse
        max_value: Largest value representable by the target field

    Returns:
        The parsed integer

    Raises:
        IntegerParseError: If text is empty, not all digits, or too large
    """
    if not text:
        raise IntegerParseError(text, "cannot parse integer from empty string")
    if not _DIGITS_RE.fullmatch(text):
        raise IntegerParseError(text, "invalid digit found in string")
    value = int(text)
    if value > max_value:
        raise IntegerParseError(text, "number too large to fit in target type")
    return value


# ============================================================
# Document Normalization
# ============================================================

BOM = "\ufeff"
BLOCK_SEPARATOR = "\n\n"


def strip_bom(text: str) -> str:
    """Remove every leading byte-order mark."""
    return text.lstrip(BOM)


def normalize_line_endings(text: str) -> str:
    """Drop all carriage returns so CRLF files read as LF."""
    if "\r" in text:
        text = text.replace("\r", "")
    return text


def has_alphanumeric(text: str) -> bool:
    return any(ch.isalnum() for ch in text)


def split_blocks(text: str) -> List[str]:
    """Split a normalized document into subtitle-shaped chunks.

    Chunks without any alphanumeric character (stray blank lines at the
    start or end of a file) are dropped.

    Args:
        text: Document text with BOM and carriage returns already removed

    Returns:
        List of chunks in document order
    """
    return [chunk for chunk in text.split(BLOCK_SEPARATOR) if has_alphanumeric(chunk)]
