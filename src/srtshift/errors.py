#!/usr/bin/env python3
"""Exception types raised by srtshift.

Every failure produced while parsing, loading or shifting subtitles derives
from SrtError:
- ParsingError: anything that stops text or a file from becoming Subtitles
- TimestampOverflowError: a time shift that would leave the 0..255 hour range
"""
from __future__ import annotations

from typing import Optional


class SrtError(Exception):
    """Base class for all srtshift errors."""


# ============================================================
# Parsing
# ============================================================

class ParsingError(SrtError):
    """Raised by any function that parses strings or files."""


class IntegerParseError(ParsingError, ValueError):
    """A digit run was empty, contained a non-digit, or did not fit its field.

    Attributes:
        text: The offending text
        reason: Short description of what was wrong with it
    """

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class MalformedTimestamp(ParsingError, ValueError):
    """A timecode was missing one of its four fields."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"tried parsing a malformed timestamp: {text!r}")


class BadSubtitleStructure(ParsingError, ValueError):
    """A subtitle block was missing its time line, separator, timecode or text.

    Attributes:
        number: The subtitle number, or None if the failure happened before
            the number line could be read
    """

    def __init__(self, number: Optional[int] = None) -> None:
        self.number = number
        label = str(number) if number is not None else "unknown"
        super().__init__(
            f"tried parsing an incorrectly formatted subtitle (subtitle number {label})"
        )


class BadEncodingName(ParsingError, LookupError):
    """The encoding label is not known to the codec registry."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"incorrect encoding name provided: {label!r}")


class SubtitleIOError(ParsingError, OSError):
    """Reading or writing a subtitle file failed.

    The underlying exception is available as ``__cause__``.
    """

    def __init__(self, path: object, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


# ============================================================
# Time arithmetic
# ============================================================

class TimestampOverflowError(SrtError, OverflowError):
    """A shift would move the hour field above 255 or below zero.

    Attributes:
        hours: Hour value before the failed shift
        delta: Hour delta that was requested
    """

    def __init__(self, hours: int, delta: int) -> None:
        self.hours = hours
        self.delta = delta
        super().__init__(
            f"Surpassed limits of Timestamp! ({hours} hours {delta:+d} is outside 0..255)"
        )
