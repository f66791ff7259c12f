"""srtshift - parse, edit, time-shift and write SubRip (.srt) subtitle files.

This package models a subtitle file as a Subtitles collection of Subtitle
entries, each carrying a start and end Timestamp, and provides the srtshift
command-line tool built on top of them.
"""
from .cli import main
from .errors import (
    BadEncodingName,
    BadSubtitleStructure,
    IntegerParseError,
    MalformedTimestamp,
    ParsingError,
    SrtError,
    SubtitleIOError,
    TimestampOverflowError,
)
from .models import TOOL_VERSION
from .subtitles import Ordering, Subtitle, Subtitles, compare_subtitles
from .timestamps import Timestamp

__version__ = TOOL_VERSION
__all__ = [
    "main",
    "__version__",
    "Timestamp",
    "Subtitle",
    "Subtitles",
    "Ordering",
    "compare_subtitles",
    "SrtError",
    "ParsingError",
    "IntegerParseError",
    "MalformedTimestamp",
    "BadSubtitleStructure",
    "BadEncodingName",
    "SubtitleIOError",
    "TimestampOverflowError",
]
