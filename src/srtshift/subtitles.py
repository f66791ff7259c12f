#!/usr/bin/env python3
"""Subtitle entries and subtitle collections.

This module contains:
- Ordering / compare_subtitles: the ordering policy for subtitle entries
- Subtitle: one cue (number, start, end, text) with its block grammar
- Subtitles: an ordered collection representing a whole .srt document
"""
from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union, overload

from .errors import BadSubtitleStructure
from .file_io import read_subtitle_text, write_subtitle_text
from .text_processing import (
    BLOCK_SEPARATOR,
    USIZE_MAX,
    normalize_line_endings,
    parse_unsigned,
    split_blocks,
    strip_bom,
)
from .timestamps import Timestamp


TIME_SEPARATOR = " --> "


# ============================================================
# Ordering
# ============================================================

class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def compare_subtitles(a: "Subtitle", b: "Subtitle") -> Ordering:
    """Order two subtitles by number, then start time, then end time.

    Start and end times only break ties between equal numbers, which happens
    in files with duplicated counters. Text is never compared.
    """
    left = (a.num, a.start_time, a.end_time)
    right = (b.num, b.start_time, b.end_time)
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


# ============================================================
# Subtitle
# ============================================================

@dataclass
class Subtitle:
    """A single subtitle.

    Attributes:
        num: Numeric counter of the subtitle (not required to be unique)
        start_time: Time the subtitle appears
        end_time: Time the subtitle disappears (not checked against start_time)
        text: Subtitle text, possibly spanning several lines

    The timestamps are copied on construction so that shifting one subtitle
    never moves another one sharing the same Timestamp object.

    Example:
        >>> sub = Subtitle.parse("2\\n00:00:01,500 --> 00:00:02,500\\nFooBar")
        >>> sub.text
        'FooBar'
    """
    num: int
    start_time: Timestamp
    end_time: Timestamp
    text: str

    def __post_init__(self) -> None:
        self.start_time = self.start_time.copy()
        self.end_time = self.end_time.copy()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Subtitle):
            return NotImplemented
        return compare_subtitles(self, other) is Ordering.LESS

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Subtitle):
            return NotImplemented
        return compare_subtitles(self, other) is not Ordering.GREATER

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Subtitle):
            return NotImplemented
        return compare_subtitles(self, other) is Ordering.GREATER

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Subtitle):
            return NotImplemented
        return compare_subtitles(self, other) is not Ordering.LESS

    @classmethod
    def parse(cls, text: str) -> "Subtitle":
        """Construct a Subtitle from a block of the form ``num\\nstart --> end\\ntext``.

        Anything after the end timecode on the time line (position or
        alignment directives) is discarded.

        Args:
            text: One subtitle block; leading blank lines are ignored

        Returns:
            Parsed Subtitle

        Raises:
            BadSubtitleStructure: If the number, time line, separator, a
                timecode, or the text section is missing
            IntegerParseError: If the number or a timecode field is not a
                valid digit run
            MalformedTimestamp: If a timecode is missing a field
        """
        parts = text.lstrip("\n").split("\n", 2)
        if not parts[0]:
            raise BadSubtitleStructure(None)
        num = parse_unsigned(parts[0], USIZE_MAX)

        if len(parts) < 2:
            raise BadSubtitleStructure(num)
        times = parts[1].split(TIME_SEPARATOR)
        if len(times) < 2:
            raise BadSubtitleStructure(num)
        start_text = times[0]
        end_text = times[1].split(" ", 1)[0]
        if not start_text or not end_text:
            raise BadSubtitleStructure(num)
        start = Timestamp.parse(start_text)
        end = Timestamp.parse(end_text)

        if len(parts) < 3:
            raise BadSubtitleStructure(num)
        return cls(num, start, end, parts[2])

    def render(self) -> str:
        return f"{self.num}\n{self.start_time}{TIME_SEPARATOR}{self.end_time}\n{self.text}"

    def __str__(self) -> str:
        return self.render()

    # Shifts touch start_time first; if end_time then overflows, start_time
    # keeps its new value.

    def add_hours(self, n: int) -> None:
        self.start_time.add_hours(n)
        self.end_time.add_hours(n)

    def add_minutes(self, n: int) -> None:
        self.start_time.add_minutes(n)
        self.end_time.add_minutes(n)

    def add_seconds(self, n: int) -> None:
        self.start_time.add_seconds(n)
        self.end_time.add_seconds(n)

    def add_milliseconds(self, n: int) -> None:
        self.start_time.add_milliseconds(n)
        self.end_time.add_milliseconds(n)

    def add(self, timestamp: Timestamp) -> None:
        self.start_time.add(timestamp)
        self.end_time.add(timestamp)

    def sub(self, timestamp: Timestamp) -> None:
        self.start_time.sub(timestamp)
        self.end_time.sub(timestamp)


# ============================================================
# Subtitles
# ============================================================

class Subtitles:
    """A collection of Subtitle objects representing an entire .srt file.

    Insertion order is kept and is what gets written out; it is independent
    of each subtitle's number. Iterating yields the stored Subtitle objects
    themselves, so shifting them in a loop edits the collection in place.

    Example:
        >>> subs = Subtitles()
        >>> subs.push(Subtitle.parse("1\\n00:00:00,000 --> 00:00:01,000\\nHello world!"))
        >>> subs.push(Subtitle.parse("2\\n00:00:01,200 --> 00:00:03,100\\nThis is a subtitle!"))
        >>> print(subs)
        1
        00:00:00,000 --> 00:00:01,000
        Hello world!
        <BLANKLINE>
        2
        00:00:01,200 --> 00:00:03,100
        This is a subtitle!
    """

    def __init__(self, subs: Optional[Iterable[Subtitle]] = None) -> None:
        self._subs: List[Subtitle] = list(subs) if subs is not None else []

    @classmethod
    def from_list(cls, subs: List[Subtitle]) -> "Subtitles":
        return cls(subs)

    # --------------------------------------------------------
    # Parsing / rendering
    # --------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "Subtitles":
        """Construct a collection by parsing a whole .srt document.

        A leading byte-order mark and all carriage returns are removed, the
        text is split on blank lines, and chunks holding no alphanumeric
        character are skipped. The first block that fails to parse aborts
        the whole document.

        Args:
            text: Document text

        Returns:
            Parsed collection, in document order

        Raises:
            ParsingError: From the first malformed block
        """
        text = normalize_line_endings(strip_bom(text))
        res = cls()
        for chunk in split_blocks(text):
            res.push(Subtitle.parse(chunk))
        return res

    @classmethod
    def parse_from_file(cls, path: Union[str, Path], encoding: Optional[str] = None) -> "Subtitles":
        """Construct a collection by parsing a .srt file.

        Args:
            path: File to read
            encoding: Encoding label such as ``"iso-8859-7"``, or None for UTF-8

        Raises:
            BadEncodingName: If the label is unknown (checked before reading)
            SubtitleIOError: If the file cannot be read or decoded
            ParsingError: If the contents are malformed
        """
        return cls.parse(read_subtitle_text(Path(path), encoding))

    def write_to_file(self, path: Union[str, Path], encoding: Optional[str] = None) -> None:
        """Write the collection to a .srt file.

        Args:
            path: Destination file
            encoding: Encoding label, or None for UTF-8

        Raises:
            BadEncodingName: If the label is unknown (checked before writing)
            SubtitleIOError: If the file cannot be written
        """
        write_subtitle_text(Path(path), self.render(), encoding)

    def render(self) -> str:
        return BLOCK_SEPARATOR.join(sub.render() for sub in self._subs)

    def __str__(self) -> str:
        return self.render()

    # --------------------------------------------------------
    # Sequence behaviour
    # --------------------------------------------------------

    def push(self, sub: Subtitle) -> None:
        """Add a subtitle at the end of the collection."""
        self._subs.append(sub)

    append = push

    def sort(self) -> None:
        """Stable in-place sort by number, then start time, then end time."""
        self._subs.sort(key=functools.cmp_to_key(compare_subtitles))

    def renumber(self, start: int = 1) -> None:
        """Rewrite every subtitle number sequentially in the current order."""
        for i, sub in enumerate(self._subs, start=start):
            sub.num = i

    def to_list(self) -> List[Subtitle]:
        return list(self._subs)

    def is_empty(self) -> bool:
        return not self._subs

    def __len__(self) -> int:
        return len(self._subs)

    def __iter__(self) -> Iterator[Subtitle]:
        return iter(self._subs)

    @overload
    def __getitem__(self, i: int) -> Subtitle: ...

    @overload
    def __getitem__(self, i: slice) -> List[Subtitle]: ...

    def __getitem__(self, i):
        return self._subs[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subtitles):
            return NotImplemented
        return self._subs == other._subs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Subtitles({self._subs!r})"

    # --------------------------------------------------------
    # Collection-wide shifts
    # --------------------------------------------------------

    def add_hours(self, n: int) -> None:
        for sub in self._subs:
            sub.add_hours(n)

    def add_minutes(self, n: int) -> None:
        for sub in self._subs:
            sub.add_minutes(n)

    def add_seconds(self, n: int) -> None:
        for sub in self._subs:
            sub.add_seconds(n)

    def add_milliseconds(self, n: int) -> None:
        for sub in self._subs:
            sub.add_milliseconds(n)

    def add(self, timestamp: Timestamp) -> None:
        for sub in self._subs:
            sub.add(timestamp)

    def sub(self, timestamp: Timestamp) -> None:
        for sub in self._subs:
            sub.sub(timestamp)
