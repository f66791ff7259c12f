#!/usr/bin/env python3
"""Timestamp arithmetic for SubRip timecodes.

A Timestamp holds hours, minutes, seconds and milliseconds as separate
unsigned fields, mirroring the ``HH:MM:SS,mmm`` timecode. Shifting a field
carries into the next higher unit like an odometer, in both directions,
up to the hour field which has nothing above it and fails instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import MalformedTimestamp, TimestampOverflowError
from .text_processing import U8_MAX, U16_MAX, parse_unsigned


MAX_HOURS = U8_MAX

_FIELD_LIMITS = (
    ("hours", U8_MAX),
    ("minutes", U8_MAX),
    ("seconds", U8_MAX),
    ("milliseconds", U16_MAX),
)


def _check_storage(values: Tuple[int, int, int, int]) -> None:
    for (name, limit), value in zip(_FIELD_LIMITS, values):
        if not 0 <= value <= limit:
            raise ValueError(f"{name} must be in 0..{limit}, got {value}")


@dataclass(order=True)
class Timestamp:
    """A timestamp following the timecode format hours:minutes:seconds,milliseconds.

    The largest timestamp reachable through arithmetic is 255:59:59,999.

    Fields are stored exactly as given: the constructor, ``set`` and
    ``parse`` do not normalize, so ``Timestamp(0, 99, 0, 0)`` keeps
    ``minutes == 99`` until the next shift of that field carries the excess
    upward. Only values that do not fit the field's storage width (8 bits,
    or 16 bits for milliseconds) are rejected.

    Ordering compares hours, then minutes, then seconds, then milliseconds.

    Example:
        >>> t = Timestamp.parse("00:01:10,314")
        >>> t.add_seconds(65)
        >>> str(t)
        '00:02:15,314'
    """
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    def __post_init__(self) -> None:
        _check_storage(self.get())

    # --------------------------------------------------------
    # Parsing / rendering
    # --------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "Timestamp":
        """Construct a Timestamp from a ``hours:minutes:seconds,milliseconds`` string.

        Args:
            text: Timecode text such as ``"01:02:03,456"``

        Returns:
            Parsed Timestamp (fields are not normalized)

        Raises:
            MalformedTimestamp: If a colon- or comma-separated field is missing
            IntegerParseError: If a field is not a digit run or does not fit
        """
        parts = text.split(":", 2)
        if len(parts) < 3:
            raise MalformedTimestamp(text)
        hours = parse_unsigned(parts[0], U8_MAX)
        minutes = parse_unsigned(parts[1], U8_MAX)
        sub = parts[2].split(",", 1)
        if len(sub) < 2:
            raise MalformedTimestamp(text)
        seconds = parse_unsigned(sub[0], U8_MAX)
        milliseconds = parse_unsigned(sub[1], U16_MAX)
        return cls(hours, minutes, seconds, milliseconds)

    def render(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d},{self.milliseconds:03d}"

    def __str__(self) -> str:
        return self.render()

    # --------------------------------------------------------
    # Shifting
    # --------------------------------------------------------

    def add_hours(self, n: int) -> None:
        """Move the timestamp n hours forward (negative n moves it back).

        Raises:
            TimestampOverflowError: If the result would exceed 255 or go below
                zero. The timestamp is left unchanged.
        """
        result = self.hours + n
        if result < 0 or result > MAX_HOURS:
            raise TimestampOverflowError(self.hours, n)
        self.hours = result

    def add_minutes(self, n: int) -> None:
        """Move the timestamp n minutes forward, carrying into hours.

        Raises:
            TimestampOverflowError: If the carry leaves the hour range.
        """
        carry, rest = divmod(self.minutes + n, 60)
        self.add_hours(carry)
        self.minutes = rest

    def add_seconds(self, n: int) -> None:
        """Move the timestamp n seconds forward, carrying into minutes.

        Raises:
            TimestampOverflowError: If the carry leaves the hour range.
        """
        carry, rest = divmod(self.seconds + n, 60)
        self.add_minutes(carry)
        self.seconds = rest

    def add_milliseconds(self, n: int) -> None:
        """Move the timestamp n milliseconds forward, carrying into seconds.

        Raises:
            TimestampOverflowError: If the carry leaves the hour range.
        """
        carry, rest = divmod(self.milliseconds + n, 1000)
        self.add_seconds(carry)
        self.milliseconds = rest

    def add(self, other: "Timestamp") -> None:
        """Move the timestamp forward by the duration held in other.

        Fields are applied hours first. If an intermediate step overflows,
        the fields applied before it stay applied.
        """
        self.add_hours(other.hours)
        self.add_minutes(other.minutes)
        self.add_seconds(other.seconds)
        self.add_milliseconds(other.milliseconds)

    def sub(self, other: "Timestamp") -> None:
        """Move the timestamp backward by the duration held in other.

        Fields are applied milliseconds first, with the same partial-update
        behaviour as add().
        """
        self.add_milliseconds(-other.milliseconds)
        self.add_seconds(-other.seconds)
        self.add_minutes(-other.minutes)
        self.add_hours(-other.hours)

    # --------------------------------------------------------
    # Raw access
    # --------------------------------------------------------

    def get(self) -> Tuple[int, int, int, int]:
        """Return (hours, minutes, seconds, milliseconds)."""
        return (self.hours, self.minutes, self.seconds, self.milliseconds)

    def set(self, hours: int, minutes: int, seconds: int, milliseconds: int) -> None:
        """Overwrite all four fields without normalizing them."""
        _check_storage((hours, minutes, seconds, milliseconds))
        self.hours = hours
        self.minutes = minutes
        self.seconds = seconds
        self.milliseconds = milliseconds

    def copy(self) -> "Timestamp":
        return Timestamp(*self.get())

    def to_milliseconds(self) -> int:
        """Total duration in milliseconds, used for reporting offsets."""
        return ((self.hours * 60 + self.minutes) * 60 + self.seconds) * 1000 + self.milliseconds
