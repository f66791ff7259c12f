#!/usr/bin/env python3
"""Reading and writing subtitle files.

This module is the only place srtshift touches the file system. It handles:
- Encoding label resolution (WHATWG Encoding Standard labels)
- Decoding file bytes into text
- Encoding text and writing it atomically
"""
from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Optional

import webencodings

from .errors import BadEncodingName, SubtitleIOError


DEFAULT_ENCODING = "utf-8"


# ============================================================
# Encodings
# ============================================================

def resolve_encoding(label: Optional[str]) -> webencodings.Encoding:
    """Resolve an encoding label the way web browsers do.

    Labels follow the WHATWG Encoding Standard, so ``"latin1"`` and
    ``"iso-8859-1"`` both mean windows-1252, and ``"greek"`` means
    iso-8859-7.

    Args:
        label: Encoding label such as ``"iso-8859-7"`` or ``"greek"``, or None

    Returns:
        The matching Encoding (UTF-8 when label is None)

    Raises:
        BadEncodingName: If the label is not a known encoding label
    """
    if label is None:
        return webencodings.UTF8
    encoding = webencodings.lookup(label)
    if encoding is None:
        raise BadEncodingName(label)
    return encoding


# ============================================================
# File System Utilities
# ============================================================

def ensure_parent_dir(path: Path) -> None:
    """Create a file's parent directory if it does not exist yet."""
    parent = path.parent
    if parent and not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)


def read_subtitle_text(path: Path, encoding: Optional[str] = None) -> str:
    """Read a subtitle file into a string.

    Without an explicit encoding the file must be valid UTF-8. With one,
    a leading UTF-8 or UTF-16 byte-order mark overrides the label and is
    dropped, and undecodable bytes become U+FFFD replacement characters.

    Args:
        path: File to read
        encoding: Optional encoding label

    Returns:
        Decoded file contents (carriage returns are left in place)

    Raises:
        BadEncodingName: If the label is unknown; no I/O happens in that case
        SubtitleIOError: If the file cannot be read, or is not valid UTF-8
            when no encoding was given
    """
    codec = resolve_encoding(encoding)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SubtitleIOError(path, e.strerror or str(e)) from e

    if encoding is None:
        try:
            return data.decode(DEFAULT_ENCODING)
        except UnicodeDecodeError as e:
            raise SubtitleIOError(path, f"stream did not contain valid UTF-8 ({e.reason})") from e
    text, _ = webencodings.decode(data, codec, errors="replace")
    return text


def write_subtitle_text(path: Path, content: str, encoding: Optional[str] = None) -> None:
    """Write text to a subtitle file atomically.

    Characters the target encoding cannot represent are written as XML
    numeric character references (``&#1234;``). If the write fails, the
    temporary file is removed.

    Args:
        path: Destination file path
        content: Text to write
        encoding: Optional encoding label (UTF-8 if omitted)

    Raises:
        BadEncodingName: If the label is unknown; the destination is not touched
        SubtitleIOError: If the file cannot be written
    """
    codec = resolve_encoding(encoding)
    data, _ = codec.codec_info.encode(content, "xmlcharrefreplace")
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        ensure_parent_dir(path)
        tmp.write_bytes(data)
        os.replace(tmp, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise SubtitleIOError(path, e.strerror or str(e)) from e
