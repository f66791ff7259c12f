#!/usr/bin/env python3
"""Data models for srtshift.

This module contains:
- TOOL_VERSION: Version constant
- ResolvedConfig: Settings for one srtshift command-line run
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# ============================================================
# Versioning
# ============================================================

TOOL_VERSION = "0.2.0"


# ============================================================
# Configuration
# ============================================================

@dataclass
class ResolvedConfig:
    """Resolved configuration for a shift/sort/renumber run.

    Attributes:
        encoding: Encoding label of the input files (None for UTF-8)
        output_encoding: Encoding label for written files (None reuses encoding)
        offset: Timecode to shift every subtitle by
        backward: If True, subtract the offset instead of adding it
        sort: Sort subtitles by number (then start/end time) before writing
        renumber: Rewrite subtitle numbers sequentially before writing
        renumber_start: First number used when renumbering
    """
    # encodings
    encoding: Optional[str] = None
    output_encoding: Optional[str] = None

    # time shift
    offset: str = "00:00:00,000"
    backward: bool = False

    # ordering
    sort: bool = False
    renumber: bool = False
    renumber_start: int = 1
