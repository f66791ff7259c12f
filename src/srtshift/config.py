#!/usr/bin/env python3
"""Configuration management for srtshift.

This module handles configuration file loading, configuration overrides,
and parsing of signed offsets given on the command line or in a config file.
"""
from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .models import ResolvedConfig
from .timestamps import Timestamp


# ============================================================
# Configuration Loading
# ============================================================

def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path: Path to JSON config file, or None to skip loading

    Returns:
        Dictionary of configuration values, or empty dict if path is None

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config file isn't a valid JSON object
    """
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a JSON object at top-level.")
    return data


def _check_override_type(key: str, value: Any, default: Any) -> None:
    # Encoding keys default to None and take a label string or null
    if default is None:
        ok, expected = value is None or isinstance(value, str), "a string or null"
    elif isinstance(default, bool):
        ok, expected = isinstance(value, bool), "true or false"
    elif isinstance(default, int):
        ok, expected = isinstance(value, int) and not isinstance(value, bool), "an integer"
    else:
        ok, expected = isinstance(value, str), "a string"
    if not ok:
        raise ValueError(f"Config key {key!r} must be {expected}, got {value!r}")


def apply_overrides(base: ResolvedConfig, overrides: Dict[str, Any]) -> ResolvedConfig:
    """Return a copy of base with known keys replaced; unknown keys are ignored.

    Raises:
        ValueError: If a known key has a value of the wrong type
    """
    defaults = dataclasses.asdict(ResolvedConfig())
    d = dataclasses.asdict(base)
    for k, v in overrides.items():
        if k in d:
            _check_override_type(k, v, defaults[k])
            d[k] = v
    return ResolvedConfig(**d)


# ============================================================
# Offsets
# ============================================================

def parse_offset(text: str) -> Tuple[Timestamp, bool]:
    """Parse a shift offset such as ``"-00:00:02,500"`` or ``"+01:00:00,000"``.

    Args:
        text: Timecode with an optional leading sign

    Returns:
        Tuple of (offset, backward) where backward is True for a ``-`` sign

    Raises:
        MalformedTimestamp: If the timecode is missing a field
        IntegerParseError: If a timecode field is not a valid digit run
    """
    text = text.strip()
    backward = text.startswith("-")
    if text[:1] in ("+", "-"):
        text = text[1:]
    return Timestamp.parse(text), backward


def resolve_shift(cfg: ResolvedConfig) -> Tuple[Timestamp, bool]:
    """Combine the configured offset sign with the ``backward`` flag.

    A negative offset together with ``backward`` cancels out to a forward
    shift.
    """
    offset, negative = parse_offset(cfg.offset)
    return offset, negative != bool(cfg.backward)
