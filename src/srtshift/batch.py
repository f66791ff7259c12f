#!/usr/bin/env python3
"""Batch processing utilities for srtshift.

This module handles:
- Subtitle file discovery and expansion
- Output path calculation for batch processing
- Preflight checks before processing
"""
from __future__ import annotations

import glob
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


# ============================================================
# Subtitle File Discovery
# ============================================================

SUBTITLE_EXTS = {".srt"}

DEFAULT_OUTPUT_TAG = ".shifted"


def iter_subtitle_files_in_dir(d: Path) -> Iterable[Path]:
    """Recursively iterate over all .srt files in a directory.

    Args:
        d: Directory path to search

    Files written by a previous run next to their input (``*.shifted.srt``)
    are skipped so they are not shifted a second time.

    Yields:
        Path objects for each subtitle file found, in sorted order
    """
    for p in sorted(d.rglob("*")):
        if p.is_file() and p.suffix.lower() in SUBTITLE_EXTS and not is_default_output(p):
            yield p


def is_default_output(p: Path) -> bool:
    return p.name.lower().endswith(DEFAULT_OUTPUT_TAG + ".srt")


def expand_inputs(inputs: List[str], glob_pat: Optional[str]) -> List[Path]:
    """Expand input specifications into a list of file paths.

    Handles:
    - Individual files
    - Directories (recursively finds .srt files)
    - Glob patterns (e.g., "*.srt")

    Args:
        inputs: List of input file/directory/glob specifications
        glob_pat: Optional additional glob pattern

    Returns:
        Deduplicated list of Path objects
    """
    out: List[Path] = []
    for s in inputs:
        p = Path(s)
        if p.exists() and p.is_dir():
            out.extend(iter_subtitle_files_in_dir(p))
        elif any(ch in s for ch in ["*", "?", "["]) and not p.exists():
            out.extend(Path(x) for x in sorted(glob.glob(s)))
        else:
            out.append(p)

    if glob_pat:
        out.extend(Path(x) for x in sorted(glob.glob(glob_pat)))

    # de-dupe, preserve order
    seen = set()
    uniq: List[Path] = []
    for p in out:
        rp = str(p.resolve()) if p.exists() else str(p)
        if rp in seen:
            continue
        seen.add(rp)
        uniq.append(p)
    return uniq


# ============================================================
# Output Path Calculation
# ============================================================

def default_output_for(
    input_file: Path,
    outdir: Optional[Path],
    keep_structure: bool,
    base_root: Optional[Path],
) -> Path:
    """Calculate the default output path for an input file.

    Without an output directory the result sits next to the input as
    ``<stem>.shifted.srt``. With one, the input's own name is reused inside
    it, optionally keeping the path relative to base_root.

    Args:
        input_file: Input file path
        outdir: Optional output directory
        keep_structure: If True, preserve directory structure in outdir
        base_root: Base directory for structure preservation

    Returns:
        Output file path
    """
    if outdir is None:
        return input_file.with_name(input_file.stem + DEFAULT_OUTPUT_TAG + ".srt")

    rel = Path(input_file.name)
    if keep_structure and base_root:
        try:
            rel = input_file.relative_to(base_root)
        except ValueError:
            try:
                rel = input_file.resolve().relative_to(base_root.resolve())
            except ValueError:
                rel = Path(input_file.name)

    return outdir / rel


# ============================================================
# Preflight Checks
# ============================================================

def preflight_one(input_path: Path, output_path: Path, overwrite: bool) -> Tuple[bool, str]:
    """Perform preflight checks before processing a file.

    Args:
        input_path: Input file path
        output_path: Output file path
        overwrite: If True, allow overwriting existing output

    Returns:
        Tuple of (success: bool, error_message: str)
        If success is True, error_message will be empty
    """
    if not input_path.exists():
        return False, f"Input file not found: {input_path}"
    if input_path.is_dir():
        return False, f"Input path is a directory (expected subtitle file): {input_path}"
    if output_path.exists() and output_path.is_dir():
        return False, f"Output path is a directory (expected file): {output_path}"
    if output_path.exists() and not overwrite:
        return False, f"Output already exists: {output_path} (use --overwrite)"
    return True, ""
