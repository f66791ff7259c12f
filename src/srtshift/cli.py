#!/usr/bin/env python3
"""Command-line interface for srtshift.

This is the main entry point for the srtshift command-line tool.
"""
from __future__ import annotations

import argparse
import dataclasses
import json
import os
import traceback
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .batch import default_output_for, expand_inputs, preflight_one
from .config import apply_overrides, load_config_file, resolve_shift
from .errors import SrtError
from .logging_utils import describe_error, die, format_offset, log, warn
from .models import TOOL_VERSION, ResolvedConfig
from .subtitles import Subtitles
from .timestamps import Timestamp


# ============================================================
# Run one file
# ============================================================

def shift_subtitles(subs: Subtitles, offset: Timestamp, backward: bool) -> None:
    """Shift every subtitle by offset (subtracting it when backward is True)."""
    if backward:
        subs.sub(offset)
    else:
        subs.add(offset)


def run_one(
    *,
    input_path: Path,
    output_path: Path,
    cfg: ResolvedConfig,
    dry_run: bool,
    quiet: bool,
) -> int:
    """Shift, sort and renumber a single subtitle file.

    Args:
        input_path: Path to input .srt file
        output_path: Path for the rewritten file
        cfg: Resolved configuration
        dry_run: Parse and transform, but do not write anything
        quiet: Suppress non-error output

    Returns:
        Exit code (0 for success, non-zero for failure)

    Raises:
        SrtError: If the file cannot be read, parsed, shifted or written
    """
    offset, backward = resolve_shift(cfg)
    out_encoding = cfg.output_encoding if cfg.output_encoding is not None else cfg.encoding

    log(f"Input: {input_path}", quiet=quiet)
    log(f"Output: {output_path}", quiet=quiet)

    log("1/3 Reading subtitles...", quiet=quiet)
    subs = Subtitles.parse_from_file(input_path, cfg.encoding)
    log(f"   Parsed {len(subs)} subtitles", quiet=quiet)

    log("2/3 Applying edits...", quiet=quiet)
    if offset.to_milliseconds():
        shift_ms = -offset.to_milliseconds() if backward else offset.to_milliseconds()
        log(f"   Shifting by {format_offset(shift_ms)}", quiet=quiet)
        shift_subtitles(subs, offset, backward)
    if cfg.sort:
        log("   Sorting", quiet=quiet)
        subs.sort()
    if cfg.renumber:
        log(f"   Renumbering from {cfg.renumber_start}", quiet=quiet)
        subs.renumber(cfg.renumber_start)

    if dry_run:
        log("Dry run: skipping write.", quiet=quiet)
        return 0

    log("3/3 Writing subtitles...", quiet=quiet)
    subs.write_to_file(output_path, out_encoding)
    log(f"Done: {output_path}", quiet=quiet)
    return 0


# ============================================================
# CLI
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Shift, sort and renumber SubRip (.srt) subtitle files")
    ap.add_argument("inputs", nargs="*", help="Subtitle file(s), directory, or glob pattern(s)")
    ap.add_argument("--glob", default=None, help="Additional glob pattern to include (optional)")
    ap.add_argument("--outdir", default=None, help="Output directory (batch mode). If omitted, writes next to input.")
    ap.add_argument("--keep-structure", action="store_true", help="When using --outdir, preserve directory structure.")
    ap.add_argument("--root", default=None, help="Base root for --keep-structure (defaults to common parent when possible).")

    ap.add_argument("-o", "--output", default=None, help="Single-file output path (only valid when one input expands to one file).")
    ap.add_argument("--in-place", action="store_true", help="Rewrite each input file instead of writing a new one.")

    ap.add_argument("--offset", default=None, help="Shift by this timecode, e.g. 00:00:02,500 or -00:00:02,500.")
    ap.add_argument("--backward", action="store_true", help="Subtract the offset instead of adding it.")
    ap.add_argument("--sort", action="store_true", help="Sort subtitles by number, then start/end time.")
    ap.add_argument("--renumber", action="store_true", help="Renumber subtitles sequentially after other edits.")
    ap.add_argument("--renumber-start", type=int, default=None, help="First number used by --renumber (default: 1).")

    ap.add_argument("--encoding", default=None, help="Encoding of input files (default: utf-8).")
    ap.add_argument("--output-encoding", default=None, help="Encoding of written files (default: same as input).")

    ap.add_argument("--config", default=None, help="JSON config file. CLI args override config.")
    ap.add_argument("--dry-run", action="store_true", help="Parse and apply edits, but do not write any output.")
    ap.add_argument("--overwrite", action="store_true", help="Overwrite output if it exists")

    ap.add_argument("--quiet", action="store_true")
    ap.add_argument("--debug", action="store_true")
    ap.add_argument("--continue-on-error", action="store_true", help="Batch mode: continue processing other files on error.")
    ap.add_argument("--version", action="store_true")
    return ap


def resolve_config(args: argparse.Namespace) -> ResolvedConfig:
    """Build config: defaults -> config file -> CLI overrides.

    Raises:
        FileNotFoundError, ValueError: If the config file is missing or invalid
    """
    cfg = apply_overrides(ResolvedConfig(), load_config_file(args.config))

    if args.offset is not None:
        cfg.offset = args.offset
    if args.backward:
        cfg.backward = True
    if args.sort:
        cfg.sort = True
    if args.renumber:
        cfg.renumber = True
    if args.renumber_start is not None:
        cfg.renumber_start = args.renumber_start
    if args.encoding is not None:
        cfg.encoding = args.encoding
    if args.output_encoding is not None:
        cfg.output_encoding = args.output_encoding
    return cfg


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the srtshift command-line tool.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print(TOOL_VERSION)
        return 0

    quiet = args.quiet

    if not args.inputs:
        return die("No input files provided.", 2)
    files = expand_inputs(args.inputs, args.glob)
    files = [p for p in files if p.exists() and p.is_file()]
    if not files:
        return die("No input files found after expansion.", 2)

    if args.output is not None and len(files) != 1:
        return die("--output may only be used when exactly one input file is provided (after expansion).", 2)
    if args.in_place and (args.output is not None or args.outdir is not None):
        return die("--in-place cannot be combined with --output or --outdir.", 2)

    outdir = Path(args.outdir) if args.outdir else None
    if outdir:
        outdir.mkdir(parents=True, exist_ok=True)

    if args.root:
        base_root = Path(args.root)
    else:
        # best-effort common parent for keep-structure
        base_root = None
        if args.keep_structure and len(files) > 1:
            try:
                base_root = Path(os.path.commonpath([str(f.resolve()) for f in files]))
            except ValueError:
                base_root = None

    try:
        cfg = resolve_config(args)
    except (OSError, ValueError) as e:
        return die(str(e), 2)

    # Reject a bad offset once, up front, instead of once per file
    try:
        resolve_shift(cfg)
    except SrtError as e:
        return die(f"Invalid offset {cfg.offset!r}: {describe_error(e)}", 2)

    if args.dry_run and not quiet:
        log("Resolved config:", quiet=quiet)
        log(json.dumps(dataclasses.asdict(cfg), indent=2), quiet=quiet)

    failures: List[Tuple[Path, str]] = []
    for f in files:
        if args.in_place:
            primary_out = f
            ok, reason = preflight_one(f, primary_out, overwrite=True)
        else:
            if args.output:
                primary_out = Path(args.output)
            else:
                primary_out = default_output_for(f, outdir, args.keep_structure, base_root)
            ok, reason = preflight_one(f, primary_out, args.overwrite)

        if not ok:
            failures.append((f, reason))
            if not args.continue_on_error:
                return die(reason, 2)
            warn(f"{f}: {reason}", quiet=quiet)
            continue

        try:
            rc = run_one(
                input_path=f,
                output_path=primary_out,
                cfg=cfg,
                dry_run=args.dry_run,
                quiet=quiet,
            )
            if rc != 0:
                failures.append((f, f"failed with exit code {rc}"))
                if not args.continue_on_error:
                    return rc
        except KeyboardInterrupt:
            return die("Interrupted by user.", 130)
        except SrtError as e:
            if args.debug:
                traceback.print_exc()
            msg = describe_error(e)
            failures.append((f, msg))
            if not args.continue_on_error:
                return die(f"{f}: {msg}", 1)
            warn(f"{f}: {msg}", quiet=quiet)

    if failures:
        if not quiet:
            log("\nSummary: failures:", quiet=quiet)
            for f, msg in failures:
                log(f"  - {f}: {msg}", quiet=quiet)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
