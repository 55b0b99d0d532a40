#!/usr/bin/env python3
# =============================================================================
# palette_check.py - Palette File Checker
# =============================================================================
#
# Re-synthesizes a source and compares it against the .gpl / .tga files on
# disk.  Tells you whether the files are exactly what the generator produces.
#
# Usage:
#   python -m CPGE.PVM.palette_check -s approx_nes
#   python -m CPGE.PVM.palette_check -s composite_36_2x -d out/
#
# Output sections:
#   [1] Source info      - profile parameters and expected color count
#   [2] GPL report       - header, name, per-color comparison
#   [3] TGA report       - header fields, file size, pixels, padding
#   [4] VERDICT          - PASS / FAIL with reasons
#
# =============================================================================

from __future__ import annotations
import argparse
import os
import sys

import numpy as np

from CPGE.VTM.constants import (
    TGA_HEADER_SIZE, TGA_BYTES_PER_PIXEL,
    TGA_IMAGE_TYPE_RGB, TGA_BITS_PER_PIXEL, TGA_DESCRIPTOR_TOP_LEFT,
)
from CPGE.SRM.profiles import DEFAULT_SOURCE, UnknownSourceError, get_profile
from CPGE.PGM.assembler import synthesize
from CPGE.PEM.tga_writer import tga_width
from CPGE.PVM.readers import read_gpl, read_tga

DIVIDER = "=" * 68


def _first_mismatch(expected, actual) -> int | None:
    """Index of the first differing entry; a shorter list differs at its end."""
    for idx, (e, a) in enumerate(zip(expected, actual)):
        if tuple(e) != tuple(a):
            return idx
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None


def check_gpl(path: str, expected, display_name: str, reasons: list[str]) -> bool:
    print(f"\n  -- GPL Report --")
    if not os.path.exists(path):
        print(f"  [FAIL] File not found: {path}")
        reasons.append(f"GPL: {os.path.basename(path)} missing")
        return False

    try:
        name, colors = read_gpl(path)
    except (OSError, ValueError) as exc:
        print(f"  [FAIL] Could not parse: {exc}")
        reasons.append(f"GPL: unreadable ({exc})")
        return False

    ok = True
    print(f"  Name              : {name}")
    print(f"  Colors in file    : {len(colors)}  (expected {len(expected)})")

    if name != display_name:
        ok = False
        reasons.append(f"GPL: name {name!r} != {display_name!r}")
        print(f"  [FAIL] Palette name mismatch")

    if len(colors) != len(expected):
        ok = False
        reasons.append(f"GPL: {len(colors)} colors, expected {len(expected)}")
        print(f"  [FAIL] Color count mismatch")

    idx = _first_mismatch(expected, colors)
    if idx is not None and idx < min(len(expected), len(colors)):
        ok = False
        reasons.append(f"GPL: color {idx} is {tuple(colors[idx])}, expected {tuple(expected[idx])}")
        print(f"  [FAIL] First differing color at index {idx}")
    elif ok:
        print(f"  [PASS] All colors match")
    return ok


def check_tga(path: str, expected, reasons: list[str]) -> bool:
    print(f"\n  -- TGA Report --")
    if not os.path.exists(path):
        print(f"  [FAIL] File not found: {path}")
        reasons.append(f"TGA: {os.path.basename(path)} missing")
        return False

    try:
        header, pixels = read_tga(path)
    except (OSError, ValueError) as exc:
        print(f"  [FAIL] Could not parse: {exc}")
        reasons.append(f"TGA: unreadable ({exc})")
        return False

    ok = True
    width = tga_width(len(expected))
    size = os.path.getsize(path)
    expected_size = TGA_HEADER_SIZE + TGA_BYTES_PER_PIXEL * width

    print(f"  Image             : {header.width} x {header.height}  (expected {width} x 1)")
    print(f"  File size         : {size} bytes  (expected {expected_size})")

    header_ok = (
        header.id_length == 0
        and header.color_map_type == 0
        and header.image_type == TGA_IMAGE_TYPE_RGB
        and header.color_map_spec == bytes(5)
        and header.x_origin == 0 and header.y_origin == 0
        and header.width == width and header.height == 1
        and header.bits_per_pixel == TGA_BITS_PER_PIXEL
        and header.descriptor == TGA_DESCRIPTOR_TOP_LEFT
    )
    if not header_ok:
        ok = False
        reasons.append(f"TGA: unexpected header {tuple(header)}")
        print(f"  [FAIL] Header fields")
    else:
        print(f"  [PASS] Header fields")

    if size != expected_size:
        ok = False
        reasons.append(f"TGA: size {size} != {expected_size}")
        print(f"  [FAIL] File size")

    if header_ok:
        n = len(expected)
        want = np.array([tuple(c) for c in expected], dtype=np.uint8).reshape(n, 3)
        if len(pixels) < n:
            ok = False
            reasons.append(f"TGA: {len(pixels)} pixels, expected at least {n}")
            print(f"  [FAIL] Only {len(pixels)} pixels for {n} colors")
        elif not np.array_equal(pixels[:n], want):
            ok = False
            idx = _first_mismatch(want.tolist(), pixels[:n].tolist())
            reasons.append(f"TGA: pixel {idx} differs")
            print(f"  [FAIL] First differing pixel at index {idx}")
        else:
            print(f"  [PASS] All {n} pixels match")
        if np.any(pixels[n:]):
            ok = False
            reasons.append("TGA: padding pixels are not zero")
            print(f"  [FAIL] Padding not zero-filled")
    return ok


def run_check(source: str, directory: str = ".") -> bool:
    """
    Compare <directory>/<source>.gpl and .tga against a fresh synthesis.
    Returns True if both files match exactly.

    Raises:
        UnknownSourceError: if `source` is not registered.
    """
    profile = get_profile(source)
    reasons: list[str] = []

    # -----------------------------------------------------------------------
    # [1] Source info
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    print(f"  Palette File Checker")
    print(DIVIDER)

    expected = synthesize(profile).palette.colors
    print(f"  Source   : {profile.name}  ({profile.display_name})")
    print(f"  Table    : {profile.table_length} entries, {profile.hue_modifier} sweeps")
    print(f"  Hues     : {profile.hue_count} x {profile.hue_step} deg from {profile.hue_start} deg")
    print(f"  Colors   : {len(expected)}  (capacity {profile.max_colors})")

    base = os.path.join(directory, profile.name)

    # -----------------------------------------------------------------------
    # [2] / [3] Files
    # -----------------------------------------------------------------------
    gpl_ok = check_gpl(base + ".gpl", expected, profile.display_name, reasons)
    tga_ok = check_tga(base + ".tga", expected, reasons)

    # -----------------------------------------------------------------------
    # [4] Verdict
    # -----------------------------------------------------------------------
    verdict_pass = gpl_ok and tga_ok
    print(f"\n{DIVIDER}")
    if verdict_pass:
        print(f"  VERDICT: PASS - files match the generator output")
    else:
        print(f"  VERDICT: FAIL - files differ from the generator output")
        for r in reasons:
            print(f"    - {r}")
    print(f"{DIVIDER}\n")

    return verdict_pass


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Check written palette files against the generator",
    )
    parser.add_argument(
        "-s", "--source", default=DEFAULT_SOURCE,
        help=f"Palette source name, default {DEFAULT_SOURCE}",
    )
    parser.add_argument(
        "-d", "--dir", default=".",
        help="Directory holding <source>.gpl and <source>.tga",
    )
    args = parser.parse_args(argv)

    try:
        ok = run_check(args.source, args.dir)
    except UnknownSourceError as exc:
        print(f"[!!] {exc}")
        sys.exit(1)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
