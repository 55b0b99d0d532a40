#!/usr/bin/env python3
# =============================================================================
# palette_gen.py - Composite Palette Generator (command line)
# =============================================================================
#
# Synthesizes the palette for one source and writes <source>.gpl and
# <source>.tga.
#
# Usage:
#   python -m CPGE.palette_gen                       (default: approx_nes)
#   python -m CPGE.palette_gen -s composite_18_1x
#   python -m CPGE.palette_gen -s composite_36_2x -o out/
#   python -m CPGE.palette_gen --list
#
# Exit status:
#   0  palette generated and every requested file written
#   1  unknown source, or an output file could not be written
#   2  bad command line (argparse)
# =============================================================================

from __future__ import annotations
import argparse
import os
import sys

from CPGE.SRM.profiles import (
    DEFAULT_SOURCE, UnknownSourceError,
    expected_color_count, get_profile, list_profiles,
)
from CPGE.PGM.assembler import synthesize
from CPGE.PEM.gpl_writer import write_gpl_file
from CPGE.PEM.tga_writer import write_tga_file


def output_paths(source: str, output_dir: str = ".") -> tuple[str, str]:
    """(<dir>/<source>.gpl, <dir>/<source>.tga)"""
    base = os.path.join(output_dir, source)
    return base + ".gpl", base + ".tga"


def print_sources() -> None:
    print(f"  {'Source':<22} {'Name':<26} {'Table':>5} {'Step':>5} {'Colors':>7} {'Max':>5}")
    print(f"  {'-'*22} {'-'*26} {'-'*5} {'-'*5} {'-'*7} {'-'*5}")
    for p in list_profiles():
        print(
            f"  {p.name:<22} {p.display_name:<26} {p.table_length:>5} "
            f"{p.hue_step:>5} {expected_color_count(p):>7} {p.max_colors:>5}"
        )


def run(
    source:     str,
    output_dir: str = ".",
    write_gpl:  bool = True,
    write_tga:  bool = True,
) -> bool:
    """
    Generate one palette and write its files.

    Returns True if every requested file was written.

    Raises:
        UnknownSourceError: if `source` is not registered.
    """
    profile = get_profile(source)
    ctx = synthesize(profile)
    colors = ctx.palette.colors

    print(f"Palette generated. Number of Colors: {len(colors)}")

    gpl_path, tga_path = output_paths(profile.name, output_dir)
    ok = True

    if write_gpl:
        if write_gpl_file(gpl_path, colors, profile.display_name):
            print(f"  [OK] {gpl_path}")
        else:
            ok = False

    if write_tga:
        if write_tga_file(tga_path, colors):
            print(f"  [OK] {tga_path}")
        else:
            ok = False

    return ok


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Composite video palette generator",
    )
    parser.add_argument(
        "-s", "--source", default=DEFAULT_SOURCE,
        help=f"Palette source name, default {DEFAULT_SOURCE} (see --list)",
    )
    parser.add_argument(
        "-o", "--output-dir", default=".",
        help="Directory for the .gpl and .tga files, default current directory",
    )
    parser.add_argument(
        "--list", action="store_true",
        help="List the available sources and exit",
    )
    parser.add_argument(
        "--no-gpl", action="store_true",
        help="Do not write the GIMP palette file",
    )
    parser.add_argument(
        "--no-tga", action="store_true",
        help="Do not write the TGA image file",
    )
    args = parser.parse_args(argv)

    if args.list:
        print_sources()
        sys.exit(0)

    try:
        ok = run(
            source=args.source,
            output_dir=args.output_dir,
            write_gpl=not args.no_gpl,
            write_tga=not args.no_tga,
        )
    except UnknownSourceError as exc:
        print(f"{exc}. Exiting...")
        print(f"  Valid sources: {', '.join(p.name for p in list_profiles())}")
        sys.exit(1)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
