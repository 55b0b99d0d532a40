# =============================================================================
# gpl_writer.py - GIMP Palette (.gpl) Writer
# =============================================================================
#
# File layout:
#   GIMP Palette
#   Name: <display name>
#   <blank line>
#   RRR GGG BBB\t(R, G, B)        ← one line per color, in palette order
#
# Each channel is right-aligned in a 3-character field:
#   "  7"  " 42"  "255"

from __future__ import annotations
from typing import Iterable

from CPGE.PGM.palette import Color

GPL_MAGIC = "GIMP Palette"


def format_gpl_line(color: Color) -> str:
    r, g, b = color
    return f"{r:3d} {g:3d} {b:3d}\t({r}, {g}, {b})"


def format_gpl(colors: Iterable[Color], display_name: str) -> str:
    """Complete .gpl file contents as a string."""
    lines = [GPL_MAGIC, f"Name: {display_name}", ""]
    lines.extend(format_gpl_line(c) for c in colors)
    return "\n".join(lines) + "\n"


def write_gpl_file(path, colors: Iterable[Color], display_name: str) -> bool:
    """
    Write a .gpl file.

    Returns:
        True on success, False if the file could not be opened or written.
    """
    if not path:
        print("[!!] No output GPL file specified.")
        return False

    text = format_gpl(colors, display_name)
    try:
        with open(path, "w", encoding="ascii", newline="\n") as f:
            f.write(text)
    except OSError as exc:
        print(f"[!!] Unable to write output GPL file {path}: {exc.strerror or exc}")
        return False
    return True
