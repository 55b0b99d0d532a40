# =============================================================================
# tga_writer.py - One-row Truecolor TGA Writer
# =============================================================================
#
# Writes the palette as a single-row uncompressed 24-bit TGA, one pixel per
# color, zero-padded out to a fixed width.
#
# Header (18 bytes, little-endian):
#   0     image ID length      = 0
#   1     color map type       = 0
#   2     image type           = 2   (uncompressed truecolor)
#   3-7   color map spec       = 5 x 0
#   8-9   x origin             = 0
#   10-11 y origin             = 0
#   12-13 width                = 64 | 256 | 1024  (smallest >= palette length)
#   14-15 height               = 1
#   16    bits per pixel       = 24
#   17    image descriptor     = 0x20 (top-left origin)
#
# Pixel data: width * 3 bytes, each pixel stored B, G, R.
# Total size: 18 + 3 * width.

from __future__ import annotations
import struct
from typing import Sequence

import numpy as np

from CPGE.VTM.constants import (
    CAPACITY_BUCKETS, MAX_TGA_COLORS,
    TGA_IMAGE_TYPE_RGB, TGA_BITS_PER_PIXEL, TGA_BYTES_PER_PIXEL,
    TGA_DESCRIPTOR_TOP_LEFT,
)
from CPGE.PGM.palette import Color

TGA_HEADER_FORMAT = "<BBB5sHHHHBB"


class TooManyColorsError(ValueError):
    """Raised when a palette is too long for the row-image format."""


def tga_width(num_colors: int) -> int:
    """Image width for a palette of `num_colors`: the smallest fitting bucket."""
    for bucket in CAPACITY_BUCKETS:
        if num_colors <= bucket:
            return bucket
    return CAPACITY_BUCKETS[-1]


def build_tga_header(width: int) -> bytes:
    return struct.pack(
        TGA_HEADER_FORMAT,
        0,                          # image ID length
        0,                          # color map type
        TGA_IMAGE_TYPE_RGB,
        bytes(5),                   # color map specification
        0, 0,                       # x / y origin
        width,
        1,                          # height
        TGA_BITS_PER_PIXEL,
        TGA_DESCRIPTOR_TOP_LEFT,
    )


def build_tga(colors: Sequence[Color]) -> bytes:
    """
    Build the complete .tga file in memory.

    Raises:
        TooManyColorsError: if len(colors) >= MAX_TGA_COLORS.
    """
    count = len(colors)
    if count >= MAX_TGA_COLORS:
        raise TooManyColorsError(
            f"Number of colors ({count}) >= {MAX_TGA_COLORS}"
        )

    width  = tga_width(count)
    pixels = np.zeros((width, TGA_BYTES_PER_PIXEL), dtype=np.uint8)
    if count:
        rgb = np.array([tuple(c) for c in colors], dtype=np.uint8)
        pixels[:count] = rgb[:, ::-1]     # RGB → BGR

    return build_tga_header(width) + pixels.tobytes()


def write_tga_file(path, colors: Sequence[Color]) -> bool:
    """
    Write a .tga file.

    Returns:
        True on success, False if the palette is too long or the file could
        not be opened or written.
    """
    if not path:
        print("[!!] Write TGA file failed: No filename specified.")
        return False

    try:
        data = build_tga(colors)
    except TooManyColorsError as exc:
        print(f"[!!] Write TGA file failed: {exc}.")
        return False

    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as exc:
        print(f"[!!] Write TGA file failed: Unable to write {path}: {exc.strerror or exc}")
        return False
    return True
