# =============================================================================
# readers.py - .gpl / .tga Readers
# =============================================================================
#
# Inverse of the PEM writers.  Used by palette_check and the test suites to
# prove that a written file carries exactly the colors it was given.

from __future__ import annotations
import struct
from typing import NamedTuple

import numpy as np

from CPGE.VTM.constants import TGA_HEADER_SIZE, TGA_BYTES_PER_PIXEL
from CPGE.PGM.palette import Color
from CPGE.PEM.gpl_writer import GPL_MAGIC
from CPGE.PEM.tga_writer import TGA_HEADER_FORMAT


class TGAHeader(NamedTuple):
    id_length:      int
    color_map_type: int
    image_type:     int
    color_map_spec: bytes
    x_origin:       int
    y_origin:       int
    width:          int
    height:         int
    bits_per_pixel: int
    descriptor:     int


def parse_gpl(text: str) -> tuple[str, list[Color]]:
    """
    Parse .gpl contents.

    Returns:
        (display name, colors in file order)

    Raises:
        ValueError: if the magic line is missing or a color line is malformed.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != GPL_MAGIC:
        raise ValueError("Not a GIMP palette: missing header line")

    name = ""
    colors: list[Color] = []
    for lineno, raw in enumerate(lines[1:], start=2):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("Name:"):
            name = line[len("Name:"):].strip()
            continue
        if line.startswith("Columns:"):
            continue

        parts = line.split()
        if len(parts) < 3:
            raise ValueError(f"line {lineno}: expected 3 channel values, got {raw!r}")
        try:
            r, g, b = (int(p) for p in parts[:3])
        except ValueError:
            raise ValueError(f"line {lineno}: non-integer channel in {raw!r}") from None
        colors.append(Color(r, g, b))

    return name, colors


def read_gpl(path) -> tuple[str, list[Color]]:
    with open(path, "r", encoding="ascii") as f:
        return parse_gpl(f.read())


def parse_tga(data: bytes) -> tuple[TGAHeader, np.ndarray]:
    """
    Parse a one-row truecolor TGA.

    Returns:
        (header, pixels) where pixels is a (width, 3) uint8 array in RGB order.

    Raises:
        ValueError: if the file is truncated or not 24-bit truecolor.
    """
    if len(data) < TGA_HEADER_SIZE:
        raise ValueError(f"TGA too short: {len(data)} bytes")

    header = TGAHeader(*struct.unpack(TGA_HEADER_FORMAT, data[:TGA_HEADER_SIZE]))
    if header.bits_per_pixel != 24:
        raise ValueError(f"Unsupported bit depth: {header.bits_per_pixel}")

    start = TGA_HEADER_SIZE + header.id_length
    n_pixels = header.width * header.height
    end = start + n_pixels * TGA_BYTES_PER_PIXEL
    if len(data) < end:
        raise ValueError(f"TGA pixel data truncated: need {end} bytes, have {len(data)}")

    bgr = np.frombuffer(data[start:end], dtype=np.uint8).reshape(n_pixels, 3)
    return header, bgr[:, ::-1].copy()


def read_tga(path) -> tuple[TGAHeader, np.ndarray]:
    with open(path, "rb") as f:
        return parse_tga(f.read())
