# =============================================================================
# palette.py - Color record and Palette buffer
# =============================================================================
#
# A Palette is an ordered, append-only list of Colors with a fixed capacity.
# Appending past capacity is refused (add_color returns False) and leaves
# every existing entry untouched.  Downstream files are positional, so the
# append order is the palette.

from __future__ import annotations
from typing import Iterator, NamedTuple

import numpy as np


class Color(NamedTuple):
    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


class Palette:
    """
    Capacity-bounded color buffer.

    Usage:
        pal = Palette(64)
        pal.add_color(0, 0, 0)
        arr = pal.to_numpy()     # (len, 3) uint8
    """

    def __init__(self, max_colors: int) -> None:
        if max_colors <= 0:
            raise ValueError(f"max_colors must be positive, got {max_colors}")
        self.max_colors = max_colors
        self._colors: list[Color] = []

    # ── Buffer ──────────────────────────────────────────────────────────────

    def add_color(self, r: int, g: int, b: int) -> bool:
        """
        Append one color.  Returns False (and appends nothing) when the
        palette is already at capacity.

        Raises:
            ValueError: if a channel is outside 0..255.
        """
        for channel in (r, g, b):
            if not 0 <= channel <= 255:
                raise ValueError(f"channel out of range 0..255: ({r}, {g}, {b})")
        if len(self._colors) >= self.max_colors:
            print(
                f"[!!] Unable to add color: palette is full "
                f"({len(self._colors)}/{self.max_colors})."
            )
            return False
        self._colors.append(Color(int(r), int(g), int(b)))
        return True

    @property
    def num_colors(self) -> int:
        return len(self._colors)

    @property
    def is_full(self) -> bool:
        return len(self._colors) >= self.max_colors

    @property
    def colors(self) -> tuple[Color, ...]:
        """Read-only snapshot of the palette contents."""
        return tuple(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(tuple(self._colors))

    def __getitem__(self, index: int) -> Color:
        return self._colors[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self.max_colors == other.max_colors and self._colors == other._colors

    def __repr__(self) -> str:
        return f"Palette({len(self._colors)}/{self.max_colors})"

    # ── Output helpers ───────────────────────────────────────────────────────

    def to_numpy(self) -> np.ndarray:
        """Palette as a (num_colors, 3) uint8 array in RGB order."""
        if not self._colors:
            return np.zeros((0, 3), dtype=np.uint8)
        return np.array(self._colors, dtype=np.uint8)

    def to_bytes(self) -> bytes:
        """Packed RGB triples, 3 bytes per color."""
        return self.to_numpy().tobytes()
