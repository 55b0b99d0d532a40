# =============================================================================
# voltage_tables.py - Composite Voltage Table Generator
# =============================================================================
#
# Builds the luma / saturation tables for a given table length.
#
# STEP MODEL:
#   step = 1 / (n + 2)
#   For k in [0, n/2):
#     luma[k]         = (k + 1) * step
#     luma[n - 1 - k] = 1 - luma[k]
#     sat[k]          = luma[k]
#     sat[n - 1 - k]  = sat[k]
#
#   The low half rises from near zero; the high half is its mirrored
#   complement, so every table is a palindrome of the identity curve.
#
# Length 4 is special: it always returns the literal approximate NES table
# from constants.py rather than a derived one.
#
# Tables are computed once per process and are immutable afterwards.

from __future__ import annotations
from functools import lru_cache
from typing import NamedTuple

import numpy as np

from CPGE.VTM.constants import (
    F32,
    APPROX_NES_LUMA, APPROX_NES_SATURATION, APPROX_NES_TABLE_LENGTH,
    TABLE_LENGTHS, TABLE_STEP_RESERVED_RUNGS,
)


class VoltageTable(NamedTuple):
    luma:       tuple[np.float32, ...]
    saturation: tuple[np.float32, ...]

    @property
    def length(self) -> int:
        return len(self.luma)

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Return (luma, saturation) as float32 numpy arrays."""
        return (
            np.array(self.luma, dtype=np.float32),
            np.array(self.saturation, dtype=np.float32),
        )


def table_step(length: int) -> np.float32:
    """Voltage step between adjacent rungs of a table of `length` entries."""
    return F32(1.0 / (length + TABLE_STEP_RESERVED_RUNGS))


def generate_step_table(length: int) -> VoltageTable:
    """
    Derive a symmetric voltage table from the IRE step model.

    Args:
        length: Number of entries.  Must be even and positive.

    Returns:
        VoltageTable with float32 entries.
    """
    if length <= 0 or length % 2:
        raise ValueError(f"table length must be a positive even number, got {length}")

    step = table_step(length)
    one  = F32(1.0)

    luma = [F32(0.0)] * length
    sat  = [F32(0.0)] * length

    for k in range(length // 2):
        luma[k] = F32(k + 1) * step
        luma[length - 1 - k] = one - luma[k]

        sat[k] = luma[k]
        sat[length - 1 - k] = sat[k]

    return VoltageTable(luma=tuple(luma), saturation=tuple(sat))


@lru_cache(maxsize=None)
def voltage_table_for(length: int) -> VoltageTable:
    """
    Return the (cached) voltage table for a supported table length.

    Raises:
        ValueError: if `length` is not one of TABLE_LENGTHS.
    """
    if length not in TABLE_LENGTHS:
        raise ValueError(
            f"Unsupported voltage table length: {length}\n"
            f"Valid lengths: {list(TABLE_LENGTHS)}"
        )
    if length == APPROX_NES_TABLE_LENGTH:
        return VoltageTable(luma=APPROX_NES_LUMA, saturation=APPROX_NES_SATURATION)
    return generate_step_table(length)
