# =============================================================================
# profiles.py - Source Profile Registry
# =============================================================================
#
# Two families of sources:
#
#   approx_nes  - literal 4-entry NES voltage table, full-table hue sweeps,
#                 pure black before and pure white after the grey ramp.
#   composite   - derived step tables (6..48 entries), no black/white
#                 bookends, full or half-table hue sweeps.
#
# NAMING CONVENTION:
#   composite_<NN>_<M>x
#     NN = table length (entries per hue)
#     M  = hue multiplier; "p" stands in for the decimal point (0p75 = 0.75)
#   1X is BASE_HUE_COUNT (12) hues around the wheel, so
#     hue_step = 360 / (12 * M)
#   e.g. composite_36_2x → 24 hues, 15 deg apart.
#
# CAPACITY:
#   max_colors is the smallest bucket in CAPACITY_BUCKETS that holds
#   bookends + greys + hues * entries_per_hue.

from __future__ import annotations
from typing import NamedTuple

from CPGE.VTM.constants import (
    APPROX_NES_TABLE_LENGTH,
    BASE_HUE_COUNT,
    CAPACITY_BUCKETS,
    DEGREES_PER_TURN,
)

FAMILY_APPROX_NES = "approx_nes"
FAMILY_COMPOSITE  = "composite"

FAMILIES = (FAMILY_APPROX_NES, FAMILY_COMPOSITE)

HUE_MODIFIER_FULL       = "full"
HUE_MODIFIER_LOWER_HALF = "lower_half"
HUE_MODIFIER_UPPER_HALF = "upper_half"

HUE_MODIFIERS = (HUE_MODIFIER_FULL, HUE_MODIFIER_LOWER_HALF, HUE_MODIFIER_UPPER_HALF)


class UnknownSourceError(ValueError):
    """Raised when a source name is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown source {name}")
        self.name = name


class SourceProfile(NamedTuple):
    name:         str    # registry key, also the output file stem
    display_name: str    # "Name:" line of the .gpl file
    family:       str    # FAMILY_APPROX_NES or FAMILY_COMPOSITE
    table_length: int    # which voltage table to use
    hue_step:     int    # degrees between hue sweeps (divides 360)
    hue_start:    int    # phase of the first hue sweep, degrees
    hue_modifier: str    # which table entries each hue sweep emits
    max_colors:   int    # palette allocation ceiling

    @property
    def has_bookends(self) -> bool:
        """True if pure black / pure white surround the grey ramp."""
        return self.family == FAMILY_APPROX_NES

    @property
    def hue_count(self) -> int:
        return DEGREES_PER_TURN // self.hue_step

    @property
    def entries_per_hue(self) -> int:
        if self.hue_modifier == HUE_MODIFIER_FULL:
            return self.table_length
        return self.table_length // 2


# ── Helpers ──────────────────────────────────────────────────────────────────

def hue_step_for_multiplier(multiplier: float) -> int:
    """
    Hue step in degrees for a profile named at `multiplier` X resolution.

    Raises ValueError if the resulting hue count does not evenly divide 360.
    """
    hues = BASE_HUE_COUNT * multiplier
    if hues <= 0 or hues != int(hues) or DEGREES_PER_TURN % int(hues):
        raise ValueError(
            f"multiplier {multiplier} gives {hues} hues, which does not "
            f"divide {DEGREES_PER_TURN} degrees"
        )
    return DEGREES_PER_TURN // int(hues)


def capacity_bucket(count: int) -> int:
    """Smallest capacity bucket that can hold `count` colors."""
    for bucket in CAPACITY_BUCKETS:
        if count <= bucket:
            return bucket
    raise ValueError(
        f"{count} colors exceeds the largest palette bucket ({CAPACITY_BUCKETS[-1]})"
    )


def expected_color_count(profile: SourceProfile) -> int:
    """Number of colors a full synthesis run for `profile` appends."""
    bookends = 2 if profile.has_bookends else 0
    return bookends + profile.table_length + profile.hue_count * profile.entries_per_hue


def _approx_nes(name: str, display_name: str, hue_start: int) -> SourceProfile:
    return SourceProfile(
        name=name,
        display_name=display_name,
        family=FAMILY_APPROX_NES,
        table_length=APPROX_NES_TABLE_LENGTH,
        hue_step=hue_step_for_multiplier(1),
        hue_start=hue_start,
        hue_modifier=HUE_MODIFIER_FULL,
        max_colors=64,
    )


def _composite(
    name:         str,
    display_name: str,
    table_length: int,
    multiplier:   float,
    max_colors:   int,
    hue_modifier: str = HUE_MODIFIER_FULL,
) -> SourceProfile:
    return SourceProfile(
        name=name,
        display_name=display_name,
        family=FAMILY_COMPOSITE,
        table_length=table_length,
        hue_step=hue_step_for_multiplier(multiplier),
        hue_start=0,
        hue_modifier=hue_modifier,
        max_colors=max_colors,
    )


# -----------------------------------------------------------------------------
# REGISTRY  (insertion order = listing order; first entry is the default)
# -----------------------------------------------------------------------------

_PROFILE_ROWS = (
    #             name                   display name              start
    _approx_nes("approx_nes",           "Approximate NES",          0),
    _approx_nes("approx_nes_rotated",   "Approximate NES Rotated",  15),
    #             name                   display name              n   mult  max
    _composite("composite_06_0p75x",    "Composite 06 0.75X",      6,  0.75,   64),
    _composite("composite_06_3x",       "Composite 06 3X",         6,  3,     256),
    _composite("composite_12_1p50x",    "Composite 12 1.5X",       12, 1.5,   256),
    _composite("composite_12_6x",       "Composite 12 6X",         12, 6,    1024),
    _composite("composite_18_1x",       "Composite 18 1X",         18, 1,     256),
    _composite("composite_24_0p75x",    "Composite 24 0.75X",      24, 0.75,  256),
    _composite("composite_24_3x",       "Composite 24 3X",         24, 3,    1024),
    _composite("composite_36_2x",       "Composite 36 2X",         36, 2,    1024),
    _composite("composite_48_1p50x",    "Composite 48 1.5X",       48, 1.5,  1024),
)

SOURCE_PROFILES: dict[str, SourceProfile] = {p.name: p for p in _PROFILE_ROWS}

DEFAULT_SOURCE = _PROFILE_ROWS[0].name


def get_profile(name: str) -> SourceProfile:
    """
    Look up a source profile by name.

    Raises:
        UnknownSourceError: if `name` is not registered.
    """
    try:
        return SOURCE_PROFILES[name]
    except KeyError:
        raise UnknownSourceError(name) from None


def list_profiles() -> list[SourceProfile]:
    """All registered profiles, in registry order."""
    return list(SOURCE_PROFILES.values())
