# =============================================================================
# assembler.py - Palette Assembler
# =============================================================================
#
# Produces the palette for one source, in this fixed order:
#
#   1. pure black                       (approx_nes family only)
#   2. one grey per table entry k       r = g = b = luma[k] * 255 + 0.5
#   3. pure white                       (approx_nes family only)
#   4. for each hue, starting at hue_start and stepping hue_step mod 360,
#      360 / hue_step times:
#        for each table entry k selected by the hue modifier:
#          I = sat[k] * cos(2π·hue/360)
#          Q = sat[k] * sin(2π·hue/360)
#          R = Y + 0.956 I + 0.619 Q
#          G = Y - 0.272 I - 0.647 Q
#          B = Y - 1.106 I + 1.703 Q
#          scale by 255, add 0.5, truncate, clamp to [0, 255]
#
# PRECISION:
#   Table values, the hue angle and the channel mix are float32.  cos/sin run
#   in double and the chroma product is rounded back to float32 before it is
#   mixed.  Truncation is toward zero (int()), then clamped.
#
# STATE:
#   Nothing here is global.  Each stage takes a SynthesisContext and returns
#   it; the Palette inside is owned by that context until synthesis ends.

from __future__ import annotations
import math
from typing import Iterator, NamedTuple

import numpy as np

from CPGE.VTM.constants import (
    F32,
    TWO_PI, DEGREES_PER_TURN,
    YIQ_R_I, YIQ_R_Q, YIQ_G_I, YIQ_G_Q, YIQ_B_I, YIQ_B_Q,
    CHANNEL_SCALE, ROUND_HALF, CHANNEL_MIN, CHANNEL_MAX,
)
from CPGE.VTM.voltage_tables import VoltageTable, voltage_table_for
from CPGE.SRM.profiles import (
    SourceProfile,
    HUE_MODIFIER_FULL, HUE_MODIFIER_LOWER_HALF, HUE_MODIFIER_UPPER_HALF,
    get_profile,
)
from .palette import Color, Palette, BLACK, WHITE


class SynthesisContext(NamedTuple):
    profile: SourceProfile
    table:   VoltageTable
    palette: Palette


def new_context(profile: SourceProfile) -> SynthesisContext:
    """Fresh context: the profile's voltage table and an empty palette."""
    return SynthesisContext(
        profile=profile,
        table=voltage_table_for(profile.table_length),
        palette=Palette(profile.max_colors),
    )


# ── Conversion ───────────────────────────────────────────────────────────────

def clamp_channel(value: int) -> int:
    if value < CHANNEL_MIN:
        return CHANNEL_MIN
    if value > CHANNEL_MAX:
        return CHANNEL_MAX
    return value


def _quantize(value: np.float32) -> int:
    """value * 255 + 0.5 in float32, truncated toward zero, clamped."""
    with np.errstate(over="ignore", invalid="ignore"):
        scaled = value * CHANNEL_SCALE + ROUND_HALF
    # saturate before int(): overflow gives inf or nan
    if not scaled < CHANNEL_MAX + 1:
        return CHANNEL_MAX
    if not scaled > CHANNEL_MIN - 1:
        return CHANNEL_MIN
    return clamp_channel(int(scaled))


def grey_level(luma: np.float32) -> int:
    """8-bit grey level for a table luma value."""
    return _quantize(F32(luma))


def hue_angle(hue: int) -> np.float32:
    """Hue in degrees → subcarrier phase in radians (float32)."""
    return TWO_PI * F32(hue) / F32(DEGREES_PER_TURN)


def chroma_iq(saturation: np.float32, hue: int) -> tuple[np.float32, np.float32]:
    """(I, Q) chroma components for one saturation at one hue."""
    angle = float(hue_angle(hue))
    sat   = float(saturation)
    return F32(sat * math.cos(angle)), F32(sat * math.sin(angle))


def yiq_to_rgb(luma: np.float32, saturation: np.float32, hue: int) -> Color:
    """
    Convert one (luma, saturation, hue) triple to a clamped 8-bit Color.

    Args:
        luma:       Y, normalized 0..1
        saturation: half the peak-to-peak chroma swing
        hue:        subcarrier phase in whole degrees
    """
    y = F32(luma)
    with np.errstate(over="ignore", invalid="ignore"):
        i, q = chroma_iq(F32(saturation), hue)
        r = y + i * YIQ_R_I + q * YIQ_R_Q
        g = y - i * YIQ_G_I - q * YIQ_G_Q
        b = y - i * YIQ_B_I + q * YIQ_B_Q

    return Color(_quantize(r), _quantize(g), _quantize(b))


def modifier_range(table_length: int, modifier: str) -> range:
    """Table indices a hue sweep emits under `modifier`."""
    half = table_length // 2
    if modifier == HUE_MODIFIER_FULL:
        return range(0, table_length)
    if modifier == HUE_MODIFIER_LOWER_HALF:
        return range(0, half)
    if modifier == HUE_MODIFIER_UPPER_HALF:
        return range(half, table_length)
    raise ValueError(f"Cannot create palette hue; invalid modifier {modifier!r}")


def hue_sequence(profile: SourceProfile) -> Iterator[int]:
    """Hues visited by `profile`, in emission order."""
    hue = profile.hue_start % DEGREES_PER_TURN
    for _ in range(profile.hue_count):
        yield hue
        hue = (hue + profile.hue_step) % DEGREES_PER_TURN


# ── Stages ───────────────────────────────────────────────────────────────────

def generate_palette_greys(ctx: SynthesisContext) -> SynthesisContext:
    """Append one grey per table entry, in table order."""
    for luma in ctx.table.luma:
        level = grey_level(luma)
        ctx.palette.add_color(level, level, level)
    return ctx


def generate_palette_hue(
    ctx:      SynthesisContext,
    hue:      int,
    modifier: str | None = None,
) -> SynthesisContext:
    """
    Append one hue sweep.

    Args:
        hue:      degrees, 0 <= hue < 360
        modifier: HUE_MODIFIER_*; defaults to the profile's modifier
    """
    if not 0 <= hue < DEGREES_PER_TURN:
        raise ValueError(f"Cannot create palette hue; invalid hue {hue}")
    if modifier is None:
        modifier = ctx.profile.hue_modifier

    table = ctx.table
    for k in modifier_range(table.length, modifier):
        ctx.palette.add_color(*yiq_to_rgb(table.luma[k], table.saturation[k], hue))
    return ctx


def generate_palette_from_source(ctx: SynthesisContext) -> SynthesisContext:
    """Run every stage for ctx.profile in the fixed append order."""
    if ctx.profile.has_bookends:
        ctx.palette.add_color(*BLACK)

    generate_palette_greys(ctx)

    if ctx.profile.has_bookends:
        ctx.palette.add_color(*WHITE)

    for hue in hue_sequence(ctx.profile):
        generate_palette_hue(ctx, hue)

    return ctx


def synthesize(source: str | SourceProfile) -> SynthesisContext:
    """
    Build the complete palette for a source name (or profile).

    Raises:
        UnknownSourceError: if a name is given that is not registered.
    """
    profile = source if isinstance(source, SourceProfile) else get_profile(source)
    return generate_palette_from_source(new_context(profile))
