# =============================================================================
# constants.py - VTM Voltage Model Constants
# =============================================================================
#
# The luma of a table entry is the average of its low and high voltages.
# For the first half of each table the low voltage is 0; for the second half
# the high voltage is 1.  The saturation is half of the peak-to-peak swing.
#
# The NES numbers come from the nesdev wiki ("NTSC video" and "PPU palettes")
# and are measured, not derived.  They are kept as literals and must never be
# regenerated from the step formula.
#
# All floating-point constants are float32 so that downstream arithmetic runs
# in single precision.

import numpy as np

F32 = np.float32

# -----------------------------------------------------------------------------
# MEASURED NES VOLTAGES  (reference only, not a selectable source)
# -----------------------------------------------------------------------------

NES_PEAK_TO_PEAK = (F32(0.399),  F32(0.684), F32(0.692), F32(0.285))
NES_LUMA         = (F32(0.1995), F32(0.342), F32(0.654), F32(0.8575))
NES_SATURATION   = (F32(0.1995), F32(0.342), F32(0.346), F32(0.1425))

# -----------------------------------------------------------------------------
# APPROXIMATE NES VOLTAGES  (used by the approx_nes family)
# -----------------------------------------------------------------------------
# Rounded versions of the measured table above.

APPROX_NES_PEAK_TO_PEAK = (F32(0.4), F32(0.7),  F32(0.7),  F32(0.3))
APPROX_NES_LUMA         = (F32(0.2), F32(0.35), F32(0.65), F32(0.85))
APPROX_NES_SATURATION   = (F32(0.2), F32(0.35), F32(0.35), F32(0.15))

APPROX_NES_TABLE_LENGTH = 4

# -----------------------------------------------------------------------------
# COMPOSITE STEP TABLES
# -----------------------------------------------------------------------------
# step = 1 / (n + 2): the two extra rungs are the implicit pure black and
# pure white that sit outside the table.

COMPOSITE_TABLE_LENGTHS = (6, 12, 18, 24, 36, 48)
TABLE_STEP_RESERVED_RUNGS = 2

# Every table length any source may use
TABLE_LENGTHS = (4, 6, 8, 12, 16, 18, 24, 32, 36, 48)

# -----------------------------------------------------------------------------
# HUE WHEEL
# -----------------------------------------------------------------------------

DEGREES_PER_TURN = 360
BASE_HUE_COUNT   = 12        # hues around the wheel at 1X (30 deg steps)
TWO_PI           = F32(6.28318530717958647693)

# -----------------------------------------------------------------------------
# YIQ → RGB  (FCC NTSC coefficients)
# -----------------------------------------------------------------------------
#   R = Y + 0.956 I + 0.619 Q
#   G = Y - 0.272 I - 0.647 Q
#   B = Y - 1.106 I + 1.703 Q

YIQ_R_I = F32(0.956)
YIQ_R_Q = F32(0.619)
YIQ_G_I = F32(0.272)
YIQ_G_Q = F32(0.647)
YIQ_B_I = F32(1.106)
YIQ_B_Q = F32(1.703)

CHANNEL_SCALE = F32(255)
ROUND_HALF    = F32(0.5)
CHANNEL_MIN   = 0
CHANNEL_MAX   = 255

# -----------------------------------------------------------------------------
# PALETTE CAPACITY
# -----------------------------------------------------------------------------
# Allocation ceilings.  The TGA row image uses the same buckets as its width.

CAPACITY_BUCKETS = (64, 256, 1024)
MAX_TGA_COLORS   = 1024     # palettes this long or longer cannot be written

# -----------------------------------------------------------------------------
# TGA HEADER  (uncompressed truecolor, one row)
# -----------------------------------------------------------------------------

TGA_HEADER_SIZE      = 18
TGA_IMAGE_TYPE_RGB   = 2
TGA_BITS_PER_PIXEL   = 24
TGA_BYTES_PER_PIXEL  = 3
TGA_DESCRIPTOR_TOP_LEFT = 0x20
