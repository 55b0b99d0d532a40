#!/usr/bin/env python3
# =============================================================================
# validate.py - CPGE Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m CPGE.PVM.validate
#             or python CPGE/PVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity   - literal NES tables, capacity buckets
#   2. Voltage tables        - palindromes, step model, caching
#   3. Source registry       - hue steps, capacities, expected counts
#   4. Palette assembler     - order, bookends, greys, clamping, determinism
#   5. Encoders              - .gpl / .tga layout and read-back
# =============================================================================

import sys
import os
import tempfile

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from CPGE.VTM.constants import (
    NES_LUMA, NES_SATURATION, NES_PEAK_TO_PEAK,
    APPROX_NES_LUMA, APPROX_NES_SATURATION, APPROX_NES_PEAK_TO_PEAK,
    COMPOSITE_TABLE_LENGTHS, CAPACITY_BUCKETS, TGA_HEADER_SIZE,
)
from CPGE.VTM.voltage_tables import voltage_table_for
from CPGE.SRM.profiles import (
    SOURCE_PROFILES, DEFAULT_SOURCE,
    capacity_bucket, expected_color_count,
)
from CPGE.PGM.assembler import synthesize, yiq_to_rgb
from CPGE.PEM.gpl_writer import write_gpl_file
from CPGE.PEM.tga_writer import write_tga_file, tga_width
from CPGE.PVM.readers import read_gpl, read_tga

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

EPSILON = 1e-6

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


# =============================================================================
# TEST 1 - Constants Integrity
# =============================================================================
print("\n" + "="*60)
print("TEST 1 - Constants Integrity")
print("="*60)

check("NES: saturation = peak-to-peak / 2",
      all(abs(s - p / 2) < EPSILON for s, p in zip(NES_SATURATION, NES_PEAK_TO_PEAK)))
check("Approx NES: saturation = peak-to-peak / 2",
      all(abs(s - p / 2) < EPSILON
          for s, p in zip(APPROX_NES_SATURATION, APPROX_NES_PEAK_TO_PEAK)))
check("Approx NES luma within 0.01 of measured",
      all(abs(a - m) <= 0.01 + EPSILON for a, m in zip(APPROX_NES_LUMA, NES_LUMA)))
check("Approx NES saturation within 0.01 of measured",
      all(abs(a - m) <= 0.01 + EPSILON
          for a, m in zip(APPROX_NES_SATURATION, NES_SATURATION)))
check("Capacity buckets ascending",
      list(CAPACITY_BUCKETS) == sorted(CAPACITY_BUCKETS))


# =============================================================================
# TEST 2 - Voltage Tables
# =============================================================================
print("\n" + "="*60)
print("TEST 2 - Voltage Tables")
print("="*60)

for n in COMPOSITE_TABLE_LENGTHS:
    t = voltage_table_for(n)
    check(f"Table {n:2d}: length",
          t.length == n and len(t.saturation) == n)
    check(f"Table {n:2d}: luma[i] + luma[n-1-i] == 1",
          all(abs(t.luma[i] + t.luma[n - 1 - i] - 1) < EPSILON for i in range(n)))
    check(f"Table {n:2d}: saturation palindromic",
          all(t.saturation[i] == t.saturation[n - 1 - i] for i in range(n)))
    check(f"Table {n:2d}: first rung = 1/(n+2)",
          abs(t.luma[0] - 1 / (n + 2)) < EPSILON,
          f"got {float(t.luma[0])}")

check("Tables are cached (same object)",
      voltage_table_for(18) is voltage_table_for(18))
check("Length 4 is the literal approx NES table",
      voltage_table_for(4).luma == APPROX_NES_LUMA)


# =============================================================================
# TEST 3 - Source Registry
# =============================================================================
print("\n" + "="*60)
print("TEST 3 - Source Registry")
print("="*60)

EXPECTED_COUNTS = {
    "approx_nes":          54,
    "approx_nes_rotated":  54,
    "composite_06_0p75x":  60,
    "composite_06_3x":    222,
    "composite_12_1p50x": 228,
    "composite_12_6x":    876,
    "composite_18_1x":    234,
    "composite_24_0p75x": 240,
    "composite_24_3x":    888,
    "composite_36_2x":    900,
    "composite_48_1p50x": 912,
}

check("Default source is approx_nes", DEFAULT_SOURCE == "approx_nes")
check("Registry has 11 sources", len(SOURCE_PROFILES) == 11,
      f"got {len(SOURCE_PROFILES)}")
for name, profile in SOURCE_PROFILES.items():
    count = expected_color_count(profile)
    check(f"{name:<20} hue step divides 360",
          360 % profile.hue_step == 0)
    check(f"{name:<20} expected {EXPECTED_COUNTS.get(name)} colors",
          count == EXPECTED_COUNTS.get(name), f"got {count}")
    check(f"{name:<20} max_colors = bucket({count})",
          profile.max_colors == capacity_bucket(count),
          f"{profile.max_colors} vs {capacity_bucket(count)}")


# =============================================================================
# TEST 4 - Palette Assembler
# =============================================================================
print("\n" + "="*60)
print("TEST 4 - Palette Assembler")
print("="*60)

nes = synthesize("approx_nes").palette.colors
check("approx_nes: 54 colors", len(nes) == 54, f"got {len(nes)}")
check("approx_nes: starts with black", nes[0] == (0, 0, 0))
check("approx_nes: grey ramp 51/89/166/217",
      [c.r for c in nes[1:5]] == [51, 89, 166, 217],
      f"got {[tuple(c) for c in nes[1:5]]}")
check("approx_nes: white after greys", nes[5] == (255, 255, 255))

for name, profile in SOURCE_PROFILES.items():
    ctx = synthesize(name)
    colors = ctx.palette.colors
    greys_at = 1 if profile.has_bookends else 0
    greys = colors[greys_at:greys_at + profile.table_length]
    check(f"{name:<20} count = {EXPECTED_COUNTS[name]}",
          len(colors) == EXPECTED_COUNTS[name], f"got {len(colors)}")
    check(f"{name:<20} greys have r == g == b",
          all(c.r == c.g == c.b for c in greys))
    check(f"{name:<20} channels in [0, 255]",
          all(0 <= v <= 255 for c in colors for v in c))
    check(f"{name:<20} deterministic",
          synthesize(name).palette.colors == colors)

hot = yiq_to_rgb(0.9, 5.0, 100)
check("Clamp: oversaturated input stays in [0, 255]",
      all(0 <= v <= 255 for v in hot), f"got {tuple(hot)}")


# =============================================================================
# TEST 5 - Encoders
# =============================================================================
print("\n" + "="*60)
print("TEST 5 - Encoders")
print("="*60)

with tempfile.TemporaryDirectory() as tmp:
    for name in ("approx_nes", "composite_18_1x", "composite_48_1p50x"):
        profile = SOURCE_PROFILES[name]
        colors = synthesize(name).palette.colors
        gpl_path = os.path.join(tmp, name + ".gpl")
        tga_path = os.path.join(tmp, name + ".tga")

        check(f"{name:<20} .gpl written",
              write_gpl_file(gpl_path, colors, profile.display_name))
        read_name, read_colors = read_gpl(gpl_path)
        check(f"{name:<20} .gpl round trip",
              read_name == profile.display_name and read_colors == list(colors))

        check(f"{name:<20} .tga written", write_tga_file(tga_path, colors))
        width = tga_width(len(colors))
        size = os.path.getsize(tga_path)
        check(f"{name:<20} .tga size = 18 + 3*{width}",
              size == TGA_HEADER_SIZE + 3 * width, f"got {size}")
        header, pixels = read_tga(tga_path)
        check(f"{name:<20} .tga pixels match",
              [tuple(p) for p in pixels[:len(colors)].tolist()] == [tuple(c) for c in colors])

    print(f"  {INFO} Expect one [!!] line from the oversize palette below")
    check("1024-color palette refused by .tga writer",
          not write_tga_file(os.path.join(tmp, "big.tga"), [(0, 0, 0)] * 1024))
    check("No file left behind for refused .tga",
          not os.path.exists(os.path.join(tmp, "big.tga")))


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
