"""
Unit tests for the palette buffer and assembler (CPGE/PGM).
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from CPGE.SRM.profiles import (
    SOURCE_PROFILES,
    HUE_MODIFIER_FULL, HUE_MODIFIER_LOWER_HALF, HUE_MODIFIER_UPPER_HALF,
    UnknownSourceError, expected_color_count, get_profile,
)
from CPGE.PGM.palette import BLACK, WHITE, Color, Palette
from CPGE.PGM.assembler import (
    clamp_channel, generate_palette_hue, grey_level, hue_sequence,
    modifier_range, new_context, synthesize, yiq_to_rgb,
)


class TestPalette(unittest.TestCase):

    def test_append_in_order(self):
        pal = Palette(4)
        self.assertTrue(pal.add_color(1, 2, 3))
        self.assertTrue(pal.add_color(4, 5, 6))
        self.assertEqual(pal.colors, (Color(1, 2, 3), Color(4, 5, 6)))
        self.assertEqual(pal.num_colors, 2)
        self.assertFalse(pal.is_full)

    def test_append_past_capacity_is_a_noop(self):
        """A full palette refuses the color and keeps every prior entry."""
        pal = Palette(2)
        pal.add_color(10, 20, 30)
        pal.add_color(40, 50, 60)
        self.assertTrue(pal.is_full)
        self.assertFalse(pal.add_color(70, 80, 90))
        self.assertEqual(len(pal), 2)
        self.assertEqual(list(pal), [(10, 20, 30), (40, 50, 60)])

    def test_to_numpy(self):
        pal = Palette(64)
        pal.add_color(255, 0, 7)
        arr = pal.to_numpy()
        self.assertEqual(arr.dtype, np.uint8)
        self.assertEqual(arr.shape, (1, 3))
        self.assertEqual(pal.to_bytes(), bytes([255, 0, 7]))
        self.assertEqual(Palette(64).to_numpy().shape, (0, 3))

    def test_bad_capacity(self):
        with self.assertRaises(ValueError):
            Palette(0)

    def test_out_of_range_channel_rejected(self):
        pal = Palette(4)
        for rgb in ((300, 0, 0), (0, -1, 0), (0, 0, 256)):
            with self.assertRaises(ValueError):
                pal.add_color(*rgb)
        self.assertEqual(len(pal), 0)
        self.assertTrue(pal.add_color(0, 128, 255))


class TestConversion(unittest.TestCase):

    def test_clamp_channel(self):
        self.assertEqual(clamp_channel(-4), 0)
        self.assertEqual(clamp_channel(0), 0)
        self.assertEqual(clamp_channel(128), 128)
        self.assertEqual(clamp_channel(300), 255)

    def test_grey_level_rounds_half_up(self):
        self.assertEqual(grey_level(0.2), 51)
        self.assertEqual(grey_level(0.85), 217)
        self.assertEqual(grey_level(0.0), 0)
        self.assertEqual(grey_level(1.0), 255)

    def test_zero_saturation_is_grey(self):
        for hue in (0, 45, 200):
            c = yiq_to_rgb(0.5, 0.0, hue)
            self.assertEqual(c.r, c.g)
            self.assertEqual(c.g, c.b)

    def test_extreme_saturation_is_clamped(self):
        """Any saturation magnitude yields channels inside [0, 255]."""
        for sat in (1.0, 5.0, 50.0, -50.0, 1e37, -1e37, 3e38):
            for hue in range(0, 360, 15):
                c = yiq_to_rgb(0.5, sat, hue)
                for v in c:
                    self.assertGreaterEqual(v, 0)
                    self.assertLessEqual(v, 255)
        self.assertEqual(yiq_to_rgb(0.5, 1e37, 0), Color(255, 0, 0))
        self.assertEqual(yiq_to_rgb(0.5, -1e37, 0), Color(0, 255, 255))

    def test_known_values(self):
        # hue 0: I = sat, Q = 0
        self.assertEqual(yiq_to_rgb(0.2, 0.2, 0), Color(100, 37, 0))
        self.assertEqual(yiq_to_rgb(0.85, 0.15, 0), Color(253, 206, 174))
        # hue 90: I ~ 0, Q = sat
        self.assertEqual(yiq_to_rgb(0.2, 0.2, 90), Color(83, 18, 138))

    def test_modifier_range(self):
        self.assertEqual(list(modifier_range(6, HUE_MODIFIER_FULL)), [0, 1, 2, 3, 4, 5])
        self.assertEqual(list(modifier_range(6, HUE_MODIFIER_LOWER_HALF)), [0, 1, 2])
        self.assertEqual(list(modifier_range(6, HUE_MODIFIER_UPPER_HALF)), [3, 4, 5])
        with self.assertRaises(ValueError):
            modifier_range(6, "middle")


class TestHueSequence(unittest.TestCase):

    def test_rotated_starts_at_fifteen(self):
        self.assertEqual(list(hue_sequence(get_profile("approx_nes_rotated"))),
                         list(range(15, 360, 30)))

    def test_wraps_modulo_360(self):
        p = get_profile("approx_nes")._replace(hue_start=350)
        hues = list(hue_sequence(p))
        self.assertEqual(hues[:3], [350, 20, 50])
        self.assertEqual(len(hues), 12)
        self.assertTrue(all(0 <= h < 360 for h in hues))

    def test_count_is_360_over_step(self):
        for p in SOURCE_PROFILES.values():
            self.assertEqual(len(list(hue_sequence(p))), 360 // p.hue_step)


class TestSynthesis(unittest.TestCase):

    def test_approx_nes_layout(self):
        """black, 4 greys, white, then 12 hue sweeps of 4 colors."""
        colors = synthesize("approx_nes").palette.colors
        self.assertEqual(len(colors), 1 + 4 + 1 + 12 * 4)
        self.assertEqual(colors[0], BLACK)
        self.assertEqual(colors[1:5], ((51, 51, 51), (89, 89, 89),
                                       (166, 166, 166), (217, 217, 217)))
        self.assertEqual(colors[5], WHITE)
        self.assertEqual(colors[6], (100, 37, 0))
        self.assertEqual(colors[9], (253, 206, 174))
        self.assertEqual(colors[18], (83, 18, 138))
        self.assertEqual(colors[30], (2, 65, 107))

    def test_rotated_shares_greys_but_not_hues(self):
        plain = synthesize("approx_nes").palette.colors
        rotated = synthesize("approx_nes_rotated").palette.colors
        self.assertEqual(plain[:6], rotated[:6])
        self.assertNotEqual(plain[6:10], rotated[6:10])

    def test_every_source_count_and_greys(self):
        for name, profile in SOURCE_PROFILES.items():
            ctx = synthesize(name)
            colors = ctx.palette.colors
            self.assertEqual(len(colors), expected_color_count(profile), name)
            self.assertLessEqual(len(colors), profile.max_colors, name)
            start = 1 if profile.has_bookends else 0
            for c in colors[start:start + profile.table_length]:
                self.assertTrue(c.r == c.g == c.b, name)

    def test_composite_has_no_bookends(self):
        colors = synthesize("composite_18_1x").palette.colors
        self.assertEqual(colors[0], (13, 13, 13))
        self.assertEqual(colors[17], (242, 242, 242))
        self.assertNotIn(BLACK, colors[:18])

    def test_deterministic(self):
        """Two runs of the same source give byte-identical palettes."""
        for name in ("approx_nes", "composite_12_6x", "composite_48_1p50x"):
            a = synthesize(name).palette
            b = synthesize(name).palette
            self.assertEqual(a, b)
            self.assertEqual(a.to_bytes(), b.to_bytes())

    def test_runs_do_not_share_state(self):
        first = synthesize("composite_06_3x")
        synthesize("composite_36_2x")
        again = synthesize("composite_06_3x")
        self.assertIsNot(first.palette, again.palette)
        self.assertEqual(first.palette.colors, again.palette.colors)

    def test_context_carries_profile_and_table(self):
        ctx = synthesize("composite_24_3x")
        self.assertEqual(ctx.profile.name, "composite_24_3x")
        self.assertEqual(ctx.table.length, 24)

    def test_overfull_profile_keeps_prefix(self):
        """Running out of capacity stops appends without aborting or corrupting."""
        small = get_profile("approx_nes")._replace(max_colors=8)
        colors = synthesize(small).palette.colors
        self.assertEqual(len(colors), 8)
        self.assertEqual(colors, synthesize("approx_nes").palette.colors[:8])

    def test_half_table_modifiers(self):
        base = get_profile("composite_12_1p50x")
        lower = synthesize(base._replace(hue_modifier=HUE_MODIFIER_LOWER_HALF))
        upper = synthesize(base._replace(hue_modifier=HUE_MODIFIER_UPPER_HALF))
        full = synthesize(base).palette.colors
        self.assertEqual(len(lower.palette), 12 + 18 * 6)
        self.assertEqual(len(upper.palette), 12 + 18 * 6)
        # first sweep: lower half = entries 0-5, upper half = entries 6-11
        self.assertEqual(lower.palette.colors[12:18], full[12:18])
        self.assertEqual(upper.palette.colors[12:18], full[18:24])

    def test_generate_hue_rejects_bad_input(self):
        ctx = new_context(get_profile("approx_nes"))
        with self.assertRaises(ValueError):
            generate_palette_hue(ctx, 360)
        with self.assertRaises(ValueError):
            generate_palette_hue(ctx, -1)
        with self.assertRaises(ValueError):
            generate_palette_hue(ctx, 0, "sideways")
        self.assertEqual(len(ctx.palette), 0)

    def test_unknown_source(self):
        with self.assertRaises(UnknownSourceError):
            synthesize("not_a_source")


if __name__ == "__main__":
    unittest.main()
