"""
Unit tests for the source profile registry (CPGE/SRM).
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from CPGE.SRM.profiles import (
    DEFAULT_SOURCE, SOURCE_PROFILES,
    FAMILIES, FAMILY_APPROX_NES, FAMILY_COMPOSITE,
    HUE_MODIFIERS, HUE_MODIFIER_FULL, HUE_MODIFIER_LOWER_HALF,
    SourceProfile, UnknownSourceError,
    capacity_bucket, expected_color_count, get_profile,
    hue_step_for_multiplier, list_profiles,
)

EXPECTED = {
    # name                  (n,  step, start, max,  colors)
    "approx_nes":           (4,  30,   0,     64,   54),
    "approx_nes_rotated":   (4,  30,   15,    64,   54),
    "composite_06_0p75x":   (6,  40,   0,     64,   60),
    "composite_06_3x":      (6,  10,   0,     256,  222),
    "composite_12_1p50x":   (12, 20,   0,     256,  228),
    "composite_12_6x":      (12, 5,    0,     1024, 876),
    "composite_18_1x":      (18, 30,   0,     256,  234),
    "composite_24_0p75x":   (24, 40,   0,     256,  240),
    "composite_24_3x":      (24, 10,   0,     1024, 888),
    "composite_36_2x":      (36, 15,   0,     1024, 900),
    "composite_48_1p50x":   (48, 20,   0,     1024, 912),
}


class TestRegistry(unittest.TestCase):

    def test_registered_names_in_order(self):
        self.assertEqual([p.name for p in list_profiles()], list(EXPECTED))

    def test_profile_parameters(self):
        for name, (n, step, start, max_colors, _) in EXPECTED.items():
            p = get_profile(name)
            self.assertEqual(p.name, name)
            self.assertEqual(p.table_length, n, name)
            self.assertEqual(p.hue_step, step, name)
            self.assertEqual(p.hue_start, start, name)
            self.assertEqual(p.max_colors, max_colors, name)
            self.assertEqual(p.hue_modifier, HUE_MODIFIER_FULL, name)

    def test_expected_counts_and_capacity(self):
        """max_colors is always the smallest bucket holding every color."""
        for name, (*_, colors) in EXPECTED.items():
            p = get_profile(name)
            self.assertEqual(expected_color_count(p), colors, name)
            self.assertEqual(p.max_colors, capacity_bucket(colors), name)

    def test_modifier_and_family_values_are_known(self):
        for name, p in SOURCE_PROFILES.items():
            self.assertIn(p.family, FAMILIES, name)
            self.assertIn(p.hue_modifier, HUE_MODIFIERS, name)

    def test_families(self):
        self.assertEqual(get_profile("approx_nes").family, FAMILY_APPROX_NES)
        self.assertTrue(get_profile("approx_nes_rotated").has_bookends)
        for name in EXPECTED:
            if name.startswith("composite"):
                self.assertEqual(get_profile(name).family, FAMILY_COMPOSITE)
                self.assertFalse(get_profile(name).has_bookends)

    def test_display_names(self):
        self.assertEqual(get_profile("approx_nes").display_name, "Approximate NES")
        self.assertEqual(get_profile("composite_12_1p50x").display_name, "Composite 12 1.5X")
        self.assertEqual(get_profile("composite_06_0p75x").display_name, "Composite 06 0.75X")

    def test_default_source(self):
        self.assertEqual(DEFAULT_SOURCE, "approx_nes")
        self.assertEqual(get_profile(DEFAULT_SOURCE).family, FAMILY_APPROX_NES)

    def test_unknown_source(self):
        with self.assertRaises(UnknownSourceError) as cm:
            get_profile("composite_99_9x")
        self.assertEqual(cm.exception.name, "composite_99_9x")
        self.assertIsInstance(cm.exception, ValueError)
        with self.assertRaises(UnknownSourceError):
            get_profile("")

    def test_registry_profiles_are_immutable(self):
        p = SOURCE_PROFILES["approx_nes"]
        with self.assertRaises(AttributeError):
            p.hue_step = 15


class TestHelpers(unittest.TestCase):

    def test_hue_step_for_multiplier(self):
        self.assertEqual(hue_step_for_multiplier(1), 30)
        self.assertEqual(hue_step_for_multiplier(0.75), 40)
        self.assertEqual(hue_step_for_multiplier(1.5), 20)
        self.assertEqual(hue_step_for_multiplier(2), 15)
        self.assertEqual(hue_step_for_multiplier(3), 10)
        self.assertEqual(hue_step_for_multiplier(6), 5)

    def test_hue_step_rejects_uneven_multiplier(self):
        for bad in (0, 0.1, 7, 1.75):
            with self.assertRaises(ValueError):
                hue_step_for_multiplier(bad)

    def test_capacity_bucket(self):
        self.assertEqual(capacity_bucket(0), 64)
        self.assertEqual(capacity_bucket(64), 64)
        self.assertEqual(capacity_bucket(65), 256)
        self.assertEqual(capacity_bucket(1024), 1024)
        with self.assertRaises(ValueError):
            capacity_bucket(1025)

    def test_half_table_count(self):
        p = SourceProfile(
            name="half", display_name="Half", family=FAMILY_COMPOSITE,
            table_length=12, hue_step=30, hue_start=0,
            hue_modifier=HUE_MODIFIER_LOWER_HALF, max_colors=256,
        )
        self.assertEqual(p.entries_per_hue, 6)
        self.assertEqual(expected_color_count(p), 12 + 12 * 6)


if __name__ == "__main__":
    unittest.main()
