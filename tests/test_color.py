import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from card_theme_engine.color import (  # noqa: E402
    HSL,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    hue_distance,
    is_hex_color,
    rgb_to_hex,
    rotate_hue,
)


class TestHslToHex(unittest.TestCase):
    def test_primaries(self):
        self.assertEqual(hsl_to_hex(0, 100, 50), "#ff0000")
        self.assertEqual(hsl_to_hex(120, 100, 50), "#00ff00")
        self.assertEqual(hsl_to_hex(240, 100, 50), "#0000ff")

    def test_known_values(self):
        self.assertEqual(hsl_to_hex(210, 50, 40), "#336699")
        self.assertEqual(hsl_to_hex(30, 80, 60), "#eb9947")

    def test_half_channel_rounds_up(self):
        # 0.5 * 255 = 127.5 -> 128
        self.assertEqual(hsl_to_hex(0, 0, 50), "#808080")

    def test_extremes_clamp(self):
        self.assertEqual(hsl_to_hex(0, 0, 100), "#ffffff")
        self.assertEqual(hsl_to_hex(0, 0, 0), "#000000")
        self.assertEqual(hsl_to_hex(0, 150, 120), "#ffffff")

    def test_last_sector_before_wrap(self):
        self.assertEqual(hsl_to_hex(359.9, 100, 50), "#ff0000")


class TestHexParsing(unittest.TestCase):
    def test_round_trip(self):
        self.assertEqual(hex_to_rgb("#336699"), (51, 102, 153))
        self.assertEqual(rgb_to_hex(51, 102, 153), "#336699")

    def test_short_form_and_case(self):
        self.assertEqual(hex_to_rgb("#FfF"), (255, 255, 255))
        self.assertEqual(hex_to_rgb("336699"), (51, 102, 153))

    def test_malformed_is_black(self):
        for bad in (None, "", "transparent", "#12345", "#GGGGGG", 42):
            self.assertEqual(hex_to_rgb(bad), (0, 0, 0), bad)

    def test_rgb_to_hex_clamps(self):
        self.assertEqual(rgb_to_hex(-5, 300, 128), "#00ff80")

    def test_is_hex_color(self):
        self.assertTrue(is_hex_color("#A1b2C3"))
        self.assertFalse(is_hex_color("#abc"))
        self.assertFalse(is_hex_color("A1B2C3"))
        self.assertFalse(is_hex_color(None))


class TestHueRotation(unittest.TestCase):
    def test_rotate_hsl_wraps(self):
        self.assertEqual(rotate_hue(HSL(300, 50, 50), 180), HSL(120, 50, 50))
        self.assertEqual(rotate_hue(HSL(10, 50, 50), -30), HSL(340, 50, 50))

    def test_rotate_hex_complement(self):
        self.assertEqual(rotate_hue("#ff0000", 180), "#00ffff")

    def test_hex_to_hsl(self):
        h, s, l = hex_to_hsl("#336699")
        self.assertAlmostEqual(h, 210, places=3)
        self.assertAlmostEqual(s, 50, places=3)
        self.assertAlmostEqual(l, 40, places=3)

    def test_hue_distance(self):
        self.assertEqual(hue_distance(350, 10), 20)
        self.assertEqual(hue_distance(10, 350), 20)
        self.assertEqual(hue_distance(0, 180), 180)


if __name__ == "__main__":
    unittest.main()
