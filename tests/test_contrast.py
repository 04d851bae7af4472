import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from card_theme_engine.contrast import (  # noqa: E402
    BLACK,
    WHITE,
    best_text_polarity,
    contrast_ratio,
    luminance,
    meets_aa,
    most_contrasting,
)


class TestLuminance(unittest.TestCase):
    def test_bt709_on_raw_channels(self):
        self.assertAlmostEqual(luminance("#808080"), 128)
        self.assertAlmostEqual(luminance("#FF0000"), 0.2126 * 255)
        self.assertAlmostEqual(luminance("#2563EB"), 95.638)

    def test_malformed_treated_as_black(self):
        self.assertEqual(luminance("not-a-color"), 0)


class TestContrastRatio(unittest.TestCase):
    def test_identical_colors_are_one(self):
        for color in ("#000000", "#FFFFFF", "#2563EB", "#777777"):
            self.assertEqual(contrast_ratio(color, color), 1.0)

    def test_symmetric(self):
        pairs = [("#2563EB", "#FDE047"), ("#000000", "#FFFFFF"), ("#0F172A", "#F8FAFC")]
        for a, b in pairs:
            self.assertEqual(contrast_ratio(a, b), contrast_ratio(b, a))

    def test_black_on_white_is_maximum(self):
        self.assertAlmostEqual(contrast_ratio(BLACK, WHITE), 21.0)

    def test_known_ratios(self):
        self.assertAlmostEqual(contrast_ratio("#0F172A", WHITE), 7.559075, places=5)
        self.assertAlmostEqual(contrast_ratio("#1E3A8A", WHITE), 3.793933, places=5)

    def test_monotonic_in_luminance_difference(self):
        grays = ["#FFFFFF", "#DDDDDD", "#AAAAAA", "#777777", "#333333", "#000000"]
        ratios = [contrast_ratio(WHITE, g) for g in grays]
        self.assertEqual(ratios, sorted(ratios))


class TestHelpers(unittest.TestCase):
    def test_best_text_polarity(self):
        self.assertEqual(best_text_polarity("#0F172A"), WHITE)
        self.assertEqual(best_text_polarity("#F8FAFC"), BLACK)
        # Raw luma treats this navy as light enough for black text
        self.assertEqual(best_text_polarity("#1E3A8A"), BLACK)

    def test_meets_aa(self):
        self.assertTrue(meets_aa(WHITE, "#0F172A"))
        self.assertFalse(meets_aa(WHITE, "#1E3A8A"))
        self.assertTrue(meets_aa(WHITE, "#1E3A8A", large=True))

    def test_most_contrasting(self):
        self.assertEqual(most_contrasting(WHITE, ["#EEEEEE", "#111111", "#777777"]), "#111111")


if __name__ == "__main__":
    unittest.main()
