import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from card_theme_engine.seeded import BASE36_ALPHABET  # noqa: E402
from card_theme_engine.theme import CatalogLogoResolver, LogoFamily, LogoVariant, ThemeApplier  # noqa: E402
from card_theme_engine.variations import (  # noqa: E402
    MAX_VARIANTS,
    derive_seeds,
    generate_variations,
)
from tests.helpers import business_card, layer, template  # noqa: E402


class TestDeriveSeeds(unittest.TestCase):
    def test_reproducible(self):
        self.assertEqual(derive_seeds("catalog", 15), derive_seeds("catalog", 15))

    def test_shape(self):
        seeds = derive_seeds("catalog", 15)
        self.assertEqual(len(seeds), 15)
        for seed in seeds:
            self.assertEqual(len(seed), 7)
            self.assertTrue(set(seed) <= set(BASE36_ALPHABET))

    def test_master_seed_matters(self):
        self.assertNotEqual(derive_seeds("one", 5), derive_seeds("two", 5))


class TestGenerateVariations(unittest.TestCase):
    def test_random_seeds_fill_the_set(self):
        card = business_card()
        variations = generate_variations(card)
        self.assertEqual(len(variations), MAX_VARIANTS)
        self.assertIs(variations[0], card)
        ids = [v.id for v in variations]
        self.assertEqual(len(set(ids)), len(ids))
        for variant in variations[1:]:
            self.assertTrue(variant.id.startswith("tpl_gen_"))
            self.assertEqual([l.id for l in variant.layers], [l.id for l in card.layers])

    def test_seeded_run_is_reproducible(self):
        seeds = derive_seeds("reproducible", 15)
        first = [v.to_dict() for v in generate_variations(business_card(), seeds=seeds)]
        second = [v.to_dict() for v in generate_variations(business_card(), seeds=seeds)]
        self.assertEqual(first, second)
        self.assertEqual(len(first), MAX_VARIANTS)

    def test_duplicate_palettes_are_skipped(self):
        variations = generate_variations(business_card(), seeds=["a", "b", "a", "c"])
        self.assertEqual([v.id for v in variations], ["tpl", "tpl_gen_a", "tpl_gen_b", "tpl_gen_c"])

    def test_running_out_of_seeds_gives_shorter_list(self):
        self.assertEqual(len(generate_variations(business_card(), seeds=["a", "b"])), 3)
        self.assertEqual(len(generate_variations(business_card(), seeds=[])), 1)

    def test_attempts_are_bounded(self):
        variations = generate_variations(business_card(), seeds=["same"] * 20, max_attempts=5)
        self.assertEqual([v.id for v in variations], ["tpl", "tpl_gen_same"])

    def test_max_variants_includes_base(self):
        variations = generate_variations(
            business_card(), seeds=derive_seeds("cap", 15), max_variants=4
        )
        self.assertEqual(len(variations), 4)

    def test_base_is_not_mutated(self):
        card = business_card()
        before = card.to_dict()
        generate_variations(card, seeds=derive_seeds("mutation", 15))
        self.assertEqual(card.to_dict(), before)

    def test_custom_applier_is_used(self):
        family = LogoFamily("acme", [LogoVariant("Black", "black"), LogoVariant("White", "white")])
        applier = ThemeApplier(CatalogLogoResolver({"tpl": family}))
        card = template([layer("logo", "Image", 0, 0, 40, 40, path="placeholder")])
        variations = generate_variations(card, seeds=["abc", "xyz"], applier=applier)
        # "abc" is a light palette, "xyz" a bold dark one
        self.assertEqual([v.layers[0].path for v in variations], ["placeholder", "black", "white"])


if __name__ == "__main__":
    unittest.main()
