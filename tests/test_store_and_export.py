import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from card_theme_engine.errors import TemplateFormatError, TemplateNotFoundError  # noqa: E402
from card_theme_engine.export import (  # noqa: E402
    export_palette_json,
    export_template_json,
    export_variations_json,
    generate_contrast_report,
    render_template,
    save_variation_sheet,
)
from card_theme_engine.models import BackgroundPattern  # noqa: E402
from card_theme_engine.palette import generate_palette, load_palette_from_json  # noqa: E402
from card_theme_engine.store import load_template, load_template_by_id, load_templates  # noqa: E402
from card_theme_engine.theme import analyze_template, apply_palette  # noqa: E402
from card_theme_engine.variations import derive_seeds, generate_variations  # noqa: E402
from tests.helpers import business_card, layer, template  # noqa: E402

TEMPLATES_DIR = ROOT / "templates"


class TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def path(self, name):
        return os.path.join(self.tmpdir.name, name)

    def write(self, name, text):
        with open(self.path(name), "w") as f:
            f.write(text)
        return self.path(name)


class TestStore(TempDirTestCase):
    def test_bundled_templates(self):
        templates = load_templates(TEMPLATES_DIR)
        self.assertEqual([t.id for t in templates], ["template_01", "template_02"])
        self.assertTrue(templates[0].layer_by_id("logo").is_logo_layer)

    def test_invalid_json(self):
        with self.assertRaises(TemplateFormatError):
            load_template(self.write("bad.json", "{not json"))

    def test_not_an_object(self):
        with self.assertRaises(TemplateFormatError):
            load_template(self.write("list.json", "[]"))

    def test_broken_templates_are_skipped(self):
        self.write("a.json", json.dumps({"id": "a", "layers": []}))
        self.write("b.json", "{oops")
        with self.assertLogs("card_theme_engine.store", level="WARNING"):
            templates = load_templates(self.tmpdir.name)
        self.assertEqual([t.id for t in templates], ["a"])

    def test_load_by_id(self):
        self.assertEqual(load_template_by_id(TEMPLATES_DIR, "template_02").name, "Badge")
        with self.assertRaises(TemplateNotFoundError) as cm:
            load_template_by_id(TEMPLATES_DIR, "template_99")
        self.assertEqual(cm.exception.template_id, "template_99")
        self.assertIn("template_99", str(cm.exception))


class TestJsonExport(TempDirTestCase):
    def test_palette_round_trip(self):
        palette = generate_palette("xyz")
        export_palette_json(palette, self.path("palette.json"), seed="xyz")
        with open(self.path("palette.json")) as f:
            data = json.load(f)
        self.assertEqual(data["_seed"], "xyz")
        self.assertEqual(data["_gtk_color_scheme"], "prefer-dark")
        self.assertEqual(load_palette_from_json(self.path("palette.json")), palette)

    def test_template_with_context(self):
        card = business_card()
        themed = apply_palette(card, generate_palette("abc"))
        export_template_json(themed, self.path("card.json"), context_map=analyze_template(card))
        with open(self.path("card.json")) as f:
            data = json.load(f)
        self.assertEqual(data["id"], "tpl_gen_abc")
        self.assertEqual(data["_context"]["company"], {"backgroundLayerId": "panel"})
        reloaded = load_template(self.path("card.json"))
        self.assertEqual([l.paint.fill for l in reloaded.layers], [l.paint.fill for l in themed.layers])

    def test_variations(self):
        variations = generate_variations(business_card(), seeds=["a", "b"])
        export_variations_json(variations, self.path("variations.json"))
        with open(self.path("variations.json")) as f:
            data = json.load(f)
        self.assertEqual([item["id"] for item in data], ["tpl", "tpl_gen_a", "tpl_gen_b"])


class TestContrastReport(unittest.TestCase):
    def test_themed_templates_pass(self):
        for template in load_templates(TEMPLATES_DIR):
            for variant in generate_variations(template, seeds=derive_seeds("report", 15))[1:]:
                report, issues = generate_contrast_report(variant)
                self.assertEqual(issues, [], report)
                self.assertIn("ALL LAYERS PASS", report)

    def test_failures_are_listed(self):
        card = template(
            [
                layer("ghost", "Rect", 0, 0, 50, 50, fill="#FEFEFE"),
                layer("faint", "Text", 100, 100, 50, 20, fontSize=14, fill="#EEEEEE", text="x"),
                layer("headline", "Text", 100, 200, 50, 40, fontSize=30, fill="#404040", text="x"),
            ]
        )
        report, issues = generate_contrast_report(card)
        self.assertEqual([issue[0] for issue in issues], ["faint", "ghost"])
        self.assertEqual(issues[0][3], 4.5)
        self.assertIn("ISSUES FOUND: 2", report)

    def test_large_text_threshold(self):
        card = template([layer("headline", "Text", 0, 0, 50, 40, fontSize=30, fill="#404040")])
        # Just under 3.5:1, enough for large text only
        self.assertEqual(generate_contrast_report(card)[1], [])
        self.assertEqual(len(generate_contrast_report(card, large_text_size=36)[1]), 1)


class TestPreview(TempDirTestCase):
    def test_render_size_and_pixels(self):
        card = template([layer("box", "Rect", 0, 0, 10, 10, fill="#FF0000")])
        image = render_template(card)
        self.assertEqual(image.size, (600, 350))
        self.assertEqual(image.getpixel((5, 5)), (255, 0, 0))
        self.assertEqual(image.getpixel((300, 300)), (255, 255, 255))
        self.assertEqual(render_template(card, scale=0.5).size, (300, 175))

    def test_gradient_background(self):
        card = template([], background=BackgroundPattern("gradient", "#000000", "#FFFFFF", rotation=0))
        image = render_template(card)
        self.assertEqual(image.getpixel((0, 100)), (0, 0, 0))
        self.assertEqual(image.getpixel((599, 100)), (255, 255, 255))

    def test_variation_sheet(self):
        path = self.path("sheet.png")
        save_variation_sheet([business_card()] * 3, path, columns=2, scale=0.5, padding=10)
        with Image.open(path) as sheet:
            self.assertEqual(sheet.size, (2 * 300 + 3 * 10, 2 * 175 + 3 * 10))

    def test_empty_sheet(self):
        with self.assertRaises(ValueError):
            save_variation_sheet([], self.path("empty.png"))


if __name__ == "__main__":
    unittest.main()
