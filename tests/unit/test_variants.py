import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from pfpgen_renderer.models import Variant, VariantMode
from pfpgen_renderer.variants import parse_mode, resolve_variant


class VariantResolverTests(unittest.TestCase):
    def test_auto_dark_color_gets_light_sprite(self):
        self.assertEqual(resolve_variant(VariantMode.AUTO, "#101010"), Variant.LIGHT)

    def test_auto_light_color_gets_dark_sprite(self):
        self.assertEqual(resolve_variant("auto", "#f5f5f5"), Variant.DARK)

    def test_forced_modes_ignore_color(self):
        self.assertEqual(resolve_variant("light", "#ffffff"), Variant.LIGHT)
        self.assertEqual(resolve_variant(VariantMode.DARK, "#000000"), Variant.DARK)

    def test_recomputed_when_color_changes(self):
        self.assertEqual(resolve_variant("auto", "#000000"), Variant.LIGHT)
        self.assertEqual(resolve_variant("auto", "#ffffff"), Variant.DARK)

    def test_parse_mode_falls_back_to_auto(self):
        self.assertEqual(parse_mode("DARK"), VariantMode.DARK)
        self.assertEqual(parse_mode(None), VariantMode.AUTO)
        self.assertEqual(parse_mode("sepia"), VariantMode.AUTO)


if __name__ == "__main__":
    unittest.main()
