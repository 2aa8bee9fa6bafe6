import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from pfpgen_core.naming import brand_name_slug, brand_slug, export_filename


class NamingTests(unittest.TestCase):
    def test_brand_slug_strips_scheme_and_tld(self):
        self.assertEqual(brand_slug("https://www.Stripe.com"), "stripe")
        self.assertEqual(brand_slug("bbc.co.uk"), "bbc")
        self.assertEqual(brand_slug("  Coca Cola  "), "coca_cola")
        self.assertEqual(brand_slug(""), "")

    def test_brand_name_slug(self):
        self.assertEqual(brand_name_slug("Ben & Jerry's"), "ben_jerry_s")

    def test_export_filename_precedence(self):
        self.assertEqual(export_filename(512, brand_name="spotify", query="x.com"), "spotify.png")
        self.assertEqual(export_filename(512, query="github.com"), "github.png")
        self.assertEqual(export_filename(1000), "pfp_1000x1000.png")


if __name__ == "__main__":
    unittest.main()
