import contextlib
import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from pfpgen_app import cli
from pfpgen_app.cli import build_parser
from pfpgen_core.brand import BrandColor, BrandLookupError, BrandLookupResult


class ParserTests(unittest.TestCase):
    def test_render_command(self):
        args = build_parser().parse_args(["render", "--color", "#101010", "--size", "1000", "--variant", "dark"])
        self.assertEqual(args.command, "render")
        self.assertEqual(args.color, "#101010")
        self.assertEqual(args.size, 1000)
        self.assertEqual(args.variant, "dark")

    def test_brand_command(self):
        args = build_parser().parse_args(["brand", "spotify.com", "--pick", "1"])
        self.assertEqual(args.command, "brand")
        self.assertEqual(args.query, "spotify.com")
        self.assertEqual(args.pick, 1)

    def test_key_command(self):
        args = build_parser().parse_args(["key", "set", "abc"])
        self.assertEqual(args.key_cmd, "set")
        self.assertEqual(args.key, "abc")


class CommandTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self._patches = [
            patch.dict(os.environ, {"PFPGEN_CONFIG_DIR": str(self.tmp / "cfg")}),
            patch.object(cli, "configure_logging", lambda **_kw: None),
            patch.object(cli, "install_crash_hooks", lambda: None),
        ]
        for p in self._patches:
            p.start()
        os.environ.pop("PFPGEN_BRANDDEV_KEY", None)

    def tearDown(self):
        for p in reversed(self._patches):
            p.stop()
        self._tmp.cleanup()

    def _run(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = cli.main(argv)
        return code, json.loads(out.getvalue())

    def test_render_writes_png(self):
        target = self.tmp / "out.png"
        code, payload = self._run(["render", "--color", "101010", "--size", "10000", "--out", str(target)])
        self.assertEqual(code, 0)
        self.assertEqual(payload["size"], 4096)
        self.assertEqual(payload["variant"], "light")
        self.assertTrue(target.read_bytes().startswith(b"\x89PNG"))

    def test_render_rejects_bad_color(self):
        code, payload = self._run(["render", "--color", "#12", "--data-uri"])
        self.assertEqual(code, 1)
        self.assertFalse(payload["success"])

    def test_render_save_persists(self):
        code, _ = self._run(["render", "--color", "#f5f5f5", "--noise", "30", "--data-uri", "--save"])
        self.assertEqual(code, 0)
        _, shown = self._run(["config", "show"])
        self.assertEqual(shown["config"]["render"]["theme_color"], "#f5f5f5")
        self.assertEqual(shown["config"]["render"]["noise_intensity"], 30)

    def test_variant_command(self):
        code, payload = self._run(["variant", "--color", "#f5f5f5"])
        self.assertEqual(code, 0)
        self.assertEqual(payload["variant"], "dark")

    def test_key_round_trip(self):
        self.assertEqual(self._run(["key", "set", "abcdef"])[1]["status"], "Key saved")
        self.assertTrue(self._run(["key", "show"])[1]["configured"])
        self.assertEqual(self._run(["key", "clear"])[1]["status"], "Key removed")

    def test_brand_without_key(self):
        code, payload = self._run(["brand", "spotify.com", "--data-uri"])
        self.assertEqual(code, 1)
        self.assertEqual(payload["error"], "Set your brand.dev API key first")

    def test_brand_exports_named_file(self):
        result = BrandLookupResult(
            query="spotify.com",
            title="Spotify",
            colors=[BrandColor("#1db954", "Green")],
        )
        os.environ["PFPGEN_BRANDDEV_KEY"] = "k"
        with patch.object(cli.BrandService, "lookup", return_value=result):
            with patch("pathlib.Path.cwd", return_value=self.tmp):
                code, payload = self._run(["brand", "spotify.com", "--size", "100"])
        self.assertEqual(code, 0)
        self.assertEqual(payload["status"], "Spotify → Green (#1db954)")
        self.assertTrue(payload["path"].endswith("spotify.png"))
        self.assertTrue((self.tmp / "spotify.png").exists())

    def test_brand_lookup_error(self):
        os.environ["PFPGEN_BRANDDEV_KEY"] = "k"
        with patch.object(cli.BrandService, "lookup", side_effect=BrandLookupError("Brand not found", status=404)):
            code, payload = self._run(["brand", "nope"])
        self.assertEqual(code, 1)
        self.assertEqual(payload["error"], "Brand not found")

    def test_doctor(self):
        code, payload = self._run(["doctor"])
        self.assertEqual(code, 0)
        self.assertTrue(payload["sprites"]["light"]["ready"])

    def test_main_installs_crash_hook(self):
        calls = []
        with patch.object(cli, "install_crash_hooks", lambda: calls.append("hooked")):
            code, _payload = self._run(["variant", "--color", "#000000"])
        self.assertEqual(code, 0)
        self.assertEqual(calls, ["hooked"])


if __name__ == "__main__":
    unittest.main()
