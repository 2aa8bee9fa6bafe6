import json
import logging
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from pfpgen_core.logging_setup import JsonFormatter, install_crash_hooks


class CrashHookTests(unittest.TestCase):
    def setUp(self):
        self._saved_hook = sys.excepthook

    def tearDown(self):
        sys.excepthook = self._saved_hook

    def test_install_replaces_excepthook(self):
        install_crash_hooks()
        self.assertIsNot(sys.excepthook, self._saved_hook)

    def test_uncaught_exception_logged_with_crash_id(self):
        install_crash_hooks()
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()

        with self.assertLogs("pfpgen", level="CRITICAL") as captured:
            sys.excepthook(*exc_info)

        record = captured.records[0]
        self.assertEqual(record.event, "uncaught_exception")
        self.assertTrue(record.crash_id)
        self.assertIn(f"crash_id={record.crash_id}", record.getMessage())

        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["crash_id"], record.crash_id)
        self.assertEqual(payload["level"], "CRITICAL")
        self.assertIn("ValueError: boom", payload["exc"])


class JsonFormatterTests(unittest.TestCase):
    def test_event_extra_is_kept(self):
        record = logging.LogRecord("pfpgen.session", logging.INFO, __file__, 1, "exported %s", ("a.png",), None)
        record.event = "export"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "exported a.png")
        self.assertEqual(payload["event"], "export")
        self.assertNotIn("crash_id", payload)


if __name__ == "__main__":
    unittest.main()
