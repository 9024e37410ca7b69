from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from jumppack import logs


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        with mock.patch.dict(os.environ, {logs.LOG_ENV_VAR: ""}):
            logs.setup_logging("off")

    def test_environment_overrides_configured_level(self) -> None:
        with mock.patch.dict(os.environ, {logs.LOG_ENV_VAR: "DEBUG"}):
            self.assertEqual(logs.resolve_log_level("error"), "debug")
        with mock.patch.dict(os.environ, {logs.LOG_ENV_VAR: ""}):
            self.assertEqual(logs.resolve_log_level("warn"), "warn")
            self.assertEqual(logs.resolve_log_level("loud"), "off")

    def test_records_go_to_log_file_with_level_and_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch.dict(os.environ, {logs.LOG_ENV_VAR: ""}):
            log_path = Path(tmp) / "state" / "jumppack.log"
            logs.setup_logging("trace", log_path)
            logging.getLogger("jumppack.records").log(logs.TRACE, "offsets built")
            logging.getLogger("jumppack.filters").debug("filtered")
            logs.setup_logging("off")

            text = log_path.read_text(encoding="utf-8")

        self.assertIn("TRACE", text)
        self.assertIn("offsets built", text)
        self.assertIn("filtered", text)
        self.assertIn("test_logs:", text)

    def test_off_suppresses_module_warnings(self) -> None:
        with mock.patch.dict(os.environ, {logs.LOG_ENV_VAR: ""}):
            logger = logs.setup_logging("off")

        self.assertFalse(logging.getLogger("jumppack.filters").isEnabledFor(logging.WARNING))
        self.assertFalse(logger.propagate)


if __name__ == "__main__":
    unittest.main()
