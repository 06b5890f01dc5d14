import json
import logging
import unittest

from snappyprobe.core import log
from snappyprobe.core.config import ProbeSettings


class TestLogging(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger(log.LOGGER_PREFIX)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

    def test_get_logger_prefix(self):
        self.assertEqual(log.get_logger("prober").name, "snappyprobe.prober")

    def test_setup_installs_single_handler(self):
        settings = ProbeSettings(_env_file=None, log_level="DEBUG")
        log.setup_logging(settings)
        logger = log.setup_logging(settings)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertIsInstance(logger.handlers[0].formatter, log.TextFormatter)

    def test_json_formatter(self):
        record = logging.LogRecord("snappyprobe.check", logging.INFO, __file__, 1,
                                   "verdict %s", ("pass",), None)
        doc = json.loads(log.StructuredFormatter().format(record))
        self.assertEqual(doc["message"], "verdict pass")
        self.assertEqual(doc["level"], "INFO")
        self.assertEqual(doc["logger"], "snappyprobe.check")

    def test_text_formatter(self):
        record = logging.LogRecord("snappyprobe.check", logging.WARNING, __file__, 1,
                                   "step %d", (2,), None)
        line = log.TextFormatter().format(record)
        self.assertIn("WARNING", line)
        self.assertTrue(line.endswith("snappyprobe.check: step 2"))


if __name__ == '__main__':
    unittest.main()
