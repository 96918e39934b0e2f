import json
import logging
import os
import unittest
from unittest.mock import patch

from inventory_catalog.config import Settings, get_settings
from inventory_catalog.core.logging import JsonFormatter, setup_logging


class SettingsTest(unittest.TestCase):
    def test_defaults(self):
        settings = Settings(_env_file=None)
        self.assertEqual(settings.INVENTORY_FILE, "inventory.txt")
        self.assertEqual(settings.LOG_LEVEL, "WARNING")
        self.assertEqual(settings.APP_NAME, "Inventory Catalog")
        self.assertFalse(settings.LOG_JSON)

    def test_environment_override(self):
        with patch.dict(os.environ, {"INVENTORY_FILE": "stock.txt", "LOG_JSON": "true"}):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.INVENTORY_FILE, "stock.txt")
        self.assertTrue(settings.LOG_JSON)


class LoggingTest(unittest.TestCase):
    def tearDown(self):
        get_settings.cache_clear()
        logging.getLogger().handlers.clear()

    def test_json_formatter(self):
        record = logging.LogRecord("inventory", logging.INFO, __file__, 1, "saved %d", (3,), None)
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "inventory")
        self.assertEqual(payload["message"], "saved 3")

    def test_setup_logging_level_override(self):
        get_settings.cache_clear()
        with patch.dict(os.environ, {"LOG_JSON": "true"}):
            setup_logging("debug")
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)


if __name__ == "__main__":
    unittest.main()
