import os
import tempfile
import unittest
import warnings
from unittest.mock import patch

from sqlalchemy import create_engine, inspect

import create_db
from shop_qrcodes.core.config import Settings


class SettingsTests(unittest.TestCase):
    def test_reads_environment_and_ignores_unknown_keys(self):
        env = {"SHOPIFY_APP_URL": "https://qr.example", "SOME_OTHER_APP_KEY": "x"}
        with patch.dict(os.environ, env):
            with warnings.catch_warnings():
                warnings.simplefilter("error", DeprecationWarning)
                s = Settings(_env_file=None)
        self.assertEqual(s.SHOPIFY_APP_URL, "https://qr.example")
        self.assertEqual(Settings.model_config["extra"], "ignore")


class CreateDbTests(unittest.TestCase):
    def test_main_creates_qr_codes_table(self):
        with tempfile.TemporaryDirectory() as tmp:
            engine = create_engine(f"sqlite:///{os.path.join(tmp, 'boot.db')}")
            try:
                with patch.object(create_db, "engine", engine):
                    create_db.main()
                self.assertIn("qr_codes", inspect(engine).get_table_names())
            finally:
                engine.dispose()


if __name__ == "__main__":
    unittest.main()
