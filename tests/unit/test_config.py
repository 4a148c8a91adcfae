import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "export"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from glyphart_core.config import AppConfig, load_config, render_config, save_config
from glyphart_renderer.errors import InvalidDimensions


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.render.characters, "01")
            self.assertFalse(cfg.render.invert)
            self.assertEqual(cfg.render.width, 100)
            self.assertEqual(cfg.export.theme, "Midnight")

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.render.characters = "AB"
            cfg.render.width = 150
            cfg.export.theme = "Paper"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.render.characters, "AB")
            self.assertEqual(reloaded.render.width, 150)
            self.assertEqual(reloaded.export.theme, "Paper")

    def test_saved_values_are_clamped(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "render": {"width": 999, "unknown_key": 1},
                "export": {"theme": "Plaid", "viewport_width": 10},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.render.width, 300)
            self.assertEqual(cfg.export.theme, "Midnight")
            self.assertEqual(cfg.export.viewport_width, 100)
            self.assertFalse(hasattr(cfg.render, "unknown_key"))

    def test_corrupt_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())


class RenderConfigFromSettingsTests(unittest.TestCase):
    def test_uses_saved_defaults(self):
        cfg = AppConfig()
        cfg.render.characters = "#."
        cfg.render.invert = True
        config = render_config(cfg)
        self.assertEqual(config.characters, "#.")
        self.assertTrue(config.invert)
        self.assertEqual(config.target_width, 100)

    def test_explicit_overrides_win(self):
        config = render_config(AppConfig(), characters="xy", invert=False, width=200)
        self.assertEqual((config.characters, config.invert, config.target_width), ("xy", False, 200))

    def test_explicit_width_is_validated(self):
        with self.assertRaises(InvalidDimensions):
            render_config(AppConfig(), width=20)


if __name__ == "__main__":
    unittest.main()
