import logging
import unittest
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

# Add tools/configdoc-extractor to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent / 'tools' / 'configdoc-extractor'))

from extractor_config import ConfigLoadError, ExtractorConfig, configure_logging


class ExtractorConfigTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)

    def write(self, content):
        path = Path(self.tmp_dir.name) / "configdoc.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    def test_defaults(self):
        config = ExtractorConfig()

        self.assertEqual(1, config.workers)
        self.assertFalse(config.verbose)
        self.assertFalse(config.debug_resolvers)
        self.assertIsNone(config.debug_filter)

    def test_from_yaml(self):
        path = self.write("workers: 4\nverbose: true\ndebug_resolvers: true\ndebug_filter: app.timeout\n")

        config = ExtractorConfig.from_yaml(path)

        self.assertEqual(
            {"workers": 4, "verbose": True, "debug_resolvers": True, "debug_filter": "app.timeout"},
            config.to_dict(),
        )

    def test_empty_yaml_gives_defaults(self):
        self.assertEqual(ExtractorConfig(), ExtractorConfig.from_yaml(self.write("")))

    def test_missing_file(self):
        with self.assertRaises(ConfigLoadError):
            ExtractorConfig.from_yaml(Path(self.tmp_dir.name) / "missing.yaml")

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigLoadError):
            ExtractorConfig.from_yaml(self.write("workers: [1, 2\n"))

    def test_non_mapping_yaml(self):
        with self.assertRaises(ConfigLoadError):
            ExtractorConfig.from_yaml(self.write("- workers\n- verbose\n"))

    def test_unknown_keys(self):
        with self.assertRaises(ConfigLoadError) as ctx:
            ExtractorConfig.from_dict({"workers": 2, "renderer": "asciidoc"})

        self.assertIn("renderer", str(ctx.exception))

    def test_invalid_workers(self):
        for workers in (0, -1, "2", True):
            with self.subTest(workers=workers):
                with self.assertRaises(ConfigLoadError):
                    ExtractorConfig(workers=workers)


class ConfigureLoggingTestCase(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self.addCleanup(root.setLevel, root.level)

    def test_verbose_enables_debug(self):
        with patch("logging.basicConfig") as basic_config:
            configure_logging(ExtractorConfig(verbose=True))

        basic_config.assert_called_once_with(level="DEBUG")
        self.assertEqual(logging.DEBUG, logging.getLogger().level)

    def test_default_is_warning(self):
        with patch("logging.basicConfig") as basic_config:
            configure_logging(ExtractorConfig())

        basic_config.assert_called_once_with(level="WARNING")
        self.assertEqual(logging.WARNING, logging.getLogger().level)


if __name__ == "__main__":
    unittest.main()
