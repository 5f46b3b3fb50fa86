"""
Unit tests for core Menugen components.

Tests configuration management, data models and transliteration.
"""

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from menugen.config import ConfigManager, setup_logging
from menugen.errors import StructureParseError
from menugen.models import (
    Container,
    ContainerDefinition,
    GenerationReport,
    Item,
    ItemDefinition,
    StructureDescription,
)
from menugen.transliteration import Transliterator


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.structure_file, "gen_menu.yml")
        self.assertEqual(config.database_filename, "menugen.db")
        self.assertEqual(config.default_language, "en")
        self.assertTrue(config.supports_attributes)
        self.assertFalse(config.dedupe_items)
        self.assertEqual(config.default_attributes, {})

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
paths:
  structure_file: "menus/site.yml"

database:
  filename: "test.db"

generator:
  default_language: "de"
  supports_attributes: false
  dedupe_items: true
  default_attributes:
    class: "menu-link"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.structure_file, "menus/site.yml")
        self.assertEqual(config.database_filename, "test.db")
        self.assertEqual(config.default_language, "de")
        self.assertFalse(config.supports_attributes)
        self.assertTrue(config.dedupe_items)
        self.assertEqual(config.default_attributes, {"class": "menu-link"})

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))  # Uses defaults

        self.assertEqual(config.get("paths.structure_file"), "gen_menu.yml")
        self.assertEqual(config.get("logging.level"), "INFO")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("database:\n  filename: 'one.db'")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.database_filename, "one.db")

        with open(self.config_path, 'w') as f:
            f.write("database:\n  filename: 'two.db'")

        config.reload()
        self.assertEqual(config.database_filename, "two.db")

    def test_malformed_config_falls_back_to_defaults(self):
        """Test that an unparsable config file does not abort startup."""
        with open(self.config_path, 'w') as f:
            f.write("database: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.database_filename, "menugen.db")

    @patch("menugen.config.logging.basicConfig")
    def test_setup_logging_uses_config(self, mock_basic_config):
        """Test logging is configured from the logging section."""
        with open(self.config_path, 'w') as f:
            f.write(f"logging:\n  level: debug\npaths:\n  log_file: '{self.temp_dir}/menugen.log'\n")

        config = ConfigManager(str(self.config_path))
        setup_logging(config)

        kwargs = mock_basic_config.call_args.kwargs
        self.assertEqual(kwargs["level"], logging.DEBUG)
        self.assertEqual(len(kwargs["handlers"]), 2)
        for handler in kwargs["handlers"]:
            handler.close()
        os.remove(os.path.join(self.temp_dir, "menugen.log"))


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_item_definition_defaults(self):
        """Test ItemDefinition applies defaults for optional fields."""
        item = ItemDefinition(path="internal:/about")

        self.assertEqual(item.path, "internal:/about")
        self.assertEqual(item.weight, 0)
        self.assertEqual(item.attributes, {})
        self.assertEqual(item.items, {})

    def test_item_definition_with_children(self):
        """Test ItemDefinition with nested children."""
        item = ItemDefinition.model_validate({
            "path": "internal:/about",
            "items": {
                "team": {"path": "internal:/about/team", "weight": 3}
            }
        })

        self.assertEqual(list(item.items), ["team"])
        self.assertIsInstance(item.items["team"], ItemDefinition)
        self.assertEqual(item.items["team"].weight, 3)

    def test_item_definition_rejects_unknown_keys(self):
        """Test that misspelled keys are caught at parse time."""
        with self.assertRaises(ValueError):
            ItemDefinition.model_validate({"path": "internal:/", "wieght": 1})

    def test_container_definition_defaults(self):
        """Test ContainerDefinition defaults."""
        definition = ContainerDefinition(label="Main Menu")

        self.assertEqual(definition.summary, "")
        self.assertEqual(definition.lang, "en")
        self.assertEqual(definition.items, {})

    def test_structure_from_raw_keeps_order(self):
        """Test StructureDescription keeps source order of menus."""
        structure = StructureDescription.from_raw({
            "main": {"label": "Main"},
            "footer": {"label": "Footer"},
            "aside": {"label": "Aside"},
        })

        self.assertEqual([key for key, _ in structure.items()], ["main", "footer", "aside"])
        self.assertFalse(structure.is_empty())

    def test_structure_from_raw_none_is_empty(self):
        """Test that an empty YAML document is an empty structure."""
        self.assertTrue(StructureDescription.from_raw(None).is_empty())

    def test_structure_from_raw_rejects_bad_shape(self):
        """Test shape errors become StructureParseError."""
        with self.assertRaises(StructureParseError):
            StructureDescription.from_raw(["main", "footer"])

        with self.assertRaises(StructureParseError):
            StructureDescription.from_raw({"main": {"label": "Main", "items": {"home": {}}}})

        with self.assertRaises(StructureParseError):
            StructureDescription.from_raw({"main": {"label": "Main", "items": {
                "home": {"path": "route:<front>", "weight": "heavy"}
            }}})

    def test_null_optional_fields_use_defaults(self):
        """Test that keys left empty in YAML count as absent."""
        structure = StructureDescription.from_raw({
            "footer": {"label": None, "summary": None, "lang": None, "items": {
                "contact": {"path": "internal:/contact", "weight": None, "attributes": None, "items": None}
            }},
            "aside": {"label": "Aside", "items": None},
        })

        footer = structure.containers["footer"]
        self.assertEqual(footer.label, "")
        self.assertEqual(footer.summary, "")
        self.assertEqual(footer.lang, "en")
        contact = footer.items["contact"]
        self.assertEqual(contact.weight, 0)
        self.assertEqual(contact.attributes, {})
        self.assertEqual(contact.items, {})
        self.assertEqual(structure.containers["aside"].items, {})

    def test_scalar_keys_become_strings(self):
        """Test YAML int and bool keys are used as their string form."""
        structure = StructureDescription.from_raw({
            404: {"label": "Errors", "items": {
                2024: {"path": "internal:/archive/2024", "items": {1: {"path": "internal:/archive/2024/1"}}},
                True: {"path": "internal:/yes"},
            }},
        })

        errors = structure.containers["404"]
        self.assertEqual(list(errors.items), ["2024", "True"])
        self.assertEqual(list(errors.items["2024"].items), ["1"])

    def test_item_record_defaults(self):
        """Test Item record defaults."""
        item = Item(title="Home", target_uri="route:<front>", container_id="main")

        self.assertIsNone(item.uuid)
        self.assertIsNone(item.parent_ref)
        self.assertEqual(item.weight, 0)
        self.assertTrue(item.enabled)
        self.assertFalse(item.expanded)

    def test_container_record(self):
        """Test Container record creation."""
        container = Container(id="main", label="Main Menu")

        self.assertEqual(container.description, "")
        self.assertEqual(container.language, "en")

    def test_generation_report_defaults(self):
        report = GenerationReport()

        self.assertEqual(report.containers_created, [])
        self.assertEqual(report.items_created, 0)


class TestTransliterator(unittest.TestCase):
    """Test ASCII folding."""

    def setUp(self):
        self.transliterator = Transliterator()

    def test_ascii_unchanged(self):
        self.assertEqual(self.transliterator.transliterate("Main Menu"), "Main Menu")

    def test_accents_are_stripped(self):
        self.assertEqual(self.transliterator.transliterate("Café Crème"), "Cafe Creme")

    def test_generic_replacements(self):
        self.assertEqual(self.transliterator.transliterate("Straße"), "Strasse")
        self.assertEqual(self.transliterator.transliterate("Łódź"), "Lodz")

    def test_language_overrides(self):
        """Test that German folds umlauts to two letters, English to one."""
        self.assertEqual(self.transliterator.transliterate("Über", "de"), "Ueber")
        self.assertEqual(self.transliterator.transliterate("Über", "en"), "Uber")
        self.assertEqual(self.transliterator.transliterate("Über", "de-CH"), "Ueber")
        self.assertEqual(self.transliterator.transliterate("Smørrebrød", "da"), "Smoerrebroed")

    def test_non_latin_scripts(self):
        """Test Cyrillic folds to their Latin spelling."""
        self.assertEqual(self.transliterator.transliterate("Меню"), "Meniu")
        self.assertEqual(self.transliterator.transliterate("Сайт"), "Sait")

    def test_unknown_characters(self):
        """Test characters without an ASCII form use the replacement."""
        self.assertEqual(self.transliterator.transliterate("\ue000\ue001"), "??")
        self.assertEqual(self.transliterator.transliterate("\ue000", "en", "_"), "_")


if __name__ == '__main__':
    unittest.main()
