"""
Tests for configuration record lookup and splitting.
"""

import json
import tempfile
import unittest
from pathlib import Path

from pagesplit.splitting import (
    StructuralMismatch,
    find_page_record,
    split_config,
    split_configs,
)

from bundles import SKINNER_CONFIG, STUDIO_CONFIG


class TestFindPageRecord(unittest.TestCase):
    """Test cases for the pure record lookup."""

    def test_returns_only_the_matching_record(self):
        record = find_page_record(STUDIO_CONFIG, "about")

        self.assertEqual(record, STUDIO_CONFIG["pages"][1])

    def test_match_is_exact_and_case_sensitive(self):
        self.assertIsNone(find_page_record(STUDIO_CONFIG, "About"))
        self.assertIsNone(find_page_record(STUDIO_CONFIG, "hom"))

    def test_first_matching_record_wins(self):
        document = {"pages": [{"PageName": "a", "n": 1}, {"PageName": "a", "n": 2}]}

        self.assertEqual(find_page_record(document, "a"), {"PageName": "a", "n": 1})

    def test_records_that_are_not_mappings_never_match(self):
        document = {"pages": ["a", None, 3, {"PageName": "a"}]}

        self.assertEqual(find_page_record(document, "a"), {"PageName": "a"})

    def test_custom_key(self):
        document = {"pages": [{"name": "a"}]}

        self.assertEqual(find_page_record(document, "a", key="name"), {"name": "a"})

    def test_wrong_shape_raises(self):
        for document in ([], {"pages": {"PageName": "a"}}, {"data": []}, "pages", None):
            with self.subTest(document=document):
                with self.assertRaises(StructuralMismatch):
                    find_page_record(document, "a")


class TestSplitConfig(unittest.TestCase):
    """Test cases for writing single-record documents."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        base = Path(self.temp_dir.name)
        self.root = base / "bundle"
        self.json_dir = self.root / "assets" / "JSON"
        self.json_dir.mkdir(parents=True)
        self.page_dir = base / "pages" / "about"
        self.studio = self.json_dir / "studioConfigs.json"
        self.studio.write_text(json.dumps(STUDIO_CONFIG), encoding="utf-8")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_writes_single_record_pretty_printed(self):
        written = split_config(self.studio, "studioConfigs.json", "about", self.page_dir)

        expected = self.page_dir / "assets" / "JSON" / "studioConfigs.json"
        self.assertEqual(written, expected)
        self.assertEqual(
            expected.read_text(encoding="utf-8"),
            json.dumps(STUDIO_CONFIG["pages"][1], indent=2),
        )

    def test_key_order_and_non_ascii_are_preserved(self):
        document = {"pages": [{"zeta": 1, "PageName": "about", "alpha": "Über"}]}
        self.studio.write_text(json.dumps(document), encoding="utf-8")

        split_config(self.studio, "out.json", "about", self.page_dir)

        text = (self.page_dir / "assets" / "JSON" / "out.json").read_text(encoding="utf-8")
        self.assertEqual(
            text, '{\n  "zeta": 1,\n  "PageName": "about",\n  "alpha": "Über"\n}'
        )

    def test_missing_source_writes_nothing(self):
        result = split_config(
            self.json_dir / "skinnerConfigs.json", "skinnerConfigs.json", "about", self.page_dir
        )

        self.assertIsNone(result)
        self.assertFalse(self.page_dir.exists())

    def test_no_matching_record_writes_nothing(self):
        result = split_config(self.studio, "studioConfigs.json", "contact", self.page_dir)

        self.assertIsNone(result)
        self.assertFalse(self.page_dir.exists())

    def test_malformed_json_is_skipped(self):
        self.studio.write_text("{ not json", encoding="utf-8")

        self.assertIsNone(
            split_config(self.studio, "studioConfigs.json", "about", self.page_dir)
        )

    def test_wrong_shape_is_skipped(self):
        self.studio.write_text(json.dumps({"pages": "about"}), encoding="utf-8")

        self.assertIsNone(
            split_config(self.studio, "studioConfigs.json", "about", self.page_dir)
        )

    def test_split_configs_handles_documents_independently(self):
        (self.json_dir / "skinnerConfigs.json").write_text(
            json.dumps(SKINNER_CONFIG), encoding="utf-8"
        )
        home_dir = self.page_dir.parent / "home"

        about = split_configs(self.root, "about", self.page_dir)
        home = split_configs(self.root, "home", home_dir)

        self.assertEqual(about, ["studioConfigs.json", "skinnerConfigs.json"])
        self.assertEqual(home, ["studioConfigs.json"])
        self.assertFalse((home_dir / "assets" / "JSON" / "skinnerConfigs.json").exists())

    def test_split_configs_drops_copied_shared_document(self):
        copied = self.page_dir / "assets" / "JSON" / "skinnerConfigs.json"
        copied.parent.mkdir(parents=True)
        copied.write_text(json.dumps(SKINNER_CONFIG), encoding="utf-8")

        written = split_configs(self.root, "about", self.page_dir)

        self.assertEqual(written, ["studioConfigs.json"])
        self.assertFalse(copied.exists())


if __name__ == "__main__":
    unittest.main()
