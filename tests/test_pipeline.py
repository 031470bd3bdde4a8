"""
Tests for the pipeline coordinator.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pagesplit.config import PipelineSettings
from pagesplit.schema import FailurePolicy, MatchMode, Stage
from pagesplit.splitting import PageSplitter, PartitionError, split_archive
from pagesplit.splitting.assets import partition_page as real_partition_page

from bundles import SKINNER_CONFIG, STUDIO_CONFIG, bundle_files, snapshot, write_zip


def failing_partition(failing_id: str):
    """Build a `partition_page` replacement that fails for one page."""

    def partition(page, *args, **kwargs):
        if page.page_id == failing_id:
            raise PartitionError(page.page_id, "copy failed: injected")
        return real_partition_page(page, *args, **kwargs)

    return partition


class TestPageSplitter(unittest.TestCase):
    """Test cases for `PageSplitter.run`."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.base = Path(self.temp_dir.name)
        self.processed = self.base / "processed"
        self.scratch = self.base / "uploads"
        self.archive = write_zip(self.scratch / "bundle.zip", bundle_files("bundle/"))

    def tearDown(self):
        self.temp_dir.cleanup()

    def _splitter(self, **kwargs) -> PageSplitter:
        options = dict(
            archive_path=self.archive,
            base_name="bundle",
            processed_dir=self.processed,
            scratch_dir=self.scratch,
        )
        options.update(kwargs)
        return PageSplitter(**options)

    def test_end_to_end_bundle(self):
        outcome = self._splitter().run()

        self.assertTrue(outcome.succeeded)
        self.assertIsNone(outcome.stage)
        self.assertEqual(outcome.page_ids, ["about", "home"])

        for page_id, other in (("home", "about"), ("about", "home")):
            with self.subTest(page=page_id):
                page_dir = self.processed / page_id
                self.assertTrue((page_dir / "view" / f"{page_id}.html").is_file())
                self.assertFalse((page_dir / "view" / f"{other}.html").exists())
                shots = sorted(p.name for p in (page_dir / "assets" / "screenshots").iterdir())
                self.assertEqual(shots, [f"{page_id}_1.png"])
                self.assertTrue((page_dir / "assets" / "css" / "site.css").is_file())

                studio = json.loads(
                    (page_dir / "assets" / "JSON" / "studioConfigs.json").read_text("utf-8")
                )
                expected = next(
                    p for p in STUDIO_CONFIG["pages"] if p["PageName"] == page_id
                )
                self.assertEqual(studio, expected)

        about_skinner = self.processed / "about" / "assets" / "JSON" / "skinnerConfigs.json"
        home_skinner = self.processed / "home" / "assets" / "JSON" / "skinnerConfigs.json"
        self.assertEqual(json.loads(about_skinner.read_text("utf-8")), SKINNER_CONFIG["pages"][0])
        self.assertFalse(home_skinner.exists())

        results = {page.page_id: page for page in outcome.pages}
        self.assertEqual(results["about"].configs, ["studioConfigs.json", "skinnerConfigs.json"])
        self.assertEqual(results["home"].configs, ["studioConfigs.json"])

    def test_canonical_root_is_kept_under_base_name(self):
        self._splitter().run()

        self.assertTrue((self.processed / "bundle" / "view" / "home.html").is_file())
        self.assertFalse(any(p.name.startswith(".extract-") for p in self.scratch.iterdir()))

    def test_running_twice_is_idempotent(self):
        self._splitter().run()
        first = snapshot(self.processed)

        self._splitter().run()

        self.assertEqual(snapshot(self.processed), first)

    def test_missing_view_folder_succeeds_without_pages(self):
        files = {
            name: data for name, data in bundle_files("bundle/").items()
            if not name.startswith("bundle/view/")
        }
        write_zip(self.archive, files)

        outcome = self._splitter().run()

        self.assertTrue(outcome.succeeded)
        self.assertEqual(outcome.pages, [])
        self.assertEqual(sorted(p.name for p in self.processed.iterdir()), ["bundle"])

    def test_corrupt_archive_fails_at_normalize(self):
        self.archive.write_bytes(b"not an archive at all")

        outcome = self._splitter().run()

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.stage, Stage.NORMALIZE)
        self.assertIn("bundle.zip", outcome.message)

    def test_separate_output_dir(self):
        output = self.base / "pages"

        outcome = self._splitter(output_dir=output).run()

        self.assertTrue(outcome.succeeded)
        self.assertEqual(sorted(p.name for p in output.iterdir()), ["about", "home"])

    def test_page_named_like_base_name_does_not_destroy_input(self):
        files = bundle_files("bundle/")
        files["bundle/view/bundle.html"] = b"<p>bundle</p>"
        write_zip(self.archive, files)

        outcome = self._splitter().run()

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.stage, Stage.PARTITION)
        self.assertIn("bundle", outcome.message)
        self.assertTrue((self.processed / "home" / "view" / "home.html").is_file())

    def test_isolate_policy_keeps_processing_other_pages(self):
        with patch(
            "pagesplit.splitting.pipeline.partition_page",
            side_effect=failing_partition("about"),
        ):
            outcome = self._splitter(failure_policy=FailurePolicy.ISOLATE).run()

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.stage, Stage.PARTITION)
        self.assertIn("about", outcome.message)
        self.assertEqual(outcome.page_ids, ["about", "home"])
        self.assertFalse(outcome.pages[0].succeeded)
        self.assertTrue(outcome.pages[1].succeeded)
        self.assertTrue((self.processed / "home" / "view" / "home.html").is_file())

    def test_abort_policy_stops_at_first_failure(self):
        with patch(
            "pagesplit.splitting.pipeline.partition_page",
            side_effect=failing_partition("about"),
        ):
            outcome = self._splitter(failure_policy=FailurePolicy.ABORT).run()

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.stage, Stage.PARTITION)
        self.assertEqual(outcome.page_ids, ["about"])
        self.assertFalse((self.processed / "home").exists())

    def test_concurrent_workers_produce_same_tree(self):
        self._splitter().run()
        sequential = snapshot(self.processed)

        outcome = self._splitter(max_workers=4).run()

        self.assertTrue(outcome.succeeded)
        self.assertEqual(outcome.page_ids, ["about", "home"])
        self.assertEqual(snapshot(self.processed), sequential)

    def test_concurrent_workers_isolate_failures(self):
        with patch(
            "pagesplit.splitting.pipeline.partition_page",
            side_effect=failing_partition("home"),
        ):
            outcome = self._splitter(max_workers=2).run()

        self.assertFalse(outcome.succeeded)
        self.assertEqual([p.succeeded for p in outcome.pages], [True, False])
        self.assertTrue((self.processed / "about" / "view" / "about.html").is_file())

    def test_concurrent_abort_records_finished_pages(self):
        files = bundle_files("bundle/")
        for page_id in ("contact", "faq", "team"):
            files[f"bundle/view/{page_id}.html"] = f"<p>{page_id}</p>".encode()
        write_zip(self.archive, files)

        with patch(
            "pagesplit.splitting.pipeline.partition_page",
            side_effect=failing_partition("about"),
        ):
            outcome = self._splitter(
                max_workers=2, failure_policy=FailurePolicy.ABORT
            ).run()

        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.stage, Stage.PARTITION)
        self.assertIn("about", outcome.message)
        self.assertEqual(outcome.page_ids[0], "about")
        self.assertFalse(outcome.pages[0].succeeded)

        discovered = ["about", "contact", "faq", "home", "team"]
        self.assertEqual(
            outcome.page_ids, [p for p in discovered if p in outcome.page_ids]
        )
        for page in outcome.pages[1:]:
            with self.subTest(page=page.page_id):
                self.assertTrue(page.succeeded)
                self.assertTrue(
                    (self.processed / page.page_id / "view" / f"{page.page_id}.html").is_file()
                )

    def test_invalid_base_name_is_rejected(self):
        for base_name in ("../escape", "", ".", ".."):
            with self.subTest(base_name=base_name):
                with self.assertRaises(ValueError):
                    self._splitter(base_name=base_name)

    def test_dot_base_name_leaves_parent_untouched(self):
        keep = self.base / "keep.txt"
        keep.write_text("keep")
        self.processed.mkdir()

        with self.assertRaises(ValueError):
            self._splitter(base_name="..").run()

        self.assertEqual(keep.read_text(), "keep")


class TestSplitArchive(unittest.TestCase):
    """Test cases for the settings-driven entry point."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.base = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_uses_settings_and_derives_base_name(self):
        files = bundle_files("site/")
        files["site/assets/screenshots/home2_shot.png"] = b"home2"
        archive = write_zip(self.base / "site.zip", files)
        settings = PipelineSettings(
            upload_dir=self.base / "uploads",
            processed_dir=self.base / "processed",
            output_dir=self.base / "pages",
            match_mode=MatchMode.DELIMITED,
        )

        outcome = split_archive(archive, settings=settings)

        self.assertTrue(outcome.succeeded)
        self.assertEqual(outcome.base_name, "site")
        self.assertTrue((self.base / "processed" / "site" / "view").is_dir())
        shots = self.base / "pages" / "home" / "assets" / "screenshots"
        self.assertEqual(sorted(p.name for p in shots.iterdir()), ["home_1.png"])


if __name__ == "__main__":
    unittest.main()
