#!/usr/bin/env python3
"""
Split a bundle archive into self-contained page packages.

Usage examples:
  python split.py bundle.zip
  python split.py uploads/site.tar.gz --output-dir pages --strict-screenshots -w 4

Directories and policies default to the PAGESPLIT_* settings; flags override them.
"""

import argparse
import sys
from pathlib import Path

from pagesplit.config import pipeline_settings
from pagesplit.schema import FailurePolicy, MatchMode
from pagesplit.splitting import split_archive


def main():
    """Parse arguments, run the pipeline and print the outcome as JSON."""
    parser = argparse.ArgumentParser(
        description="Split a bundle archive into one package per page."
    )
    parser.add_argument("archive", type=Path, help="Path to the bundle archive.")
    parser.add_argument(
        "-n",
        "--base-name",
        type=str,
        default=None,
        help="Canonical root name (default: archive filename without extension).",
    )
    parser.add_argument(
        "-p",
        "--processed-dir",
        type=Path,
        default=None,
        help="Directory holding canonical roots.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory holding page packages (default: processed dir).",
    )
    parser.add_argument(
        "--strict-screenshots",
        action="store_true",
        help="Only match screenshots where the page name is not part of a longer word.",
    )
    parser.add_argument(
        "--abort-on-page-failure",
        action="store_true",
        help="Stop at the first page that cannot be built.",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Number of pages processed concurrently.",
    )

    args = parser.parse_args()

    overrides = {}
    if args.processed_dir is not None:
        overrides["processed_dir"] = args.processed_dir
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.strict_screenshots:
        overrides["match_mode"] = MatchMode.DELIMITED
    if args.abort_on_page_failure:
        overrides["failure_policy"] = FailurePolicy.ABORT
    if args.workers is not None:
        overrides["max_workers"] = args.workers

    settings = pipeline_settings.model_copy(update=overrides)
    outcome = split_archive(args.archive, args.base_name, settings=settings)
    print(outcome.model_dump_json(indent=2))
    sys.exit(0 if outcome.succeeded else 1)


if __name__ == "__main__":
    main()
