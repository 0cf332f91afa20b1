#!/usr/bin/env python3
"""
check_catalog.py - Validate the content catalog and report its contents.

Loads catalog.yaml through the same loader the app uses, so any defect
(bad item ordering, duplicate ids, a quiz sampling more questions than
its bank holds) fails here first.

Usage:
  python scripts/check_catalog.py
  python scripts/check_catalog.py --catalog data/catalog.yaml --preview disaster-management-quiz
  python scripts/check_catalog.py --list
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from suraksha.classroom import CatalogLoader
from suraksha.config import DEFAULT_CATALOG_PATH
from suraksha.errors import CatalogError
from suraksha.quiz import sample_questions
from suraksha.schemas import Catalog, Track
from suraksha.utils import get_available_catalogs

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def compute_stats(catalog: Catalog) -> dict:
    """Per-track section and item counts, plus quiz bank sizes."""
    stats = {"tracks": {}, "quizzes": {}}
    for track in Track:
        sections = catalog.get_sections(track)
        stats["tracks"][track.value] = {
            "sections": len(sections),
            "items": sum(len(s.items) for s in sections),
        }
    for quiz_id, bank in catalog.banks.items():
        stats["quizzes"][quiz_id] = {
            "bank_size": bank.size,
            "sample_size": bank.effective_sample_size,
            "time_limit_seconds": bank.config.time_limit_seconds,
            "passing_threshold": bank.config.passing_threshold,
        }
    stats["total_items"] = len(catalog.all_item_ids)
    return stats


def preview_sample(catalog: Catalog, quiz_id: str, seed: int | None):
    """Log one sampled question set for a quiz."""
    bank = catalog.get_bank(quiz_id)
    if bank is None:
        logger.error(f"Unknown quiz: {quiz_id}")
        return
    rng = random.Random(seed)
    for sampled in sample_questions(bank, bank.effective_sample_size, rng):
        logger.info(f"  {sampled.position:>2}. [{sampled.question.id}] {sampled.question.prompt}")


def main():
    parser = argparse.ArgumentParser(
        description="Validate the Suraksha content catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help="Path to catalog.yaml"
    )
    parser.add_argument(
        "--preview",
        default=None,
        help="Quiz id to draw and print one sample from"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for --preview"
    )
    parser.add_argument(
        "--stats-output",
        type=Path,
        default=None,
        help="Write stats JSON to this path"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List catalog files next to --catalog and exit"
    )

    args = parser.parse_args()

    if args.list:
        names = get_available_catalogs(args.catalog.parent)
        if not names:
            logger.info(f"No catalogs in {args.catalog.parent}")
        for name in names:
            logger.info(f"  {name}")
        return

    logger.info(f"Loading catalog: {args.catalog}")
    try:
        catalog = CatalogLoader(args.catalog).load()
    except (FileNotFoundError, CatalogError) as e:
        logger.error(str(e))
        sys.exit(1)

    stats = compute_stats(catalog)
    for track, counts in stats["tracks"].items():
        logger.info(f"  {track}: {counts['sections']} sections, {counts['items']} items")
    for quiz_id, info in stats["quizzes"].items():
        logger.info(
            f"  {quiz_id}: {info['sample_size']} of {info['bank_size']} questions, "
            f"{info['time_limit_seconds']}s, pass at {info['passing_threshold']}%"
        )

    if args.stats_output:
        with open(args.stats_output, "w", encoding="utf-8") as f:
            json.dump(stats, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved stats to: {args.stats_output}")

    if args.preview:
        logger.info(f"Sample for {args.preview}:")
        preview_sample(catalog, args.preview, args.seed)

    logger.info("Catalog OK")


if __name__ == "__main__":
    main()
