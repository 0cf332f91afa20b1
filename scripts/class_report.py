#!/usr/bin/env python3
"""
class_report.py - Teacher roll-up of every student in the progress database.

Usage:
  python scripts/class_report.py
  python scripts/class_report.py --db ~/.suraksha/progress.db --output report.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from suraksha.classroom import (
    ProgressTracker,
    derive_achievements,
    overall_progress,
    pass_rate,
    summarize_class,
    summarize_student,
)
from suraksha.config import DEFAULT_PROGRESS_DB

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_report(tracker: ProgressTracker) -> dict:
    """Per-student rows plus the class summary."""
    students = []
    summaries = []
    for user_id in tracker.list_user_ids():
        records = tracker.get_completion_records(user_id)
        results = tracker.get_attempt_history(user_id, limit=None)
        summary = summarize_student(user_id, records, results)
        summaries.append(summary)
        students.append({
            **summary.model_dump(mode="json"),
            "overall_progress": overall_progress(records, results),
            "quiz_attempts": len(results),
            "pass_rate": pass_rate(results),
            "achievements": [a.name for a in derive_achievements(summary.items_completed, summary.quizzes_passed)],
        })

    return {
        "class": summarize_class(summaries).model_dump(mode="json"),
        "students": students,
    }


def main():
    parser = argparse.ArgumentParser(
        description="Summarize student progress for the teacher dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_PROGRESS_DB,
        help="Path to progress.db"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report as JSON to this path"
    )

    args = parser.parse_args()

    if not args.db.exists():
        logger.error(f"Progress database not found: {args.db}")
        sys.exit(1)

    report = build_report(ProgressTracker(args.db))
    overview = report["class"]

    logger.info("=" * 50)
    logger.info("CLASS REPORT")
    logger.info("=" * 50)
    logger.info(f"Students: {overview['total_students']} ({overview['active_students']} active this week)")
    logger.info(f"Class average: {overview['average_score']}%")
    logger.info(f"Top performer: {overview['top_performer'] or '-'}")
    for row in report["students"]:
        logger.info(
            f"  {row['user_id']}: {row['items_completed']} items, "
            f"{row['quizzes_passed']}/{row['quiz_attempts']} quizzes passed, "
            f"avg {row['average_score']}%, progress {row['overall_progress']}%"
        )

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved report to: {args.output}")


if __name__ == "__main__":
    main()
