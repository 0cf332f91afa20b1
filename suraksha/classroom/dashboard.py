"""
Dashboard aggregates for students and teachers.

Pure functions over stored rows:
- Achievement badges earned from completions and passed quizzes
- Overall progress (half completions, half quiz passes)
- Per-student summaries and class-wide roll-ups
"""

from datetime import datetime, timedelta
from fractions import Fraction
from typing import Optional

from suraksha.schemas import (
    Achievement,
    AttemptResult,
    ClassSummary,
    CompletionRecord,
    StudentSummary,
)
from suraksha.utils import percent_of, round_half_up


ACTIVE_WINDOW = timedelta(days=7)

# (id, name, description, minimum completions, minimum passed quizzes)
ACHIEVEMENT_RULES = [
    ("first-drill", "First Steps", "Completed your first drill", 1, 0),
    ("drill-expert", "Drill Expert", "Completed 5 drills", 5, 0),
    ("quiz-master", "Quiz Master", "Passed your first quiz", 0, 1),
    ("knowledge-seeker", "Knowledge Seeker", "Passed 3 quizzes", 0, 3),
]


def derive_achievements(completed_items: int, passed_quizzes: int) -> list[Achievement]:
    """Achievements earned for the given counts, in rule order."""
    return [
        Achievement(id=aid, name=name, description=desc)
        for aid, name, desc, min_items, min_passes in ACHIEVEMENT_RULES
        if completed_items >= min_items and passed_quizzes >= min_passes
    ]


def overall_progress(records: list[CompletionRecord], results: list[AttemptResult]) -> int:
    """
    Overall progress percent.

    Completed share of completion rows counts for 50 points, passed share
    of quiz attempts for the other 50. Either half is 0 when it has no rows.
    """
    completed = sum(1 for r in records if r.completed)
    passed = sum(1 for r in results if r.passed)
    item_part = Fraction(50 * completed, len(records)) if records else Fraction(0)
    quiz_part = Fraction(50 * passed, len(results)) if results else Fraction(0)
    total = item_part + quiz_part
    return round_half_up(total.numerator, total.denominator)


def summarize_student(
    user_id: str,
    records: list[CompletionRecord],
    results: list[AttemptResult],
) -> StudentSummary:
    """Roll up one student's completions and quiz results."""
    items_completed = sum(1 for r in records if r.completed)
    quizzes_passed = sum(1 for r in results if r.passed)

    scores = [Fraction(r.score) for r in records if r.score is not None]
    scores += [Fraction(r.percentage) for r in results]
    mean = sum(scores, Fraction(0)) / len(scores) if scores else Fraction(0)
    average = round_half_up(mean.numerator, mean.denominator)

    timestamps = [r.completed_at for r in records if r.completed_at is not None]
    timestamps += [r.completed_at for r in results]

    return StudentSummary(
        user_id=user_id,
        items_completed=items_completed,
        quizzes_passed=quizzes_passed,
        average_score=average,
        total_badges=items_completed // 2 + quizzes_passed // 2,
        last_activity=max(timestamps) if timestamps else None,
    )


def summarize_class(summaries: list[StudentSummary], now: Optional[datetime] = None) -> ClassSummary:
    """Class-wide figures for the teacher dashboard."""
    if not summaries:
        return ClassSummary()

    now = now or datetime.now()
    active = sum(
        1 for s in summaries
        if s.last_activity is not None and s.last_activity > now - ACTIVE_WINDOW
    )
    top = max(summaries, key=lambda s: s.average_score)
    return ClassSummary(
        total_students=len(summaries),
        active_students=active,
        average_score=round_half_up(sum(s.average_score for s in summaries), len(summaries)),
        top_performer=top.user_id,
    )


def pass_rate(results: list[AttemptResult]) -> int:
    """Percent of attempts passed."""
    return percent_of(sum(1 for r in results if r.passed), len(results))
