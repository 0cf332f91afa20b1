"""
Quiz scoring and badge tiers.

grade() is pure: the same closed Attempt always yields the same
AttemptResult. Persisting the result is the caller's job.
"""

from suraksha.schemas import (
    Attempt,
    AttemptResult,
    BadgeTier,
    QuestionOutcome,
)
from suraksha.utils import round_half_up


# Evaluated top-down, first match wins. Lower bounds are inclusive.
BADGE_THRESHOLDS = [
    (90, BadgeTier.EXPERT),
    (80, BadgeTier.CHAMPION),
    (70, BadgeTier.PREPARED),
    (60, BadgeTier.CONSCIOUS),
]


def badge_for(percentage: int) -> BadgeTier:
    """Map a 0-100 percentage to a badge tier."""
    for threshold, tier in BADGE_THRESHOLDS:
        if percentage >= threshold:
            return tier
    return BadgeTier.KEEP_LEARNING


def elapsed_seconds(time_limit: int, remaining: int) -> int:
    """Seconds used, clamped to [0, time_limit]."""
    return max(0, min(time_limit - remaining, time_limit))


def grade(attempt: Attempt) -> AttemptResult:
    """
    Grade a closed attempt.

    Unanswered positions count as incorrect. Score is the sum of points of
    correct questions (the correct count when every question is worth 1).

    Raises:
        ValueError: attempt is still in progress
    """
    if attempt.is_open or attempt.ended_at is None:
        raise ValueError(f"Attempt {attempt.attempt_id} is still in progress")

    outcomes = []
    for sampled in attempt.questions:
        question = sampled.question
        selected = attempt.answers.get(sampled.position)
        outcomes.append(QuestionOutcome(
            position=sampled.position,
            question_id=question.id,
            selected_option=selected,
            correct_option=question.correct_answer,
            is_correct=selected == question.correct_answer,
            points=question.points,
        ))

    score = sum(o.points for o in outcomes if o.is_correct)
    max_score = sum(o.points for o in outcomes)
    percentage = round_half_up(100 * score, max_score)
    remaining = attempt.remaining_seconds if attempt.remaining_seconds is not None else 0

    return AttemptResult(
        attempt_id=attempt.attempt_id,
        user_id=attempt.user_id,
        quiz_id=attempt.quiz_id,
        outcomes=outcomes,
        score=score,
        max_score=max_score,
        percentage=percentage,
        passed=percentage >= attempt.passing_threshold,
        badge=badge_for(percentage),
        elapsed_seconds=elapsed_seconds(attempt.time_limit_seconds, remaining),
        status=attempt.status,
        completed_at=attempt.ended_at,
    )
