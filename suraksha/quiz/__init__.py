"""
Suraksha Quiz - Sampling, timing and grading of quiz attempts.

This module provides:
- sample_questions: random draw without replacement from a bank
- grade / badge_for: scoring and badge tiers
- AttemptTimer: per-attempt countdown with explicit cancel()
- QuizSession: start / answer / submit / timeout lifecycle
"""

from .sampler import sample_questions

from .scoring import (
    BADGE_THRESHOLDS,
    badge_for,
    elapsed_seconds,
    grade,
)

from .timer import (
    AttemptTimer,
    TimerState,
)

from .session import QuizSession

__all__ = [
    # Sampler
    "sample_questions",
    # Scoring
    "BADGE_THRESHOLDS",
    "badge_for",
    "elapsed_seconds",
    "grade",
    # Timer
    "AttemptTimer",
    "TimerState",
    # Session
    "QuizSession",
]
