"""Scoring, badge and rounding tests."""

import random
from datetime import datetime

import pytest

from suraksha.quiz import badge_for, elapsed_seconds, grade, sample_questions
from suraksha.schemas import (
    Attempt,
    AttemptStatus,
    BadgeTier,
    Question,
    SampledQuestion,
)
from suraksha.utils import percent_of, round_half_up


def closed_attempt(questions, answers, remaining=100, status=AttemptStatus.SUBMITTED):
    attempt = Attempt(user_id="asha", quiz_id="test-quiz", questions=questions)
    for position, option in answers.items():
        attempt.select_answer(position, option)
    attempt.close(status, remaining, ended_at=datetime(2024, 3, 1, 9, 30))
    return attempt


class TestRounding:

    def test_round_half_up(self):
        assert round_half_up(25, 2) == 13
        assert round_half_up(1, 3) == 0
        assert round_half_up(2, 3) == 1
        assert round_half_up(0, 5) == 0

    def test_round_half_up_rejects_bad_input(self):
        with pytest.raises(ValueError):
            round_half_up(1, 0)
        with pytest.raises(ValueError):
            round_half_up(-1, 2)

    def test_percent_of(self):
        assert percent_of(18, 25) == 72
        assert percent_of(1, 8) == 13
        assert percent_of(2, 3) == 67
        assert percent_of(0, 0) == 0


class TestBadges:

    @pytest.mark.parametrize("percentage,tier", [
        (100, BadgeTier.EXPERT),
        (90, BadgeTier.EXPERT),
        (89, BadgeTier.CHAMPION),
        (80, BadgeTier.CHAMPION),
        (79, BadgeTier.PREPARED),
        (70, BadgeTier.PREPARED),
        (69, BadgeTier.CONSCIOUS),
        (60, BadgeTier.CONSCIOUS),
        (59, BadgeTier.KEEP_LEARNING),
        (0, BadgeTier.KEEP_LEARNING),
    ])
    def test_badge_boundaries(self, percentage, tier):
        assert badge_for(percentage) == tier


class TestElapsed:

    def test_elapsed(self):
        assert elapsed_seconds(600, 45) == 555
        assert elapsed_seconds(600, 600) == 0
        assert elapsed_seconds(600, 0) == 600

    def test_elapsed_clamped(self):
        assert elapsed_seconds(600, 700) == 0
        assert elapsed_seconds(600, -5) == 600


class TestGrade:

    def test_sampled_quiz_scenario(self, bank_factory):
        bank = bank_factory(30, sample_size=25)
        questions = sample_questions(bank, 25, random.Random(11))
        answers = {p: 0 if p <= 18 else 1 for p in range(1, 26)}
        result = grade(closed_attempt(questions, answers))

        assert result.score == 18
        assert result.max_score == 25
        assert result.percentage == 72
        assert result.passed
        assert result.badge == BadgeTier.PREPARED
        assert result.correct_count == 18

    def test_unanswered_counts_incorrect(self, bank_factory):
        questions = sample_questions(bank_factory(10), 10, random.Random(0))
        result = grade(closed_attempt(questions, {1: 0, 2: 0}))
        assert result.score == 2
        assert result.percentage == 20
        assert not result.passed
        unanswered = [o for o in result.outcomes if o.selected_option is None]
        assert len(unanswered) == 8
        assert not any(o.is_correct for o in unanswered)

    def test_grade_is_deterministic(self, bank_factory):
        questions = sample_questions(bank_factory(10), 10, random.Random(0))
        attempt = closed_attempt(questions, {1: 0, 3: 2, 5: 0})
        assert grade(attempt) == grade(attempt)

    def test_pass_threshold_inclusive(self, bank_factory):
        questions = sample_questions(bank_factory(10), 10, random.Random(0))
        result = grade(closed_attempt(questions, {p: 0 for p in range(1, 8)}))
        assert result.percentage == 70
        assert result.passed

    def test_points_weighted(self):
        questions = [
            SampledQuestion(position=1, question=Question(
                id="big", prompt="?", options=["A", "B"], correct_answer=0, points=3)),
            SampledQuestion(position=2, question=Question(
                id="small", prompt="?", options=["A", "B"], correct_answer=0)),
        ]
        result = grade(closed_attempt(questions, {1: 0, 2: 1}))
        assert result.score == 3
        assert result.max_score == 4
        assert result.percentage == 75
        assert result.correct_count == 1

    def test_result_carries_attempt_fields(self, bank_factory):
        questions = sample_questions(bank_factory(10), 10, random.Random(0))
        attempt = closed_attempt(questions, {}, remaining=0, status=AttemptStatus.TIMED_OUT)
        result = grade(attempt)
        assert result.attempt_id == attempt.attempt_id
        assert result.status == AttemptStatus.TIMED_OUT
        assert result.elapsed_seconds == 600
        assert result.completed_at == datetime(2024, 3, 1, 9, 30)
        assert result.badge == BadgeTier.KEEP_LEARNING

    def test_grade_open_attempt_rejected(self, bank_factory):
        questions = sample_questions(bank_factory(10), 10, random.Random(0))
        attempt = Attempt(user_id="asha", quiz_id="test-quiz", questions=questions)
        with pytest.raises(ValueError):
            grade(attempt)
