"""
Schema validation tests for Suraksha.

Tests all Pydantic models to ensure they validate correctly.
"""

import pytest
from datetime import datetime

from suraksha.schemas import (
    # Quiz
    Question,
    QuizConfig,
    QuestionBank,
    SampledQuestion,
    AttemptStatus,
    Attempt,
    BadgeTier,
    QuestionOutcome,
    AttemptResult,
    # Catalog
    Track,
    ContentKind,
    ContentItem,
    Section,
    Catalog,
    validate_orders,
    # Progress
    ItemStatus,
    CompletionRecord,
    ItemState,
    SectionState,
)

from conftest import make_questions, make_section


def make_attempt(count: int = 3, time_limit_seconds: int = 600) -> Attempt:
    return Attempt(
        user_id="asha",
        quiz_id="test-quiz",
        questions=[
            SampledQuestion(position=i, question=q)
            for i, q in enumerate(make_questions(count), start=1)
        ],
        time_limit_seconds=time_limit_seconds,
    )


class TestOrderValidation:
    """Test item order validation helper."""

    def test_valid_orders(self):
        assert validate_orders([1, 2, 3]) == [1, 2, 3]
        assert validate_orders([3, 1, 2]) == [3, 1, 2]

    def test_empty_orders(self):
        assert validate_orders([]) == []

    def test_invalid_orders_gap(self):
        with pytest.raises(ValueError):
            validate_orders([1, 3])

    def test_invalid_orders_not_from_one(self):
        with pytest.raises(ValueError):
            validate_orders([2, 3])

    def test_invalid_orders_duplicate(self):
        with pytest.raises(ValueError):
            validate_orders([1, 1, 2])


class TestQuizSchemas:
    """Test question and bank schemas."""

    def test_question_valid(self):
        q = Question(id="q1", prompt="Drop, cover and?", options=["Run", "Hold on"], correct_answer=1)
        assert q.points == 1
        assert q.explanation == ""

    def test_question_answer_out_of_range(self):
        with pytest.raises(ValueError):
            Question(id="q1", prompt="?", options=["A", "B"], correct_answer=2)

    def test_question_needs_two_options(self):
        with pytest.raises(ValueError):
            Question(id="q1", prompt="?", options=["A"], correct_answer=0)

    def test_question_points_positive(self):
        with pytest.raises(ValueError):
            Question(id="q1", prompt="?", options=["A", "B"], correct_answer=0, points=0)

    def test_quiz_config_defaults(self):
        config = QuizConfig()
        assert config.sample_size is None
        assert config.time_limit_seconds == 600
        assert config.passing_threshold == 70

    def test_quiz_config_threshold_bounds(self):
        with pytest.raises(ValueError):
            QuizConfig(passing_threshold=101)

    def test_bank_effective_sample_size(self):
        whole = QuestionBank(id="b", title="B", questions=make_questions(10))
        sampled = QuestionBank(
            id="b", title="B", questions=make_questions(30), config=QuizConfig(sample_size=25)
        )
        assert whole.effective_sample_size == 10
        assert sampled.effective_sample_size == 25
        assert sampled.size == 30

    def test_bank_duplicate_question_ids(self):
        questions = make_questions(2) + make_questions(1)
        with pytest.raises(ValueError):
            QuestionBank(id="b", title="B", questions=questions)

    def test_bank_requires_questions(self):
        with pytest.raises(ValueError):
            QuestionBank(id="b", title="B", questions=[])


class TestAttemptSchema:
    """Test attempt answer recording and closing."""

    def test_new_attempt_is_open(self):
        attempt = make_attempt()
        assert attempt.is_open
        assert attempt.answered_count == 0
        assert attempt.remaining_seconds is None
        assert len(attempt.attempt_id) == 32

    def test_select_answer_overwrites(self):
        attempt = make_attempt()
        assert attempt.select_answer(1, 2)
        assert attempt.select_answer(1, 0)
        assert attempt.answers == {1: 0}

    def test_select_answer_bad_position(self):
        attempt = make_attempt(3)
        with pytest.raises(ValueError):
            attempt.select_answer(4, 0)
        with pytest.raises(ValueError):
            attempt.select_answer(0, 0)

    def test_select_answer_bad_option(self):
        attempt = make_attempt()
        with pytest.raises(ValueError):
            attempt.select_answer(1, 4)

    def test_close_only_once(self):
        attempt = make_attempt()
        attempt.close(AttemptStatus.SUBMITTED, 45)
        attempt.close(AttemptStatus.TIMED_OUT, 0)
        assert attempt.status == AttemptStatus.SUBMITTED
        assert attempt.remaining_seconds == 45
        assert attempt.ended_at is not None

    def test_close_clamps_remaining(self):
        attempt = make_attempt(time_limit_seconds=60)
        attempt.close(AttemptStatus.SUBMITTED, 90)
        assert attempt.remaining_seconds == 60

    def test_close_into_in_progress_rejected(self):
        with pytest.raises(ValueError):
            make_attempt().close(AttemptStatus.IN_PROGRESS, 10)

    def test_no_answers_after_close(self):
        attempt = make_attempt()
        attempt.close(AttemptStatus.TIMED_OUT, 0)
        assert attempt.select_answer(1, 0) is False
        assert attempt.answers == {}

    def test_attempts_do_not_share_answers(self):
        first, second = make_attempt(), make_attempt()
        first.select_answer(1, 1)
        assert second.answers == {}


class TestResultSchemas:
    """Test badge tiers and results."""

    def test_badge_labels(self):
        assert BadgeTier.EXPERT.label == "Disaster Response Expert"
        assert BadgeTier.CHAMPION.label == "Safety Champion"
        assert BadgeTier.PREPARED.label == "Emergency Prepared"
        assert BadgeTier.CONSCIOUS.label == "Safety Conscious"
        assert BadgeTier.KEEP_LEARNING.label == "Keep Learning"

    def test_result_correct_count(self):
        outcomes = [
            QuestionOutcome(position=1, question_id="q1", selected_option=0, correct_option=0, is_correct=True),
            QuestionOutcome(position=2, question_id="q2", selected_option=None, correct_option=0, is_correct=False),
        ]
        result = AttemptResult(
            attempt_id="a1", user_id="asha", quiz_id="test-quiz", outcomes=outcomes,
            score=1, max_score=2, percentage=50, passed=False, badge=BadgeTier.KEEP_LEARNING,
            elapsed_seconds=30, status=AttemptStatus.SUBMITTED, completed_at=datetime(2024, 1, 1),
        )
        assert result.correct_count == 1
        assert result.total_questions == 2
        assert result.model_dump()["correct_count"] == 1

    def test_result_percentage_bounds(self):
        with pytest.raises(ValueError):
            AttemptResult(
                attempt_id="a1", user_id="asha", quiz_id="q", outcomes=[],
                score=1, max_score=1, percentage=101, passed=True, badge=BadgeTier.EXPERT,
                elapsed_seconds=0, status=AttemptStatus.SUBMITTED, completed_at=datetime(2024, 1, 1),
            )


class TestCatalogSchemas:
    """Test content item, section and catalog schemas."""

    def test_content_item_defaults(self):
        item = ContentItem(id="eq1", order=1, title="Earthquake Safety Basics")
        assert item.kind == ContentKind.VIDEO
        assert item.media_url is None

    def test_section_sorts_items(self):
        section = Section(
            key="quake",
            track=Track.DRILLS,
            title="Quake",
            items=[
                ContentItem(id="b", order=2, title="B"),
                ContentItem(id="a", order=1, title="A"),
            ],
        )
        assert section.item_ids == ["a", "b"]
        assert section.item_at(2).id == "b"
        assert section.item_at(3) is None

    def test_section_order_gap(self):
        with pytest.raises(ValueError):
            Section(
                key="quake",
                track=Track.DRILLS,
                title="Quake",
                items=[
                    ContentItem(id="a", order=1, title="A"),
                    ContentItem(id="c", order=3, title="C"),
                ],
            )

    def test_section_duplicate_item_ids(self):
        with pytest.raises(ValueError):
            Section(
                key="quake",
                track=Track.DRILLS,
                title="Quake",
                items=[
                    ContentItem(id="a", order=1, title="A"),
                    ContentItem(id="a", order=2, title="A again"),
                ],
            )

    def test_catalog_duplicate_ids_across_sections(self):
        first = make_section("x", 2)
        second = Section(
            key="y", track=Track.DRILLS, title="Y",
            items=[ContentItem(id="x1", order=1, title="clash")],
        )
        with pytest.raises(ValueError):
            Catalog(sections={"x": first, "y": second})

    def test_catalog_key_mismatch(self):
        with pytest.raises(ValueError):
            Catalog(sections={"other": make_section("x", 1)})

    def test_catalog_lookups(self):
        catalog = Catalog(sections={
            "x": make_section("x", 2),
            "aid": make_section("aid", 1, track=Track.FIRST_AID),
        })
        assert [s.key for s in catalog.get_sections(Track.FIRST_AID)] == ["aid"]
        assert catalog.all_item_ids == {"x1", "x2", "aid1"}


class TestProgressSchemas:
    """Test progress tracking schemas."""

    def test_item_status_values(self):
        assert ItemStatus.LOCKED.value == "locked"
        assert ItemStatus.UNLOCKED.value == "unlocked"
        assert ItemStatus.COMPLETED.value == "completed"

    def test_completion_record_score_bounds(self):
        record = CompletionRecord(user_id="asha", item_id="eq1", score=85)
        assert record.completed
        with pytest.raises(ValueError):
            CompletionRecord(user_id="asha", item_id="eq1", score=120)

    def test_section_state_status_of(self):
        item = ContentItem(id="eq1", order=1, title="Basics")
        state = SectionState(
            section_key="quake",
            items=[ItemState(item=item, status=ItemStatus.UNLOCKED)],
            completed_count=0,
            total_count=1,
            completion_percent=0,
        )
        assert state.status_of("eq1") == ItemStatus.UNLOCKED
        assert state.status_of("eq2") is None


class TestSchemaImports:
    """Test that all schemas can be imported from the main module."""

    def test_import_from_suraksha_schemas(self):
        from suraksha.schemas import (
            Catalog,
            QuestionBank,
            AttemptResult,
            SectionState,
        )
        assert Catalog is not None
        assert QuestionBank is not None
        assert AttemptResult is not None
        assert SectionState is not None
