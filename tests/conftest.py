"""Shared fixtures for Suraksha tests."""

import pytest

from suraksha.classroom import ProgressTracker
from suraksha.errors import PersistError
from suraksha.schemas import (
    Catalog,
    ContentItem,
    Question,
    QuestionBank,
    QuizConfig,
    Section,
    Track,
)


def make_questions(count: int, correct_answer: int = 0) -> list[Question]:
    return [
        Question(
            id=f"q{i}",
            prompt=f"Question {i}?",
            options=["A", "B", "C", "D"],
            correct_answer=correct_answer,
            explanation=f"Because {i}",
        )
        for i in range(1, count + 1)
    ]


def make_section(key: str, count: int, track: Track = Track.DRILLS) -> Section:
    return Section(
        key=key,
        track=track,
        title=key.title(),
        items=[
            ContentItem(id=f"{key}{i}", order=i, title=f"{key} {i}")
            for i in range(1, count + 1)
        ],
    )


class InMemoryStore:
    """Progress sink double keeping completions in a dict."""

    def __init__(self):
        self.rows: dict[tuple[str, str], float | None] = {}
        self.writes = 0

    def get_completions(self, user_id: str) -> set[str]:
        return {item_id for (uid, item_id) in self.rows if uid == user_id}

    def upsert_completion(self, user_id, item_id, score=None):
        self.writes += 1
        self.rows[(user_id, item_id)] = score

    def reset_item(self, user_id, item_id):
        self.writes += 1
        self.rows.pop((user_id, item_id), None)


class FailingStore(InMemoryStore):
    def upsert_completion(self, user_id, item_id, score=None):
        raise PersistError(f"Failed to save progress for {item_id}")

    def reset_item(self, user_id, item_id):
        raise PersistError(f"Failed to reset progress for {item_id}")


class RecordingSink:
    """Result sink double; fails while `fail` is set."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.results = []

    def record_attempt_result(self, user_id, result):
        if self.fail:
            raise PersistError(f"Failed to save quiz result {result.attempt_id}")
        self.results.append((user_id, result))


@pytest.fixture
def bank_factory():
    """Build a bank of N questions whose answer is always option 0."""
    def _make(count: int = 10, sample_size=None, time_limit_seconds=600, quiz_id="test-quiz"):
        return QuestionBank(
            id=quiz_id,
            title="Test Quiz",
            questions=make_questions(count),
            config=QuizConfig(sample_size=sample_size, time_limit_seconds=time_limit_seconds),
        )
    return _make


@pytest.fixture
def catalog(bank_factory):
    """Two drill sections, one first aid section and a 30/25 quiz bank."""
    sections = [
        make_section("quake", 4),
        make_section("fire", 2),
        make_section("aid", 3, track=Track.FIRST_AID),
    ]
    bank = bank_factory(30, sample_size=25, quiz_id="dm-quiz")
    return Catalog(
        sections={s.key: s for s in sections},
        banks={bank.id: bank},
    )


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def tracker(tmp_path):
    return ProgressTracker(tmp_path / "progress.db")
