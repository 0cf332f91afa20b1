"""Question sampler tests."""

import random

import pytest

from suraksha.errors import InsufficientBankSize
from suraksha.quiz import sample_questions


class TestSampleQuestions:

    def test_sample_size_and_positions(self, bank_factory):
        bank = bank_factory(30)
        sampled = sample_questions(bank, 25, random.Random(1))
        assert len(sampled) == 25
        assert [s.position for s in sampled] == list(range(1, 26))

    def test_sample_distinct_from_bank(self, bank_factory):
        bank = bank_factory(30)
        sampled = sample_questions(bank, 25, random.Random(2))
        ids = [s.question.id for s in sampled]
        assert len(set(ids)) == 25
        assert set(ids) <= {q.id for q in bank.questions}

    def test_whole_bank_is_permutation(self, bank_factory):
        bank = bank_factory(10)
        sampled = sample_questions(bank, 10, random.Random(3))
        assert sorted(s.question.id for s in sampled) == sorted(q.id for q in bank.questions)

    def test_seeded_rng_is_reproducible(self, bank_factory):
        bank = bank_factory(30)
        first = sample_questions(bank, 25, random.Random(42))
        second = sample_questions(bank, 25, random.Random(42))
        assert [s.question.id for s in first] == [s.question.id for s in second]

    def test_independent_draws_differ(self, bank_factory):
        bank = bank_factory(30)
        rng = random.Random(5)
        draws = {tuple(s.question.id for s in sample_questions(bank, 25, rng)) for _ in range(5)}
        assert len(draws) > 1

    def test_insufficient_bank(self, bank_factory):
        bank = bank_factory(10, quiz_id="basics")
        with pytest.raises(InsufficientBankSize) as exc_info:
            sample_questions(bank, 11)
        assert exc_info.value.requested == 11
        assert exc_info.value.available == 10
        assert exc_info.value.quiz_id == "basics"

    def test_sample_size_must_be_positive(self, bank_factory):
        with pytest.raises(ValueError):
            sample_questions(bank_factory(10), 0)
