"""Random question sampling without replacement."""

import random
from typing import Optional

from suraksha.errors import InsufficientBankSize
from suraksha.schemas import QuestionBank, SampledQuestion


def sample_questions(
    bank: QuestionBank,
    n: int,
    rng: Optional[random.Random] = None,
) -> list[SampledQuestion]:
    """
    Draw n distinct questions from a bank in uniformly random order.

    Positions 1..n are assigned in draw order; the bank's own question ids
    are kept on the question but never used as the attempt-local id.
    Each call is independent of earlier ones.

    Raises:
        InsufficientBankSize: n exceeds the bank size
        ValueError: n < 1
    """
    if n < 1:
        raise ValueError(f"Sample size must be at least 1, got {n}")
    if n > bank.size:
        raise InsufficientBankSize(n, bank.size, bank.id)

    drawn = (rng or random).sample(bank.questions, n)
    return [
        SampledQuestion(position=position, question=question)
        for position, question in enumerate(drawn, start=1)
    ]
