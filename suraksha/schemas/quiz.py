"""
Quiz schemas for Suraksha.

Defines Pydantic models for the quiz engine including:
- Questions and question banks (static authored content)
- Per-quiz configuration (sample size, time limit, pass mark)
- Attempts (one timed run through a sampled question set)
- Attempt results and badge tiers
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


DEFAULT_TIME_LIMIT_SECONDS = 600
DEFAULT_PASSING_THRESHOLD = 70


# -----------------------------------------------------------------------------
# Authored content
# -----------------------------------------------------------------------------

class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    prompt: str
    options: list[str] = Field(..., min_length=2)
    correct_answer: int = Field(..., ge=0)   # index into options
    explanation: str = ""
    points: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def answer_in_range(self):
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} out of range for {len(self.options)} options"
            )
        return self


class QuizConfig(BaseModel):
    """Per-quiz settings. sample_size=None means every question in the bank."""
    model_config = ConfigDict(frozen=True)

    sample_size: Optional[int] = Field(default=None, ge=1)
    time_limit_seconds: int = Field(default=DEFAULT_TIME_LIMIT_SECONDS, ge=1)
    passing_threshold: int = Field(default=DEFAULT_PASSING_THRESHOLD, ge=0, le=100)


class QuestionBank(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    questions: list[Question] = Field(..., min_length=1)
    config: QuizConfig = QuizConfig()

    @field_validator("questions")
    @classmethod
    def question_ids_unique(cls, v: list[Question]) -> list[Question]:
        ids = [q.id for q in v]
        if len(set(ids)) != len(ids):
            raise ValueError("Question ids must be unique within a bank")
        return v

    @property
    def size(self) -> int:
        return len(self.questions)

    @property
    def effective_sample_size(self) -> int:
        """Configured sample size, or the whole bank when unset."""
        return self.config.sample_size or self.size


# -----------------------------------------------------------------------------
# Attempts
# -----------------------------------------------------------------------------

class SampledQuestion(BaseModel):
    """A bank question placed at an attempt-local 1-based position."""
    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=1)
    question: Question


class AttemptStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    TIMED_OUT = "timed_out"


class Attempt(BaseModel):
    """
    One timed run through a sampled question set.

    Mutated by answer selection while in progress; closed exactly once
    (submitted or timed out), after which no further answers are accepted.
    """
    attempt_id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str
    quiz_id: str
    questions: list[SampledQuestion] = Field(..., min_length=1)
    answers: dict[int, int] = {}           # position -> selected option index (sparse)
    started_at: datetime = Field(default_factory=datetime.now)
    time_limit_seconds: int = Field(default=DEFAULT_TIME_LIMIT_SECONDS, ge=1)
    passing_threshold: int = Field(default=DEFAULT_PASSING_THRESHOLD, ge=0, le=100)
    status: AttemptStatus = AttemptStatus.IN_PROGRESS
    remaining_seconds: Optional[int] = None   # set when the attempt closes
    ended_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status == AttemptStatus.IN_PROGRESS

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    def question_at(self, position: int) -> SampledQuestion:
        if not 1 <= position <= len(self.questions):
            raise ValueError(f"Position {position} out of range 1..{len(self.questions)}")
        return self.questions[position - 1]

    def select_answer(self, position: int, option_index: int) -> bool:
        """
        Record an answer for a position (later selections overwrite earlier ones).

        Returns:
            True if recorded, False if the attempt is already closed
        """
        sampled = self.question_at(position)
        if not 0 <= option_index < len(sampled.question.options):
            raise ValueError(f"Option {option_index} out of range for question at {position}")
        if not self.is_open:
            return False
        self.answers[position] = option_index
        return True

    def close(self, status: AttemptStatus, remaining_seconds: int, ended_at: Optional[datetime] = None):
        """Terminate the attempt. Only the first call has an effect."""
        if status == AttemptStatus.IN_PROGRESS:
            raise ValueError("Cannot close an attempt into in_progress")
        if not self.is_open:
            return
        self.status = status
        self.remaining_seconds = max(0, min(remaining_seconds, self.time_limit_seconds))
        self.ended_at = ended_at or datetime.now()


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------

class BadgeTier(str, Enum):
    EXPERT = "expert"
    CHAMPION = "champion"
    PREPARED = "prepared"
    CONSCIOUS = "conscious"
    KEEP_LEARNING = "keep_learning"

    @property
    def label(self) -> str:
        return BADGE_LABELS[self]

    @property
    def icon(self) -> str:
        return BADGE_ICONS[self]


BADGE_LABELS = {
    BadgeTier.EXPERT: "Disaster Response Expert",
    BadgeTier.CHAMPION: "Safety Champion",
    BadgeTier.PREPARED: "Emergency Prepared",
    BadgeTier.CONSCIOUS: "Safety Conscious",
    BadgeTier.KEEP_LEARNING: "Keep Learning",
}

BADGE_ICONS = {
    BadgeTier.EXPERT: "🏆",
    BadgeTier.CHAMPION: "🥇",
    BadgeTier.PREPARED: "🥈",
    BadgeTier.CONSCIOUS: "🥉",
    BadgeTier.KEEP_LEARNING: "📚",
}


class QuestionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int
    question_id: str
    selected_option: Optional[int] = None   # None = unanswered
    correct_option: int
    is_correct: bool
    points: int = 1


class AttemptResult(BaseModel):
    """Graded attempt. Immutable; each attempt appends a new result row."""
    model_config = ConfigDict(frozen=True)

    attempt_id: str
    user_id: str
    quiz_id: str
    outcomes: list[QuestionOutcome]
    score: int = Field(..., ge=0)
    max_score: int = Field(..., ge=1)
    percentage: int = Field(..., ge=0, le=100)
    passed: bool
    badge: BadgeTier
    elapsed_seconds: int = Field(..., ge=0)
    status: AttemptStatus
    completed_at: datetime

    @computed_field
    @property
    def correct_count(self) -> int:
        return sum(1 for o in self.outcomes if o.is_correct)

    @property
    def total_questions(self) -> int:
        return len(self.outcomes)
