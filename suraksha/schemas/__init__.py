"""
Suraksha Schemas - Pydantic models for the disaster preparedness learning core.

This module exports all schema classes for:
- Catalog: content items, sections, the full catalog
- Quiz: questions, banks, attempts, results, badge tiers
- Progress: completion records, section state, dashboard summaries
"""

# Quiz schemas
from .quiz import (
    Question,
    QuizConfig,
    QuestionBank,
    SampledQuestion,
    AttemptStatus,
    Attempt,
    BadgeTier,
    BADGE_LABELS,
    QuestionOutcome,
    AttemptResult,
    DEFAULT_TIME_LIMIT_SECONDS,
    DEFAULT_PASSING_THRESHOLD,
)

# Catalog schemas
from .catalog import (
    Track,
    ContentKind,
    ContentItem,
    Section,
    Catalog,
    validate_orders,
)

# Progress schemas
from .progress import (
    ItemStatus,
    CompletionRecord,
    ItemState,
    SectionState,
    Achievement,
    StudentSummary,
    ClassSummary,
)

__all__ = [
    # Quiz
    'Question',
    'QuizConfig',
    'QuestionBank',
    'SampledQuestion',
    'AttemptStatus',
    'Attempt',
    'BadgeTier',
    'BADGE_LABELS',
    'QuestionOutcome',
    'AttemptResult',
    'DEFAULT_TIME_LIMIT_SECONDS',
    'DEFAULT_PASSING_THRESHOLD',
    # Catalog
    'Track',
    'ContentKind',
    'ContentItem',
    'Section',
    'Catalog',
    'validate_orders',
    # Progress
    'ItemStatus',
    'CompletionRecord',
    'ItemState',
    'SectionState',
    'Achievement',
    'StudentSummary',
    'ClassSummary',
]
