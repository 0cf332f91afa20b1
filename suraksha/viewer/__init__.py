"""
Suraksha Viewer - Rendering components for sections and quizzes.

This module provides:
- Section item cards with lock/complete state
- Quiz question, countdown, score and review display
"""

from .section import (
    get_section_css,
    render_item_card,
    render_section_progress,
    STATUS_ICONS,
    KIND_ICONS,
)

from .quiz import (
    get_quiz_css,
    format_time,
    render_timer,
    render_question,
    render_quiz_score,
    render_review,
    BADGE_COLORS,
)

__all__ = [
    # Section
    "get_section_css",
    "render_item_card",
    "render_section_progress",
    "STATUS_ICONS",
    "KIND_ICONS",
    # Quiz
    "get_quiz_css",
    "format_time",
    "render_timer",
    "render_question",
    "render_quiz_score",
    "render_review",
    "BADGE_COLORS",
]
