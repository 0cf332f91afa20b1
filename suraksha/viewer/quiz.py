"""
Quiz renderer - Question, result and review display.

Provides:
- Question rendering with the selected option highlighted
- Countdown formatting
- Score box with badge tier
- Per-question review after grading
"""

import html
from typing import Optional

from suraksha.schemas import AttemptResult, BadgeTier, SampledQuestion


BADGE_COLORS = {
    BadgeTier.EXPERT: "#EAB308",
    BadgeTier.CHAMPION: "#3B82F6",
    BadgeTier.PREPARED: "#22C55E",
    BadgeTier.CONSCIOUS: "#F97316",
    BadgeTier.KEEP_LEARNING: "#6B7280",
}


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
        margin-bottom: 0.6em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-option {
        background: white;
        border: 1px solid #ddd;
        border-radius: 8px;
        padding: 0.6em 1em;
        margin: 0.3em 0;
    }
    .quiz-option.selected {
        border-color: #1976D2;
        background: #bbdefb;
        font-weight: 600;
    }
    .quiz-timer {
        font-family: monospace;
        font-size: 1.3em;
        font-weight: 700;
        color: #1565C0;
    }
    .quiz-timer.low {
        color: #c62828;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    .quiz-badge {
        display: inline-block;
        color: white;
        border-radius: 999px;
        padding: 0.4em 1.2em;
        margin-top: 0.8em;
        font-weight: 600;
    }
    .quiz-review {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin: 0.5em 0;
        border: 2px solid #ddd;
    }
    .quiz-review.correct { border-color: #388E3C; }
    .quiz-review.incorrect { border-color: #c62828; }
    .quiz-explanation {
        color: #555;
        font-size: 0.9em;
        margin-top: 0.4em;
    }
    </style>
    """


def format_time(seconds: int) -> str:
    """Format seconds as m:ss."""
    seconds = max(0, seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


def render_timer(remaining_seconds: int, warn_below: int = 60) -> str:
    """Render the countdown, turning red under warn_below seconds."""
    css = "quiz-timer low" if remaining_seconds < warn_below else "quiz-timer"
    return f'<span class="{css}">{format_time(remaining_seconds)}</span>'


def render_question(
    sampled: SampledQuestion,
    total: int,
    selected: Optional[int] = None,
) -> str:
    """
    Render a single sampled question.

    Args:
        sampled: Question at its attempt-local position
        total: Number of questions in the attempt
        selected: Currently selected option index, if any

    Returns:
        HTML string for the question
    """
    question = sampled.question
    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-title">Question {sampled.position} of {total}</div>')
    parts.append(f'<div class="quiz-question">{html.escape(question.prompt)}</div>')

    for idx, option in enumerate(question.options):
        css = "quiz-option selected" if idx == selected else "quiz-option"
        parts.append(f'<div class="{css}">{html.escape(option)}</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(result: AttemptResult) -> str:
    """Render score display with badge."""
    color = BADGE_COLORS[result.badge]
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{result.percentage}%</div>
        <div class="quiz-score-label">{result.correct_count} of {result.total_questions} correct</div>
        <div class="quiz-badge" style="background: {color};">{result.badge.icon} {html.escape(result.badge.label)}</div>
    </div>
    """


def render_review(result: AttemptResult, questions: list[SampledQuestion]) -> str:
    """
    Render per-question review after grading.

    Args:
        result: Graded attempt
        questions: The attempt's sampled questions, in position order

    Returns:
        HTML string for all reviewed questions
    """
    by_position = {q.position: q.question for q in questions}
    parts = []
    for outcome in result.outcomes:
        question = by_position.get(outcome.position)
        if question is None:
            continue
        css = "quiz-review correct" if outcome.is_correct else "quiz-review incorrect"
        if outcome.selected_option is None:
            your_answer = "Not answered"
        else:
            your_answer = question.options[outcome.selected_option]

        parts.append(f'<div class="{css}">')
        parts.append(f'<div class="quiz-question">{html.escape(question.prompt)}</div>')
        parts.append(f'<div>Your answer: {html.escape(your_answer)}</div>')
        if not outcome.is_correct:
            parts.append(
                f'<div>Correct answer: {html.escape(question.options[outcome.correct_option])}</div>'
            )
        if question.explanation:
            parts.append(f'<div class="quiz-explanation">{html.escape(question.explanation)}</div>')
        parts.append('</div>')
    return ''.join(parts)
