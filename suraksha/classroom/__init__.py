"""
Suraksha Classroom - Runtime components for content gating and progress.

This module provides:
- CatalogLoader: Load sections and quiz banks from catalog.yaml
- ProgressTracker: Store completions and quiz results
- UnlockEngine: Linear unlock chain and navigation
- Dashboard helpers: achievements and progress roll-ups
"""

from .loader import (
    CatalogLoader,
    build_catalog,
)

from .progress import (
    ProgressTracker,
    ProgressSink,
    ResultSink,
)

from .unlock import (
    UnlockEngine,
    compute_section_state,
    item_status,
)

from .dashboard import (
    ACHIEVEMENT_RULES,
    derive_achievements,
    overall_progress,
    pass_rate,
    summarize_student,
    summarize_class,
)

__all__ = [
    # Loader
    "CatalogLoader",
    "build_catalog",
    # Progress
    "ProgressTracker",
    "ProgressSink",
    "ResultSink",
    # Unlock
    "UnlockEngine",
    "compute_section_state",
    "item_status",
    # Dashboard
    "ACHIEVEMENT_RULES",
    "derive_achievements",
    "overall_progress",
    "pass_rate",
    "summarize_student",
    "summarize_class",
]
