"""
Error types for Suraksha.

Locked items and unanswered questions are ordinary states, not errors.
Only three conditions raise:
- CatalogError: malformed authored content (fatal, raised at load time)
- InsufficientBankSize: a quiz asks for more questions than its bank holds
- PersistError: a progress/result write failed (recoverable, shown to the user)
"""


class SurakshaError(Exception):
    """Base class for all Suraksha errors."""


class CatalogError(SurakshaError):
    """Content catalog is malformed (bad ordering, duplicate ids, bad YAML)."""


class InsufficientBankSize(SurakshaError):
    """Sampler was asked for more questions than the bank contains."""

    def __init__(self, requested: int, available: int, quiz_id: str = ""):
        self.requested = requested
        self.available = available
        self.quiz_id = quiz_id
        where = f" in '{quiz_id}'" if quiz_id else ""
        super().__init__(
            f"Requested {requested} questions but only {available} available{where}"
        )


class PersistError(SurakshaError):
    """Writing progress or an attempt result to the store failed."""
