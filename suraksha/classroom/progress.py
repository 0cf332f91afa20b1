"""
ProgressTracker - Store completions and quiz results in ~/.suraksha/progress.db.

Stores user progress separately from authored content:
- Item completions (one row per user and item, upsert semantics)
- Quiz attempt results (append-only history)

Any sqlite3 failure is reported as PersistError so the caller can show a
retry message; the tracker never retries on its own.
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from suraksha.config import DEFAULT_PROGRESS_DB
from suraksha.errors import PersistError
from suraksha.schemas import AttemptResult, CompletionRecord, QuestionOutcome

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """What the unlock engine needs from a progress store."""

    def get_completions(self, user_id: str) -> set[str]: ...

    def upsert_completion(self, user_id: str, item_id: str, score: Optional[float] = None) -> None: ...

    def reset_item(self, user_id: str, item_id: str) -> None: ...


class ResultSink(Protocol):
    """Append-only destination for graded attempts."""

    def record_attempt_result(self, user_id: str, result: AttemptResult) -> None: ...


class ProgressTracker:
    """
    Track student progress in SQLite database.

    Progress is stored separately from content (catalog.yaml) so that:
    - Content can be updated without losing progress
    - Progress is user-specific, content is shared
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize progress tracker.

        Args:
            db_path: Path to progress.db (default: ~/.suraksha/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS completions (
                    user_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 1,
                    completed_at TEXT,
                    score REAL,
                    PRIMARY KEY (user_id, item_id)
                );

                CREATE TABLE IF NOT EXISTS attempt_results (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    attempt_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    quiz_id TEXT NOT NULL,
                    score INTEGER NOT NULL,
                    max_score INTEGER NOT NULL,
                    percentage INTEGER NOT NULL,
                    passed INTEGER NOT NULL,
                    badge TEXT NOT NULL,
                    elapsed_seconds INTEGER NOT NULL,
                    status TEXT NOT NULL,
                    outcomes JSON NOT NULL,
                    completed_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_attempt_results_user
                ON attempt_results(user_id, completed_at);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Completions
    # -------------------------------------------------------------------------

    def get_completions(self, user_id: str) -> set[str]:
        """Get set of completed item IDs for a user."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT item_id FROM completions
                   WHERE user_id = ? AND completed = 1""",
                (user_id,)
            )
            return {row["item_id"] for row in cursor.fetchall()}
        finally:
            conn.close()

    def get_completion_records(self, user_id: str) -> list[CompletionRecord]:
        """Get all completion rows for a user, most recent first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT user_id, item_id, completed, completed_at, score
                   FROM completions
                   WHERE user_id = ?
                   ORDER BY completed_at DESC""",
                (user_id,)
            )
            return [
                CompletionRecord(
                    user_id=row["user_id"],
                    item_id=row["item_id"],
                    completed=bool(row["completed"]),
                    completed_at=datetime.fromisoformat(row["completed_at"]) if row["completed_at"] else None,
                    score=row["score"],
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def upsert_completion(self, user_id: str, item_id: str, score: Optional[float] = None):
        """Mark an item completed. Re-completing overwrites the previous row."""
        now = datetime.now().isoformat()
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO completions (user_id, item_id, completed, completed_at, score)
                       VALUES (?, ?, 1, ?, ?)
                       ON CONFLICT(user_id, item_id) DO UPDATE SET
                         completed = 1,
                         completed_at = ?,
                         score = ?""",
                    (user_id, item_id, now, score, now, score)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to save completion {user_id}/{item_id}: {e}")
            raise PersistError(f"Failed to save progress for {item_id}") from e

    def reset_item(self, user_id: str, item_id: str):
        """Remove a completion row."""
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    "DELETE FROM completions WHERE user_id = ? AND item_id = ?",
                    (user_id, item_id)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistError(f"Failed to reset progress for {item_id}") from e

    # -------------------------------------------------------------------------
    # Attempt Results
    # -------------------------------------------------------------------------

    def record_attempt_result(self, user_id: str, result: AttemptResult):
        """Append a graded attempt. Never updates an existing row."""
        outcomes = json.dumps([o.model_dump() for o in result.outcomes])
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO attempt_results
                       (attempt_id, user_id, quiz_id, score, max_score, percentage, passed,
                        badge, elapsed_seconds, status, outcomes, completed_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        result.attempt_id, user_id, result.quiz_id,
                        result.score, result.max_score, result.percentage, int(result.passed),
                        result.badge.value, result.elapsed_seconds, result.status.value,
                        outcomes, result.completed_at.isoformat(),
                    )
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to save attempt {result.attempt_id}: {e}")
            raise PersistError(f"Failed to save quiz result {result.attempt_id}") from e

    def get_attempt_history(self, user_id: str, limit: Optional[int] = 5) -> list[AttemptResult]:
        """
        Get a user's attempt results, newest first.

        Args:
            user_id: User identifier
            limit: Maximum rows to return (None for all)
        """
        query = """SELECT * FROM attempt_results
                   WHERE user_id = ?
                   ORDER BY completed_at DESC, id DESC"""
        params: tuple = (user_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (user_id, limit)

        conn = self._get_connection()
        try:
            cursor = conn.execute(query, params)
            return [self._row_to_result(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_result(row: sqlite3.Row) -> AttemptResult:
        return AttemptResult(
            attempt_id=row["attempt_id"],
            user_id=row["user_id"],
            quiz_id=row["quiz_id"],
            outcomes=[QuestionOutcome(**o) for o in json.loads(row["outcomes"])],
            score=row["score"],
            max_score=row["max_score"],
            percentage=row["percentage"],
            passed=bool(row["passed"]),
            badge=row["badge"],
            elapsed_seconds=row["elapsed_seconds"],
            status=row["status"],
            completed_at=datetime.fromisoformat(row["completed_at"]),
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def list_user_ids(self) -> list[str]:
        """All users with any stored progress."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT user_id FROM completions
                   UNION
                   SELECT user_id FROM attempt_results
                   ORDER BY user_id"""
            )
            return [row["user_id"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def reset_progress(self, user_id: str):
        """Reset all progress for a user."""
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM completions WHERE user_id = ?", (user_id,))
            conn.execute("DELETE FROM attempt_results WHERE user_id = ?", (user_id,))
            conn.commit()
        finally:
            conn.close()
