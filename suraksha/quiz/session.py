"""
QuizSession - Attempt lifecycle for a single-user client.

Ties the sampler, timer and grader together:
- start_attempt: sample questions, start the countdown (replacing any prior one)
- select_answer: record answers while the attempt is open
- submit / timeout: close the attempt exactly once, grade, persist
- cancel: abandon the attempt and stop its timer
"""

import logging
import random
import threading
from datetime import datetime
from functools import partial
from typing import Callable, Optional

from suraksha.classroom.progress import ResultSink
from suraksha.errors import PersistError
from suraksha.schemas import Attempt, AttemptResult, AttemptStatus, QuestionBank

from .sampler import sample_questions
from .scoring import grade
from .timer import AttemptTimer, TimerState

logger = logging.getLogger(__name__)


class QuizSession:
    """
    Hold at most one active attempt and its timer.

    Results are appended to the result sink when one is configured. A
    failed write never loses the result: it stays on last_result and can
    be re-sent with retry_persist().
    """

    def __init__(
        self,
        result_sink: Optional[ResultSink] = None,
        rng: Optional[random.Random] = None,
        auto_tick: bool = True,
        on_result: Optional[Callable[[AttemptResult], None]] = None,
    ):
        """
        Initialize session.

        Args:
            result_sink: Object with record_attempt_result(user_id, result), or None
            rng: Random source for sampling (default: module-level random)
            auto_tick: Let the timer tick itself from a background thread
            on_result: Called with every graded result (submit and timeout)
        """
        self.result_sink = result_sink
        self.rng = rng
        self.auto_tick = auto_tick
        self.on_result = on_result

        self.attempt: Optional[Attempt] = None
        self.timer: Optional[AttemptTimer] = None
        self.last_result: Optional[AttemptResult] = None
        self.last_persist_error: Optional[PersistError] = None
        self._finish_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_attempt(
        self,
        user_id: str,
        bank: QuestionBank,
        sample_size: Optional[int] = None,
    ) -> Attempt:
        """
        Begin a new attempt, cancelling any attempt already running.

        Args:
            user_id: Who is taking the quiz
            bank: Question bank to draw from
            sample_size: Override the bank's configured sample size
        """
        self.cancel()

        n = bank.effective_sample_size if sample_size is None else sample_size
        questions = sample_questions(bank, n, self.rng)
        attempt = Attempt(
            user_id=user_id,
            quiz_id=bank.id,
            questions=questions,
            time_limit_seconds=bank.config.time_limit_seconds,
            passing_threshold=bank.config.passing_threshold,
        )
        timer = AttemptTimer(attempt.time_limit_seconds, on_expire=partial(self._on_timeout, attempt))

        self.attempt = attempt
        self.timer = timer
        self.last_result = None
        self.last_persist_error = None
        timer.start(auto_tick=self.auto_tick)

        logger.info(
            f"Started attempt {attempt.attempt_id} for {user_id} on {bank.id} "
            f"({n} of {bank.size} questions, {attempt.time_limit_seconds}s)"
        )
        return attempt

    def select_answer(self, position: int, option_index: int) -> bool:
        """Record an answer. Returns False if there is no open attempt."""
        if self.attempt is None:
            return False
        return self.attempt.select_answer(position, option_index)

    def submit(self) -> AttemptResult:
        """
        Submit the active attempt before time runs out.

        Returns the graded result. If the attempt already closed by timeout,
        returns that result instead of grading again.

        Raises:
            RuntimeError: no attempt was started
            PersistError: result was graded but could not be saved
        """
        if self.attempt is None or self.timer is None:
            raise RuntimeError("No active attempt to submit")
        if not self.attempt.is_open:
            if self.last_result is None:
                raise RuntimeError("Attempt was cancelled")
            return self.last_result

        remaining = self.timer.stop()
        # The clock can reach zero before the expiry callback has closed the attempt
        if self.timer.state == TimerState.EXPIRED:
            result = self._finish(self.attempt, AttemptStatus.TIMED_OUT, 0)
        else:
            result = self._finish(self.attempt, AttemptStatus.SUBMITTED, remaining)
        if self.last_persist_error is not None:
            raise self.last_persist_error
        return result

    def cancel(self):
        """Abandon the active attempt, if any. Its timer never fires afterwards."""
        if self.timer is not None:
            self.timer.cancel()
        if self.attempt is not None and self.attempt.is_open:
            logger.info(f"Abandoned attempt {self.attempt.attempt_id}")
            self.attempt = None

    def retry_persist(self) -> AttemptResult:
        """Re-send the last result after a failed write. No-op once it is saved."""
        if self.last_result is None:
            raise RuntimeError("No result to persist")
        if self.last_persist_error is None:
            return self.last_result
        self.last_persist_error = None
        self._persist(self.last_result)
        if self.last_persist_error is not None:
            raise self.last_persist_error
        return self.last_result

    @property
    def remaining_seconds(self) -> int:
        return self.timer.remaining_seconds if self.timer else 0

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _on_timeout(self, attempt: Attempt):
        # A timer outliving its attempt must not close whatever replaced it
        if attempt is not self.attempt or not attempt.is_open:
            return
        logger.info(
            f"Attempt {attempt.attempt_id} timed out with "
            f"{attempt.answered_count}/{len(attempt.questions)} answered"
        )
        self._finish(attempt, AttemptStatus.TIMED_OUT, 0)

    def _finish(self, attempt: Attempt, status: AttemptStatus, remaining: int) -> AttemptResult:
        """Close, grade and persist. Guarded so timeout and submit cannot both run."""
        with self._finish_lock:
            if attempt is not self.attempt or not attempt.is_open:
                return self.last_result
            attempt.close(status, remaining, ended_at=datetime.now())
            result = grade(attempt)
            self.last_result = result

        self._persist(result)
        if self.on_result is not None:
            self.on_result(result)
        return result

    def _persist(self, result: AttemptResult):
        if self.result_sink is None:
            return
        try:
            self.result_sink.record_attempt_result(result.user_id, result)
        except PersistError as e:
            logger.warning(f"Result for attempt {result.attempt_id} not saved: {e}")
            self.last_persist_error = e
