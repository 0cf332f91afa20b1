"""
AttemptTimer - Countdown for one active quiz attempt.

States: idle -> running -> {stopped, expired, cancelled}

The timer counts down one second per tick. It can tick itself from a
background threading.Timer chain (auto_tick) or be driven externally with
tick()/elapse(), which is how the Streamlit app and the tests use it.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"         # manual submission
    EXPIRED = "expired"         # reached zero
    CANCELLED = "cancelled"     # attempt abandoned


class AttemptTimer:
    """Single countdown coupled to one attempt."""

    def __init__(
        self,
        time_limit_seconds: int,
        on_expire: Callable[[], None],
        tick_interval: float = 1.0,
    ):
        """
        Initialize timer.

        Args:
            time_limit_seconds: Countdown start value
            on_expire: Called once, without arguments, when the countdown hits zero
            tick_interval: Wall-clock seconds between automatic ticks
        """
        if time_limit_seconds < 1:
            raise ValueError("time_limit_seconds must be at least 1")
        self.time_limit_seconds = time_limit_seconds
        self.tick_interval = tick_interval
        self._on_expire = on_expire
        self._remaining = time_limit_seconds
        self._state = TimerState.IDLE
        self._lock = threading.Lock()
        self._scheduled: Optional[threading.Timer] = None

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self, auto_tick: bool = True):
        """Start counting down. Only valid from idle."""
        with self._lock:
            if self._state != TimerState.IDLE:
                raise RuntimeError(f"Cannot start timer in state {self._state.value}")
            self._state = TimerState.RUNNING
            if auto_tick:
                self._schedule()

    def tick(self) -> int:
        """
        Count down one second.

        Returns the remaining seconds. Has no effect unless running.
        Fires on_expire (outside the lock) on the tick that reaches zero.
        """
        expired = False
        with self._lock:
            if self._state != TimerState.RUNNING:
                return self._remaining
            self._remaining -= 1
            if self._remaining <= 0:
                self._remaining = 0
                self._state = TimerState.EXPIRED
                self._unschedule()
                expired = True
            remaining = self._remaining

        if expired:
            logger.info("Attempt timer expired")
            self._on_expire()
        return remaining

    def elapse(self, seconds: int) -> int:
        """Apply several ticks at once, stopping early if the timer leaves running."""
        for _ in range(max(0, seconds)):
            if not self.is_running:
                break
            self.tick()
        return self._remaining

    def stop(self) -> int:
        """
        Stop for a manual submission.

        Returns the remaining seconds at the moment of stopping. Returns
        the current value unchanged if the timer already left running.
        """
        with self._lock:
            if self._state == TimerState.RUNNING:
                self._state = TimerState.STOPPED
                self._unschedule()
            return self._remaining

    def cancel(self):
        """Abandon the countdown. No callback fires after this returns."""
        with self._lock:
            if self._state in (TimerState.IDLE, TimerState.RUNNING):
                self._state = TimerState.CANCELLED
            self._unschedule()

    # -------------------------------------------------------------------------
    # Background ticking
    # -------------------------------------------------------------------------

    def _schedule(self):
        # Caller holds the lock.
        self._scheduled = threading.Timer(self.tick_interval, self._auto_tick)
        self._scheduled.daemon = True
        self._scheduled.start()

    def _unschedule(self):
        # Caller holds the lock.
        if self._scheduled is not None:
            self._scheduled.cancel()
            self._scheduled = None

    def _auto_tick(self):
        self.tick()
        with self._lock:
            if self._state == TimerState.RUNNING:
                self._schedule()
