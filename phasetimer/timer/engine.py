"""Elapsed-time state machine for phasetimer.

States
------
INIT        Configured but not started; subtimers may be declared.
RUNNING     Clock is counting.
PAUSED      Clock is suspended; the pause is compensated on resume.
FINISHED    Clock stopped; every subtimer carries the final time.

Transitions
-----------
INIT → RUNNING                  (start)
RUNNING → PAUSED                (pause)
PAUSED → RUNNING                (resume)
RUNNING | PAUSED → FINISHED     (finish, or the last subtimer finishing)
FINISHED → INIT                 (reset)

Anything else raises :class:`~phasetimer.errors.IllegalStateTransition`
and leaves the timer untouched.

Paused-time accounting
----------------------
Elapsed time is always ``now - start_reference``.  Instead of keeping a
running total of paused intervals, ``resume`` moves the start reference
forward by the length of the pause that just ended.  A consequence is that
``get_time()`` keeps following the clock while PAUSED (and after
FINISHED); only the next resume takes the pause back out.  The clock is
read in nanoseconds; reported durations have microsecond resolution.

Subtimers
---------
Subtimers are declared in INIT and finished individually while RUNNING,
each recording the parent's elapsed time at that moment.  When the last
one finishes, the parent finishes too.  ``reset`` drops them all.
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import (
    IllegalStateTransition,
    InvalidSubtimerIndex,
    NoneUnexpected,
    Unsupported,
)
from .subtimer import SubTimer

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    INIT = "init"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


# ── transition table ──────────────────────────────────────────────────────

TRANSITIONS: dict[TimerState, frozenset[TimerState]] = {
    TimerState.INIT: frozenset({TimerState.RUNNING}),
    TimerState.RUNNING: frozenset({TimerState.PAUSED, TimerState.FINISHED}),
    TimerState.PAUSED: frozenset({TimerState.RUNNING, TimerState.FINISHED}),
    TimerState.FINISHED: frozenset({TimerState.INIT}),
}


def _to_timedelta(nanoseconds: int) -> timedelta:
    """Convert clock nanoseconds, truncating to timedelta's microseconds."""
    return timedelta(microseconds=nanoseconds // 1000)


# ── engine ────────────────────────────────────────────────────────────────


class Timer(QObject):
    """Stopwatch with pause/resume compensation and subtimers.

    Not thread-safe: share an instance between threads only behind an
    external lock.

    Signals
    -------
    state_changed(new_state: TimerState)
        Emitted after every successful transition.
    subtimer_finished(index: int, time: timedelta)
        Emitted when a single subtimer is finished.  Emitted before the
        automatic ``finish`` triggered by the last subtimer; that finish
        is skipped if a slot already finished the timer.
    subtimer_resumed(index: int)
        Emitted when a finished subtimer is reopened.
    """

    state_changed = pyqtSignal(object)
    subtimer_finished = pyqtSignal(int, object)
    subtimer_resumed = pyqtSignal(int)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._clock = clock

        # ── lifecycle state ───────────────────────────────────────────
        self._state: TimerState = TimerState.INIT
        self._start_reference: int | None = None
        self._last_paused: int | None = None  # scratch, cleared by reset

        # ── subtimers ─────────────────────────────────────────────────
        self._sub_timers: list[SubTimer] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        """True only while the clock is counting (not PAUSED)."""
        return self._state == TimerState.RUNNING

    @property
    def subtimer_count(self) -> int:
        return len(self._sub_timers)

    @property
    def subtimers(self) -> tuple[SubTimer, ...]:
        """Snapshot of the subtimers in index order."""
        return tuple(self._sub_timers)

    def get_time(self) -> timedelta:
        """Time elapsed since start, excluding compensated pauses."""
        if self._state == TimerState.INIT:
            raise Unsupported(self._state, "get_time")
        if self._start_reference is None:
            raise NoneUnexpected("start_reference")
        return _to_timedelta(self._clock() - self._start_reference)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start the clock.  Only valid from INIT."""
        new_state = self._next_state(TimerState.RUNNING)
        self._start_reference = self._clock()
        self._set_state(new_state)

    def pause(self) -> None:
        new_state = self._next_state(TimerState.PAUSED)
        self._last_paused = self._clock()
        self._set_state(new_state)

    def resume(self) -> None:
        """Resume from PAUSED, shifting the start reference past the pause.

        INIT → RUNNING is legal in the table but belongs to ``start``, so
        it is rejected here before the table is consulted.
        """
        if self._state == TimerState.INIT:
            raise IllegalStateTransition(self._state, TimerState.RUNNING)
        new_state = self._next_state(TimerState.RUNNING)
        if self._start_reference is None:
            raise NoneUnexpected("start_reference")
        if self._last_paused is None:
            raise NoneUnexpected("last_paused")

        paused_for = self._clock() - self._last_paused
        self._start_reference += paused_for
        logger.debug(f"Resumed after {_to_timedelta(paused_for)} paused")
        self._set_state(new_state)

    def finish(self) -> None:
        """Stop the clock and stamp every subtimer with the final time.

        The final time overrides whatever individual subtimers recorded.
        """
        new_state = self._next_state(TimerState.FINISHED)
        final = self.get_time()
        for sub_timer in self._sub_timers:
            sub_timer._complete(final)
        logger.debug(f"Finished at {final} with {len(self._sub_timers)} subtimers")
        self._set_state(new_state)

    def reset(self) -> None:
        """Return a finished timer to INIT, dropping its subtimers."""
        new_state = self._next_state(TimerState.INIT)
        self._start_reference = None
        self._last_paused = None
        self._sub_timers.clear()
        self._set_state(new_state)

    # ══════════════════════════════════════════════════════════════════
    #  SUBTIMERS
    # ══════════════════════════════════════════════════════════════════

    def add_subtimer(self) -> int:
        """Declare a new subtimer and return its index.  INIT only."""
        if self._state != TimerState.INIT:
            raise Unsupported(self._state, "add_subtimer")
        self._sub_timers.append(SubTimer())
        index = len(self._sub_timers) - 1
        logger.debug(f"Added subtimer {index}")
        return index

    def finish_subtimer(self, index: int) -> SubTimer:
        """Record the current elapsed time on subtimer *index*.

        Finishing the last unfinished subtimer finishes the whole timer,
        which re-stamps every subtimer with the final time.
        """
        if self._state != TimerState.RUNNING:
            raise Unsupported(self._state, "finish_subtimer")
        self._check_subtimer_index(index)

        sub_timer = self._sub_timers[index]
        if sub_timer.finished:
            raise Unsupported(self._state, "finish_subtimer (already finished)")

        elapsed = self.get_time()
        sub_timer._complete(elapsed)
        logger.debug(f"Subtimer {index} finished at {elapsed}")
        done = all(s.finished for s in self._sub_timers)
        self.subtimer_finished.emit(index, elapsed)

        # a slot may already have finished the timer
        if done and self._state in (TimerState.RUNNING, TimerState.PAUSED):
            self.finish()

        return sub_timer

    def delete_subtimer(self, index: int) -> None:
        """Remove subtimer *index*; later indices shift down by one."""
        if self._state != TimerState.INIT:
            raise Unsupported(self._state, "delete_subtimer")
        self._check_subtimer_index(index)
        del self._sub_timers[index]
        logger.debug(f"Deleted subtimer {index}")

    def get_subtimer(self, index: int) -> SubTimer:
        self._check_subtimer_index(index)
        return self._sub_timers[index]

    def resume_subtimer(self, index: int) -> None:
        """Reopen subtimer *index* so it can be finished again.

        On a FINISHED timer this first asks ``resume`` to reopen the
        parent, which the transition table refuses; the error propagates
        and nothing changes.
        """
        if self._state not in (TimerState.RUNNING, TimerState.FINISHED):
            raise Unsupported(self._state, "resume_subtimer")
        self._check_subtimer_index(index)
        if self._state == TimerState.FINISHED:
            self.resume()

        self._sub_timers[index]._reopen()
        logger.debug(f"Reopened subtimer {index}")
        self.subtimer_resumed.emit(index)

    # ══════════════════════════════════════════════════════════════════
    #  CONTEXT MANAGER
    # ══════════════════════════════════════════════════════════════════

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        if self._state in (TimerState.RUNNING, TimerState.PAUSED):
            self.finish()

    def __repr__(self) -> str:
        return (
            f"Timer(state={self._state.value}, "
            f"subtimers={len(self._sub_timers)})"
        )

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _next_state(self, target: TimerState) -> TimerState:
        if target not in TRANSITIONS[self._state]:
            raise IllegalStateTransition(self._state, target)
        return target

    def _check_subtimer_index(self, index: int) -> None:
        if not 0 <= index < len(self._sub_timers):
            raise InvalidSubtimerIndex(index)

    def _set_state(self, new_state: TimerState) -> None:
        logger.debug(f"{self._state.value} → {new_state.value}")
        self._state = new_state
        self.state_changed.emit(new_state)
