"""Sub-measurements owned by a :class:`~phasetimer.timer.engine.Timer`."""

from __future__ import annotations

from datetime import timedelta

from ..errors import NoneUnexpected, SubTimerNotFinished


class SubTimer:
    """One phase measured against its parent timer's start reference.

    Instances are created and mutated only by the owning ``Timer``; the
    public surface is read-only.
    """

    __slots__ = ("_time", "_finished")

    def __init__(self) -> None:
        self._time: timedelta | None = None
        self._finished: bool = False

    @property
    def time(self) -> timedelta | None:
        """Recorded elapsed time, or ``None`` while unfinished."""
        return self._time

    @property
    def finished(self) -> bool:
        return self._finished

    def is_finished(self) -> bool:
        return self._finished

    def get_time(self) -> timedelta:
        """Elapsed time recorded when this subtimer finished."""
        if not self._finished:
            raise SubTimerNotFinished()
        if self._time is None:
            raise NoneUnexpected("time")
        return self._time

    # ── owner-only mutation ───────────────────────────────────────────

    def _complete(self, time: timedelta) -> None:
        self._time = time
        self._finished = True

    def _reopen(self) -> None:
        self._time = None
        self._finished = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubTimer):
            return NotImplemented
        return (self._time, self._finished) == (other._time, other._finished)

    __hash__ = None  # mutable through the owner

    def __repr__(self) -> str:
        return f"SubTimer(time={self._time!r}, finished={self._finished})"
