"""Error types raised by the timer engine.

Every error derives from :class:`TimerError`, so callers that only care
whether an operation was rejected can catch that one class.  Each subclass
keeps the offending values as attributes for callers that want to react
more precisely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .timer.engine import TimerState


class TimerError(Exception):
    """Base class for all timer failures."""


class IllegalStateTransition(TimerError):
    """A lifecycle transition the state table does not allow."""

    def __init__(self, current: TimerState, target: TimerState) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Illegal timer state: cannot go from {current.value} "
            f"to {target.value}"
        )


class Unsupported(TimerError):
    """An operation that is not available in the current state."""

    def __init__(self, state: TimerState, operation: str) -> None:
        self.state = state
        self.operation = operation
        super().__init__(
            f"Illegal timer state: {operation} not supported while "
            f"{state.value}"
        )


class InvalidSubtimerIndex(TimerError, IndexError):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Invalid subtimer index: {index}")


class NoneUnexpected(TimerError):
    """A value the current state guarantees turned out to be missing."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"'None' not expected: {name}")


class SubTimerNotFinished(TimerError):
    def __init__(self) -> None:
        super().__init__("SubTimer not finished")
