"""phasetimer: pausable elapsed-time tracking with subtimers."""

from .errors import (
    TimerError,
    IllegalStateTransition,
    Unsupported,
    InvalidSubtimerIndex,
    NoneUnexpected,
    SubTimerNotFinished,
)
from .timer import Timer, TimerState, SubTimer

__all__ = [
    "Timer",
    "TimerState",
    "SubTimer",
    "TimerError",
    "IllegalStateTransition",
    "Unsupported",
    "InvalidSubtimerIndex",
    "NoneUnexpected",
    "SubTimerNotFinished",
]
