"""Timer package."""

from .engine import Timer, TimerState, TRANSITIONS
from .subtimer import SubTimer

__all__ = [
    "Timer",
    "TimerState",
    "TRANSITIONS",
    "SubTimer",
]
