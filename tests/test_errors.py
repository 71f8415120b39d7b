"""Tests for the error taxonomy."""

import pytest

from phasetimer import (
    IllegalStateTransition,
    InvalidSubtimerIndex,
    NoneUnexpected,
    SubTimerNotFinished,
    TimerError,
    TimerState,
    Unsupported,
)


class TestErrorHierarchy:

    @pytest.mark.parametrize(
        "error",
        [
            IllegalStateTransition(TimerState.INIT, TimerState.PAUSED),
            Unsupported(TimerState.RUNNING, "add_subtimer"),
            InvalidSubtimerIndex(3),
            NoneUnexpected("last_paused"),
            SubTimerNotFinished(),
        ],
    )
    def test_all_errors_are_timer_errors(self, error):
        assert isinstance(error, TimerError)

    def test_catching_base_class(self, timer):
        with pytest.raises(TimerError):
            timer.reset()


class TestErrorMessages:

    def test_illegal_transition(self):
        err = IllegalStateTransition(TimerState.FINISHED, TimerState.RUNNING)
        assert str(err) == (
            "Illegal timer state: cannot go from finished to running"
        )

    def test_unsupported(self):
        err = Unsupported(TimerState.PAUSED, "finish_subtimer")
        assert str(err) == (
            "Illegal timer state: finish_subtimer not supported while paused"
        )
        assert err.state == TimerState.PAUSED
        assert err.operation == "finish_subtimer"

    def test_invalid_index(self):
        assert str(InvalidSubtimerIndex(7)) == "Invalid subtimer index: 7"

    def test_none_unexpected(self):
        assert str(NoneUnexpected("start_reference")) == (
            "'None' not expected: start_reference"
        )

    def test_subtimer_not_finished(self):
        assert str(SubTimerNotFinished()) == "SubTimer not finished"
