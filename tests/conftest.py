"""Shared pytest fixtures for phasetimer tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from phasetimer.timer.engine import Timer

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(qapp, clock):
    """Fresh Timer driven by the fake clock."""
    return Timer(parent=None, clock=clock)


@pytest.fixture
def timer_with_subtimers(timer):
    """Timer in INIT with two subtimers declared."""
    timer.add_subtimer()
    timer.add_subtimer()
    return timer
