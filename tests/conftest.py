"""Shared fixtures for the test suite."""
import pytest

from tetris_core.game.board import Board
from tetris_core.game.state import StateManager
from tests.helpers import FakeClock


@pytest.fixture
def clock():
    """Returns a FakeClock starting at 0 ms."""
    return FakeClock()


@pytest.fixture
def manager(clock):
    """Returns a seeded StateManager driven by the fake clock."""
    return StateManager(seed=1234, clock=clock)


@pytest.fixture
def empty_board():
    """Returns a new, empty 10x20 Board."""
    return Board()
