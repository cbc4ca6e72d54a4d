"""testing drop / lock-delay timing"""
import pytest

from tetris_core.game.timing import LOCK_DELAY_MS, DropTimer, TickResult


class Recorder:
    """Stands in for the state manager's step_down / lock callbacks."""

    def __init__(self, can_drop=True):
        self.can_drop = can_drop
        self.drops = 0
        self.locks = 0

    def step_down(self):
        self.drops += 1
        return self.can_drop

    def lock(self):
        self.locks += 1


@pytest.fixture
def timer():
    """Returns a level-1 DropTimer started at 0 ms."""
    return DropTimer(now=0)


class TestDropTimer:
    """Tests for the two-timer state machine."""

    def test_initial_state(self, timer):
        assert timer.drop_speed == 1000
        assert timer.lock_delay == LOCK_DELAY_MS == 500
        assert timer.last_drop_time == 0
        assert timer.lock_delay_start is None
        assert not timer.lock_delay_running

    def test_idle_before_drop_is_due(self, timer):
        rec = Recorder()
        assert timer.advance(999, rec.step_down, rec.lock) is TickResult.IDLE
        assert rec.drops == 0

    def test_drop_when_due(self, timer):
        rec = Recorder()
        assert timer.advance(1000, rec.step_down, rec.lock) is TickResult.DROPPED
        assert rec.drops == 1
        assert timer.last_drop_time == 1000

    def test_blocked_drop_starts_lock_delay(self, timer):
        rec = Recorder(can_drop=False)
        assert timer.advance(1000, rec.step_down, rec.lock) is TickResult.LOCK_PENDING
        assert timer.lock_delay_start == 1000
        # The drop reference does not move while blocked
        assert timer.last_drop_time == 0

    def test_lock_delay_start_is_not_restarted(self, timer):
        rec = Recorder(can_drop=False)
        timer.advance(1000, rec.step_down, rec.lock)
        assert timer.advance(1300, rec.step_down, rec.lock) is TickResult.LOCK_PENDING
        assert timer.lock_delay_start == 1000

    def test_lock_after_delay(self, timer):
        """The piece locks once 500 ms have passed since the delay started."""
        rec = Recorder(can_drop=False)
        timer.advance(1000, rec.step_down, rec.lock)
        timer.advance(1499, rec.step_down, rec.lock)
        assert rec.locks == 0
        assert timer.advance(1500, rec.step_down, rec.lock) is TickResult.LOCKED
        assert rec.locks == 1
        assert timer.last_drop_time == 1500
        assert timer.lock_delay_start is None

    def test_expired_lock_wins_over_due_drop(self, timer):
        """On a tick where both are due, only the lock happens."""
        rec = Recorder(can_drop=False)
        timer.advance(1000, rec.step_down, rec.lock)
        drops_before = rec.drops
        assert timer.drop_due(5000)
        assert timer.advance(5000, rec.step_down, rec.lock) is TickResult.LOCKED
        assert rec.drops == drops_before

    def test_successful_drop_clears_lock_delay(self, timer):
        rec = Recorder(can_drop=False)
        timer.advance(1000, rec.step_down, rec.lock)
        rec.can_drop = True
        assert timer.advance(1200, rec.step_down, rec.lock) is TickResult.DROPPED
        assert timer.lock_delay_start is None

    def test_set_level_changes_speed(self, timer):
        timer.set_level(4)
        assert timer.drop_speed == 700
        timer.set_level(15)
        assert timer.drop_speed == 100

    def test_pause_and_resume(self, timer):
        """Resume restarts gravity and keeps the lock delay's remaining time."""
        rec = Recorder(can_drop=False)
        timer.advance(1000, rec.step_down, rec.lock)
        timer.pause(1200)
        timer.resume(5000)
        assert timer.last_drop_time == 5000
        assert timer.lock_delay_start == 4800
        assert timer.advance(5299, rec.step_down, rec.lock) is TickResult.IDLE
        assert timer.advance(5300, rec.step_down, rec.lock) is TickResult.LOCKED
