"""Tests for simulated-time periodic timers."""

import pytest

from game.meteor.timers import PeriodicTimer


class Counter:
    def __init__(self):
        self.n = 0

    def __call__(self):
        self.n += 1


class TestPeriodicTimer:

    def test_fires_once_per_interval(self):
        c = Counter()
        t = PeriodicTimer(0.5, c)
        t.start()

        assert t.advance(0.25) == 0
        assert t.advance(0.25) == 1
        assert t.advance(1.0) == 2
        assert c.n == 3

    def test_not_started_ignores_time(self):
        c = Counter()
        t = PeriodicTimer(0.5, c)
        assert t.advance(10) == 0
        assert c.n == 0

    def test_stopped_timer_builds_no_backlog(self):
        c = Counter()
        t = PeriodicTimer(0.5, c)
        t.start()
        t.advance(0.4)
        t.stop()
        t.advance(100)
        t.start()

        assert t.advance(0.4) == 0
        assert c.n == 0

    def test_catchup_is_bounded(self):
        c = Counter()
        t = PeriodicTimer(0.1, c, max_catchup=3)
        t.start()

        assert t.advance(5.0) == 3
        # Remaining backlog was dropped
        assert t.advance(0.05) == 0

    def test_callback_can_stop_timer(self):
        t = None

        def stop():
            t.stop()

        t = PeriodicTimer(0.1, stop, max_catchup=10)
        t.start()
        assert t.advance(1.0) == 1
        assert not t.running

    def test_cancel_is_permanent(self):
        c = Counter()
        t = PeriodicTimer(0.1, c)
        t.start()
        t.cancel()
        t.start()

        assert not t.running
        assert t.advance(1.0) == 0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -1.0])
    def test_bad_elapsed_time_is_ignored(self, bad):
        c = Counter()
        t = PeriodicTimer(0.1, c)
        t.start()

        assert t.advance(bad) == 0
        # The timer still keeps time afterwards
        assert t.advance(0.1) == 1
        assert c.n == 1

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            PeriodicTimer(0, lambda: None)
