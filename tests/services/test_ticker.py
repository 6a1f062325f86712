"""Tests for /netchess/services/ticker.py"""

from unittest.mock import Mock

from netchess.services.ticker import ClockTicker


def test_ticks_until_callback_returns_false() -> None:
    on_tick = Mock(side_effect=[True, True, False, True])
    ticker = ClockTicker(on_tick, period=0.01)
    ticker.start()
    ticker.join(timeout=2)

    assert not ticker.is_alive()
    assert on_tick.call_count == 3


def test_stop_ends_the_thread() -> None:
    on_tick = Mock(return_value=True)
    ticker = ClockTicker(on_tick, period=60)
    ticker.start()
    ticker.stop()
    ticker.join(timeout=2)

    assert not ticker.is_alive()
    on_tick.assert_not_called()


def test_ticker_is_a_daemon() -> None:
    ticker = ClockTicker(Mock(return_value=False))
    assert ticker.daemon
    assert ticker.name == "netchess-clock"
