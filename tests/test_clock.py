from __future__ import annotations

from lrumap.clock import RecencyClock


def test_clock_starts_at_start_value() -> None:
    assert RecencyClock().now == 0
    assert RecencyClock(start=10).now == 10


def test_advance_is_strictly_increasing() -> None:
    clock = RecencyClock()
    ticks = [clock.advance() for _ in range(100)]
    assert ticks == list(range(1, 101))
    assert clock.now == 100


def test_now_does_not_advance() -> None:
    clock = RecencyClock()
    clock.advance()
    assert clock.now == clock.now == 1
