"""Logical clock used to stamp cache accesses."""

from __future__ import annotations

from typing import NewType

# A strictly increasing logical timestamp. Never reused within one clock.
Tick = NewType("Tick", int)


class RecencyClock:
    __slots__ = ("_now",)

    def __init__(self, start: int = 0) -> None:
        self._now = Tick(int(start))

    @property
    def now(self) -> Tick:
        """Return the most recently issued tick (or the start value)."""

        return self._now

    def advance(self) -> Tick:
        self._now = Tick(self._now + 1)
        return self._now

    def __repr__(self) -> str:
        return f"RecencyClock(now={self._now})"
