"""Recency index: markers ordered from least to most recently used.

Markers live in an intrusive doubly linked list. A new marker always carries
the newest tick, so appending at the tail keeps the list sorted by tick and
every operation stays O(1): the oldest marker is the head, and a marker is
unlinked through its own neighbour references.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from lrumap.clock import Tick

K = TypeVar("K")


@dataclass(eq=False, slots=True)
class Marker(Generic[K]):
    key: K
    tick: Tick
    prev: Marker[K] | None = field(default=None, repr=False)
    next: Marker[K] | None = field(default=None, repr=False)
    # Index currently holding this marker; None once removed.
    owner: RecencyIndex[K] | None = field(default=None, repr=False)

    @property
    def linked(self) -> bool:
        return self.owner is not None


class RecencyIndex(Generic[K]):
    """Tick-ordered markers with O(1) push, remove and oldest lookup."""

    __slots__ = ("_root", "_len")

    def __init__(self) -> None:
        # Sentinel: root.next is the oldest marker, root.prev the newest.
        root: Marker[K] = Marker(key=None, tick=Tick(-1))  # type: ignore[arg-type]
        root.prev = root
        root.next = root
        self._root = root
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Marker[K]]:
        """Iterate markers from oldest to newest."""

        root = self._root
        cur = root.next
        while cur is not root:
            assert cur is not None
            yield cur
            cur = cur.next

    def keys(self) -> list[K]:
        return [m.key for m in self]

    def oldest(self) -> Marker[K] | None:
        if not self._len:
            return None
        return self._root.next

    def newest(self) -> Marker[K] | None:
        if not self._len:
            return None
        return self._root.prev

    def push(self, key: K, tick: Tick) -> Marker[K]:
        """Append a marker for `key` stamped with `tick` (must be the newest)."""

        root = self._root
        last = root.prev
        assert last is not None
        if self._len and tick <= last.tick:
            raise ValueError(f"tick {tick} is not newer than {last.tick}")

        marker: Marker[K] = Marker(key=key, tick=tick, prev=last, next=root, owner=self)
        last.next = marker
        root.prev = marker
        self._len += 1
        return marker

    def remove(self, marker: Marker[K]) -> None:
        """Unlink `marker`; it must currently belong to this index."""

        if marker.owner is not self:
            raise ValueError(f"marker does not belong to this index: {marker!r}")

        prev, nxt = marker.prev, marker.next
        assert prev is not None and nxt is not None
        prev.next = nxt
        nxt.prev = prev
        marker.prev = None
        marker.next = None
        marker.owner = None
        self._len -= 1
