"""Capacity-bounded key-value cache with least-recently-used eviction.

The cache keeps two indexes in step:

- the value store, a dict mapping each key to its entry (value + marker);
- the recency index, markers ordered by the tick of their last access.

Every successful `get` and every `insert` stamps the touched key with a fresh
tick from the cache's clock. When an insert of a new key finds the cache
full, the marker with the smallest tick is evicted from both indexes before
the new entry is admitted.

Note that `get` is not read-only: a hit moves the key to the most recently
used position. Use `peek` to read without affecting eviction order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from lrumap.clock import RecencyClock
from lrumap.errors import InvalidCapacityError, LruMapInvariantError
from lrumap.recency import Marker, RecencyIndex

if TYPE_CHECKING:  # pragma: no cover
    from lrumap.config import CacheConfig

logger = logging.getLogger("lrumap.cache")

K = TypeVar("K")
V = TypeVar("V")
D = TypeVar("D")


@dataclass(slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    inserts: int = 0
    updates: int = 0
    evictions: int = 0

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total) if total else 0.0


@dataclass(slots=True)
class _Entry(Generic[K, V]):
    value: V
    marker: Marker[K]


def _validate_capacity(capacity: object) -> int:
    # bool is an int subclass; `LRUCache(True)` is almost certainly a bug.
    if not isinstance(capacity, int) or isinstance(capacity, bool):
        raise InvalidCapacityError(
            f"capacity must be a positive integer, got {type(capacity).__name__}"
        )
    if capacity < 1:
        raise InvalidCapacityError(f"capacity must be a positive integer, got {capacity}")
    return capacity


class LRUCache(Generic[K, V]):
    """A bounded mapping that evicts its least recently used entry when full.

    `get` and `insert` run in O(1) regardless of access pattern. The cache is
    not thread-safe; callers sharing one across threads must guard the whole
    object with a single lock.

    If `on_evict` is given it is called as ``on_evict(key, value)`` for every
    evicted entry, once the insert that displaced it has completed: the new
    entry is already stored and the cache is back at capacity. The callback
    may therefore use the cache itself. Exceptions from the callback
    propagate to the caller of `insert`; the new entry stays stored.
    """

    def __init__(
        self,
        capacity: int,
        *,
        on_evict: Callable[[K, V], object] | None = None,
        name: str = "lrumap",
    ) -> None:
        self._capacity = _validate_capacity(capacity)
        self._name = name
        self._on_evict = on_evict
        self._store: dict[K, _Entry[K, V]] = {}
        self._index: RecencyIndex[K] = RecencyIndex()
        self._clock = RecencyClock()
        self._stats = CacheStats()
        logger.debug("created cache %r with capacity %d", name, self._capacity)

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        *,
        on_evict: Callable[[K, V], object] | None = None,
    ) -> LRUCache[K, V]:
        return cls(config.capacity, on_evict=on_evict, name=config.name)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def name(self) -> str:
        return self._name

    @property
    def stats(self) -> CacheStats:
        """Live counters (hits/misses count `get` calls only)."""

        return self._stats

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        # Membership tests never refresh recency.
        return key in self._store

    def __repr__(self) -> str:
        return (
            f"LRUCache(name={self._name!r}, capacity={self._capacity}, "
            f"size={len(self._store)})"
        )

    def get(self, key: K, default: D | None = None) -> V | D | None:
        """Return the value for `key` and mark it most recently used.

        An absent key returns `default` and leaves the cache untouched.
        """

        entry = self._store.get(key)
        if entry is None:
            self._stats.misses += 1
            return default
        self._stats.hits += 1
        self._touch(entry)
        return entry.value

    def insert(self, key: K, value: V) -> V | None:
        """Store `value` under `key`, marking it most recently used.

        Returns the value previously stored under `key`, or None if the key
        was absent. Inserting a new key into a full cache first evicts the
        least recently used entry.
        """

        entry = self._store.get(key)
        if entry is not None:
            old = entry.value
            entry.value = value
            self._touch(entry)
            self._stats.updates += 1
            return old

        evicted = None
        if len(self._store) >= self._capacity:
            evicted = self._evict()

        marker = self._index.push(key, self._clock.advance())
        self._store[key] = _Entry(value=value, marker=marker)
        self._stats.inserts += 1

        if evicted is not None and self._on_evict is not None:
            self._on_evict(*evicted)
        return None

    def peek(self, key: K, default: D | None = None) -> V | D | None:
        """Return the value for `key` without refreshing its recency."""

        entry = self._store.get(key)
        if entry is None:
            return default
        return entry.value

    def lru_key(self) -> K | None:
        """Return the next eviction candidate, or None when empty."""

        marker = self._index.oldest()
        return None if marker is None else marker.key

    def mru_key(self) -> K | None:
        marker = self._index.newest()
        return None if marker is None else marker.key

    def keys(self) -> list[K]:
        """Snapshot of keys, least to most recently used."""

        return self._index.keys()

    def items(self) -> list[tuple[K, V]]:
        """Snapshot of (key, value) pairs, least to most recently used."""

        store = self._store
        return [(m.key, store[m.key].value) for m in self._index]

    def check_invariants(self) -> None:
        """Verify that both indexes agree; raise LruMapInvariantError if not."""

        store = self._store
        if len(store) > self._capacity:
            raise LruMapInvariantError(
                f"size {len(store)} exceeds capacity {self._capacity}"
            )
        if len(store) != len(self._index):
            raise LruMapInvariantError(
                f"value store has {len(store)} keys, recency index has {len(self._index)}"
            )

        last_tick = None
        for marker in self._index:
            entry = store.get(marker.key)
            if entry is None:
                raise LruMapInvariantError(f"recency index key {marker.key!r} not in store")
            if entry.marker is not marker:
                raise LruMapInvariantError(f"stale marker for key {marker.key!r}")
            if last_tick is not None and marker.tick <= last_tick:
                raise LruMapInvariantError(
                    f"ticks out of order at key {marker.key!r}: {marker.tick} <= {last_tick}"
                )
            last_tick = marker.tick

        if last_tick is not None and last_tick > self._clock.now:
            raise LruMapInvariantError(f"tick {last_tick} is ahead of clock {self._clock.now}")

    def _touch(self, entry: _Entry[K, V]) -> None:
        old = entry.marker
        self._index.remove(old)
        entry.marker = self._index.push(old.key, self._clock.advance())

    def _evict(self) -> tuple[K, V]:
        marker = self._index.oldest()
        assert marker is not None
        self._index.remove(marker)
        entry = self._store.pop(marker.key)
        self._stats.evictions += 1
        logger.debug(
            "cache %r evicted %r (tick %d, size %d/%d)",
            self._name,
            marker.key,
            marker.tick,
            len(self._store),
            self._capacity,
        )
        return marker.key, entry.value
