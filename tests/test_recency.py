from __future__ import annotations

import pytest

from lrumap.clock import Tick
from lrumap.recency import RecencyIndex


def _index(*keys: str) -> RecencyIndex[str]:
    idx: RecencyIndex[str] = RecencyIndex()
    for i, k in enumerate(keys, start=1):
        idx.push(k, Tick(i))
    return idx


def test_empty_index() -> None:
    idx: RecencyIndex[str] = RecencyIndex()
    assert len(idx) == 0
    assert idx.oldest() is None
    assert idx.newest() is None
    assert list(idx) == []


def test_push_keeps_tick_order() -> None:
    idx = _index("a", "b", "c")
    assert len(idx) == 3
    assert idx.keys() == ["a", "b", "c"]
    assert [m.tick for m in idx] == [1, 2, 3]
    assert idx.oldest().key == "a"  # type: ignore[union-attr]
    assert idx.newest().key == "c"  # type: ignore[union-attr]


def test_push_rejects_stale_tick() -> None:
    idx = _index("a", "b")
    with pytest.raises(ValueError):
        idx.push("c", Tick(2))
    assert idx.keys() == ["a", "b"]


def test_remove_middle_head_and_tail() -> None:
    idx: RecencyIndex[str] = RecencyIndex()
    a = idx.push("a", Tick(1))
    b = idx.push("b", Tick(2))
    c = idx.push("c", Tick(3))

    idx.remove(b)
    assert idx.keys() == ["a", "c"]
    assert not b.linked

    idx.remove(a)
    assert idx.oldest() is c
    idx.remove(c)
    assert len(idx) == 0
    assert idx.oldest() is None


def test_remove_unlinked_marker_raises() -> None:
    idx: RecencyIndex[str] = RecencyIndex()
    m = idx.push("a", Tick(1))
    idx.remove(m)
    with pytest.raises(ValueError):
        idx.remove(m)


def test_reinsert_after_remove_moves_to_newest() -> None:
    idx = _index("a", "b", "c")
    oldest = idx.oldest()
    assert oldest is not None
    idx.remove(oldest)
    idx.push("a", Tick(4))
    assert idx.keys() == ["b", "c", "a"]


def test_remove_marker_from_other_index_raises() -> None:
    a = _index("a")
    b = _index("b")
    foreign = a.oldest()
    assert foreign is not None

    with pytest.raises(ValueError, match="does not belong"):
        b.remove(foreign)
    assert len(a) == 1
    assert len(b) == 1
    assert a.keys() == ["a"]
    assert b.keys() == ["b"]
    assert foreign.linked


def test_removed_marker_is_not_linked() -> None:
    idx: RecencyIndex[str] = RecencyIndex()
    m = idx.push("a", Tick(1))
    assert m.linked
    assert m.owner is idx
    idx.remove(m)
    assert m.owner is None
