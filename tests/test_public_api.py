from __future__ import annotations

import lrumap


def test_version_is_a_string() -> None:
    assert isinstance(lrumap.__version__, str)
    assert lrumap.__version__


def test_exceptions_are_exported() -> None:
    from lrumap import (
        InvalidCapacityError,
        LruMapConfigError,
        LruMapError,
        LruMapInvariantError,
    )

    for exc in (LruMapError, InvalidCapacityError, LruMapConfigError, LruMapInvariantError):
        assert issubclass(exc, Exception)


def test_all_names_resolve() -> None:
    for name in lrumap.__all__:
        assert hasattr(lrumap, name), name


def test_cache_round_trip_through_package_namespace() -> None:
    cache: lrumap.LRUCache[str, int] = lrumap.LRUCache(2)
    cache.insert("a", 1)
    assert cache.get("a") == 1
