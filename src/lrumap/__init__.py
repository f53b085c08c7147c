from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from lrumap.cache import CacheStats, LRUCache
from lrumap.clock import RecencyClock, Tick
from lrumap.config import CacheConfig, LruMapConfig, load_config
from lrumap.errors import (
    InvalidCapacityError,
    LruMapConfigError,
    LruMapError,
    LruMapInvariantError,
)
from lrumap.recency import Marker, RecencyIndex


def _package_version() -> str:
    try:
        return version("lrumap")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "__version__",
    "CacheConfig",
    "CacheStats",
    "InvalidCapacityError",
    "LRUCache",
    "LruMapConfig",
    "LruMapConfigError",
    "LruMapError",
    "LruMapInvariantError",
    "Marker",
    "RecencyClock",
    "RecencyIndex",
    "Tick",
    "load_config",
]
