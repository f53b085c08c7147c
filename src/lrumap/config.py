"""Cache configuration loading.

This module is intentionally small and deterministic: it only reads
`lrumap.toml` and performs light validation.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lrumap.errors import LruMapConfigError

CONFIG_FILENAME = "lrumap.toml"


@dataclass(frozen=True)
class CacheConfig:
    capacity: int = 128
    name: str = "lrumap"


@dataclass(frozen=True)
class LruMapConfig:
    version: int
    cache: CacheConfig


def find_project_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `lrumap.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise LruMapConfigError(f"Could not find {CONFIG_FILENAME} by walking upward from start path.")


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise LruMapConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise LruMapConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise LruMapConfigError(f"Expected {name} to be a string.")
    return value


def parse_config(data: dict[str, Any]) -> LruMapConfig:
    """Validate an already-decoded TOML document."""

    version = data.get("version", None)
    if version is None:
        raise LruMapConfigError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise LruMapConfigError(f"Unsupported config version: {version_i} (expected 1).")

    cache_tbl = _as_table(data.get("cache"), name="cache")
    defaults = CacheConfig()

    if "capacity" in cache_tbl:
        capacity = _as_int(cache_tbl["capacity"], name="cache.capacity")
    else:
        capacity = defaults.capacity
    if capacity < 1:
        raise LruMapConfigError(f"cache.capacity must be >= 1 (got {capacity}).")

    if "name" in cache_tbl:
        name = _as_str(cache_tbl["name"], name="cache.name").strip()
        if not name:
            raise LruMapConfigError("cache.name must not be empty.")
    else:
        name = defaults.name

    return LruMapConfig(version=version_i, cache=CacheConfig(capacity=capacity, name=name))


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> LruMapConfig:
    """Load and validate `lrumap.toml`.

    If neither `root` nor `config_path` are provided, the project root is
    discovered by walking upward from the current working directory.
    """

    if config_path is None:
        if root is None:
            root = find_project_root(Path.cwd())
        config_path = root / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise LruMapConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise LruMapConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise LruMapConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise LruMapConfigError(f"Invalid TOML in {config_path}: {e}") from e

    return parse_config(data)
