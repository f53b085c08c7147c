"""lrumap exception hierarchy.

Keep this module small and dependency-free: it is imported broadly across the
package and by tests.
"""


class LruMapError(Exception):
    """Base exception for all lrumap errors."""


class InvalidCapacityError(LruMapError, ValueError):
    """Raised when a cache is constructed with a non-positive capacity."""


class LruMapConfigError(LruMapError):
    """Raised for invalid user configuration."""


class LruMapInvariantError(LruMapError):
    """Raised when the value store and recency index disagree."""
