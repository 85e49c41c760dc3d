"""Process-wide cache registry for static data (pet catalog), resettable in tests."""
from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")

_CACHES: dict[str, Any] = {}


def get_cache_value(name: str, default_factory: Callable[[], T] | None = None) -> T:
    """Return the cached value for ``name``, building it with default_factory on a miss."""
    if name in _CACHES:
        return _CACHES[name]
    if default_factory is None:
        raise KeyError(f"Cache '{name}' not initialized")
    value = default_factory()
    _CACHES[name] = value
    return value


def clear_cache(name: str) -> None:
    _CACHES.pop(name, None)


def clear_all_caches() -> None:
    _CACHES.clear()
