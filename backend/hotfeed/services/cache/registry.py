"""Registry of cache backends. Add new backends here."""
import logging
from typing import Any, Callable

from hotfeed.services.cache.backends import CacheBackend, MemoryBackend, SqlCacheBackend

logger = logging.getLogger(__name__)

_factories: dict[str, Callable[..., CacheBackend]] = {}


def register(name: str, factory: Callable[..., CacheBackend]) -> None:
    """Register a backend factory (e.g. 'memory', 'sql')."""
    _factories[name] = factory
    logger.debug("Registered cache backend: %s", name)


def create_backend(name: str, **kwargs: Any) -> CacheBackend:
    """Build a new backend by name. Raises KeyError if unknown."""
    if name not in _factories:
        raise KeyError(f"Unknown cache backend: {name}. Available: {list(_factories.keys())}")
    return _factories[name](**kwargs)


def list_backends() -> list[str]:
    """List registered backend ids."""
    return list(_factories.keys())


def _init_registry() -> None:
    register("memory", MemoryBackend)
    register("sql", SqlCacheBackend)


# Register built-in backends on first import
_init_registry()
