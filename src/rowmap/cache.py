"""
Process-wide catalog cache.

Catalogs are built lazily on first use per class and kept for the life of the
process. Uses a cachetools LRUCache whose bound is set when the singleton is
created or through ``Cache.configure``; lookups never change it. An evicted
catalog is rebuilt on its next lookup.
"""
import logging
import threading
from typing import Any

import cachetools
from rowmap.catalog import Catalog
from rowmap.options import MappingOptions, resolve_options

logger = logging.getLogger(__name__)

__all__ = ['Cache', 'get_catalog']


class Cache:
    """Catalog cache manager.

    Thread-safe singleton. Lookups and inserts for the same class from several
    threads build at most one catalog.
    """

    _instance = None
    _lock = threading.RLock()

    def __init__(self, maxsize: int = MappingOptions.cache_maxsize):
        self._catalogs: cachetools.LRUCache = cachetools.LRUCache(maxsize=maxsize)

    @classmethod
    def get_instance(cls) -> 'Cache':
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_catalog(self, mapped_type: type,
                    options: MappingOptions | dict[str, Any] | None = None) -> Catalog:
        """Return the cached catalog for ``mapped_type``, building it if needed.

        Args:
            mapped_type: Class to describe
            options: Mapping options; catalogs built with and without
                ``strict_keys`` are cached separately. ``cache_maxsize`` is
                not applied here, see ``configure``

        Returns
            Catalog instance shared by all callers
        """
        options = resolve_options(options)
        key = (mapped_type, options.strict_keys)
        with self._lock:
            catalog = self._catalogs.get(key)
            if catalog is not None:
                logger.debug(f'Cache hit for catalog {mapped_type.__qualname__}')
                return catalog
            logger.debug(f'Cache miss for catalog {mapped_type.__qualname__}')
            catalog = Catalog(mapped_type, options)
            self._catalogs[key] = catalog
            return catalog

    @property
    def maxsize(self) -> int:
        return self._catalogs.maxsize

    def configure(self, options: MappingOptions | dict[str, Any] | None = None) -> None:
        """Apply process-wide settings, currently the catalog cache bound.
        """
        self.resize(resolve_options(options).cache_maxsize)

    def resize(self, maxsize: int) -> None:
        """Replace the catalog store with one of a new size, keeping recent entries."""
        with self._lock:
            resized = cachetools.LRUCache(maxsize=maxsize)
            for key, catalog in list(self._catalogs.items())[-maxsize:]:
                resized[key] = catalog
            self._catalogs = resized

    def __contains__(self, mapped_type: object) -> bool:
        with self._lock:
            return any(key[0] is mapped_type for key in self._catalogs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._catalogs)

    def clear_all(self) -> None:
        """Clear all cached catalogs."""
        with self._lock:
            self._catalogs.clear()

    def clear_for_type(self, mapped_type: type) -> None:
        """Clear cached catalogs of one class."""
        with self._lock:
            for key in [key for key in self._catalogs if key[0] is mapped_type]:
                del self._catalogs[key]
                logger.debug(f'Cleared cached catalog {key}')


def get_catalog(mapped_type: type,
                options: MappingOptions | dict[str, Any] | None = None) -> Catalog:
    """Get the shared catalog for a class from the process-wide cache.
    """
    return Cache.get_instance().get_catalog(mapped_type, options)
