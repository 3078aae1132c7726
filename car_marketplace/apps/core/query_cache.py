"""
Cached read queries on top of the Django cache framework.

A query is identified by a key tuple whose first element is its prefix,
e.g. ``('car', 5)`` or ``('cars', None)``. Invalidating a prefix bumps its
version so every cached entry under that prefix becomes unreachable.
"""

import logging
import time
from typing import Any, Callable, Hashable, Optional, Tuple

from django.conf import settings
from django.core.cache import cache as default_cache

logger = logging.getLogger(__name__)

_MISSING = object()


class QueryCache:
    """Cache query results for ``API_STALE_SECONDS`` (5 minutes by default)."""

    def __init__(self, backend=None, timeout: Optional[int] = None):
        self.backend = backend or default_cache
        self.timeout = settings.API_STALE_SECONDS if timeout is None else timeout

    @staticmethod
    def _version_key(prefix: str) -> str:
        return f"query-version:{prefix}"

    def _version(self, prefix: str) -> int:
        version_key = self._version_key(prefix)
        version = self.backend.get(version_key)
        if version is None:
            # Seed with a timestamp so an evicted counter never resurrects old entries.
            self.backend.add(version_key, time.time_ns(), None)
            version = self.backend.get(version_key)
        return version

    def make_key(self, key: Tuple[Hashable, ...]) -> str:
        prefix = str(key[0])
        parts = ':'.join('' if part is None else str(part) for part in key[1:])
        return f"query:{prefix}:{self._version(prefix)}:{parts}"

    def fetch(self, key: Tuple[Hashable, ...], fn: Callable[[], Any]) -> Any:
        cache_key = self.make_key(key)
        value = self.backend.get(cache_key, _MISSING)
        if value is not _MISSING:
            logger.debug(f"Query cache hit for {key}")
            return value

        value = fn()
        if self.timeout > 0:
            self.backend.set(cache_key, value, self.timeout)
        return value

    def invalidate(self, *prefixes: str) -> None:
        for prefix in prefixes:
            version_key = self._version_key(prefix)
            try:
                self.backend.incr(version_key)
            except ValueError:
                self.backend.set(version_key, time.time_ns(), None)
            logger.debug(f"Query cache invalidated for prefix {prefix!r}")
