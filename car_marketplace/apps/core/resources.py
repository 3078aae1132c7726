"""
Base class for the per-resource API wrappers.
"""

from .query_cache import QueryCache


class ApiResource:
    """Binds an ApiClient to a QueryCache for one REST resource."""

    def __init__(self, client, query_cache=None):
        self.client = client
        self.query_cache = query_cache or QueryCache()

    def query(self, key, fn):
        return self.query_cache.fetch(key, fn)

    def invalidate(self, *prefixes):
        self.query_cache.invalidate(*prefixes)
