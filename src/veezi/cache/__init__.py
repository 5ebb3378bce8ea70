"""In-memory response caching for veezi.

This package provides :class:`ResponseCache`, a per-client TTL cache that
stores deserialized API results keyed by :class:`EndpointKey` (route
template plus ordered parameters).  Nothing is written to disk.

The cache is consumed by :class:`~veezi.client.VeeziClient` and is
controlled by :class:`~veezi.models.CacheConfig`.
"""

from veezi.cache.cache import CacheEntry, EndpointKey, ResponseCache

__all__ = ["CacheEntry", "EndpointKey", "ResponseCache"]
