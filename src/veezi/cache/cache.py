"""In-memory response caching keyed by endpoint identity.

Stores already-deserialized API results so a cache hit costs neither a
network call nor a re-parse.  Entries live in a :class:`cachetools.TLRUCache`
whose time-to-use function gives every entry the TTL of its route, so an
entry is valid while ``now - inserted_at < ttl``.  Expired entries are
purged when the cache is next read or written; there is no background
sweeper.

The cache is owned by a single :class:`~veezi.client.VeeziClient` and is
never shared between clients, so two clients with different access tokens
cannot see each other's data.

See Also:
    :class:`~veezi.models.CacheConfig` -- the Pydantic model that controls
    ``enabled``, ``ttl_seconds``, per-route ``route_ttls`` and
    ``max_entries``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from contextlib import contextmanager
from typing import Any, Iterator, NamedTuple, Optional

from cachetools import TLRUCache

from veezi.exceptions import CacheError
from veezi.models import CacheConfig

logger = logging.getLogger(__name__)


class EndpointKey(NamedTuple):
    """Identity of one API call: route template plus ordered parameter values.

    Parameter order is significant and no normalisation is applied, so
    ``EndpointKey("v1/session/{}", (1,))`` and
    ``EndpointKey("v1/session/{}", ("1",))`` are different keys.
    """

    route: str
    params: tuple[Any, ...] = ()


class CacheEntry(NamedTuple):
    """A cached value and the clock reading taken when it was stored."""

    value: Any
    inserted_at: float


class ResponseCache:
    """Thread-safe TTL cache for deserialized API responses.

    :class:`cachetools.TLRUCache` handles expiry and size bounds; it is not
    thread-safe, so every access goes through an internal lock.

    Args:
        config: Cache configuration (``enabled`` flag, default TTL,
            per-route overrides and ``max_entries``).
        clock: Returns the current time in seconds.  Defaults to
            :func:`time.monotonic`; tests pass a controllable clock.
        lock_timeout: Seconds to wait for the internal lock before raising
            :class:`~veezi.exceptions.CacheError`.

    Example::

        from veezi.cache import EndpointKey, ResponseCache
        from veezi.models import CacheConfig

        cache = ResponseCache(CacheConfig(enabled=True, ttl_seconds=60))
        key = EndpointKey("v1/session")
        cache.put(key, sessions)
        hit = cache.get(key)
    """

    def __init__(
        self,
        config: CacheConfig,
        clock: Callable[[], float] = time.monotonic,
        lock_timeout: float = 5.0,
    ) -> None:
        self._config = config
        self._clock = clock
        self._lock_timeout = lock_timeout
        self._entries: TLRUCache[EndpointKey, CacheEntry] = TLRUCache(
            maxsize=config.max_entries,
            ttu=self._expires_at,
            timer=clock,
        )
        self._lock = threading.Lock()

    def _expires_at(self, key: EndpointKey, entry: CacheEntry, now: float) -> float:
        return now + self.ttl_for(key.route)

    @property
    def config(self) -> CacheConfig:
        return self._config

    def ttl_for(self, route: str) -> float:
        """TTL in seconds applied to entries for *route*."""
        return self._config.ttl_for(route)

    def is_cacheable(self, route: str) -> bool:
        """Whether results for *route* are stored at all."""
        return self._config.enabled and self.ttl_for(route) > 0

    def get(self, key: EndpointKey) -> Optional[Any]:
        """Return the cached value for *key*, or ``None`` on a miss.

        An entry older than its route's TTL counts as a miss and is removed.
        """
        if not self.is_cacheable(key.route):
            return None

        with self._locked():
            self._entries.expire()
            entry = self._entries.get(key)

        if entry is None:
            logger.debug("Cache miss: %s %s", key.route, key.params)
            return None
        logger.debug("Cache hit: %s %s", key.route, key.params)
        return entry.value

    def put(self, key: EndpointKey, value: Any) -> None:
        """Store *value* under *key*, replacing any previous entry.

        Silently skipped when caching is disabled for the key's route.
        """
        if not self.is_cacheable(key.route):
            return

        with self._locked():
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())
        logger.debug("Cache store: %s %s", key.route, key.params)

    def invalidate(self, key: EndpointKey) -> None:
        """Remove the entry for *key*, if present."""
        with self._locked():
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove all entries from the cache."""
        with self._locked():
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``enabled`` (bool), and when enabled: ``policy``,
            ``size`` (live entries), ``max_entries``, ``ttl_seconds`` and
            ``route_ttls``.
        """
        if not self._config.enabled:
            return {"enabled": False}
        return {
            "enabled": True,
            "policy": self._config.policy.value,
            "size": len(self),
            "max_entries": self._config.max_entries,
            "ttl_seconds": self._config.ttl_seconds,
            "route_ttls": dict(self._config.route_ttls),
        }

    def __len__(self) -> int:
        with self._locked():
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        """True if *key* holds an entry that has not expired."""
        if not isinstance(key, EndpointKey):
            return False
        with self._locked():
            return key in self._entries

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Hold the entry lock, raising :class:`CacheError` on timeout."""
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise CacheError(
                f"Timed out after {self._lock_timeout}s waiting for the response cache lock"
            )
        try:
            yield
        finally:
            self._lock.release()
