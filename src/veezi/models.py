"""Pydantic configuration models for the Veezi client.

These models describe how a :class:`~veezi.client.VeeziClient` talks to the
API and how it caches responses.  They are assembled step by step by
:class:`~veezi.client.ClientBuilder` and validated once in
:meth:`~veezi.client.ClientBuilder.build`.

Domain records (sessions, films, ...) live in :mod:`veezi.domain`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

#: Base URL of the US Veezi API region.
DEFAULT_BASE_URL = "https://api.us.veezi.com/"

#: TTL applied by :meth:`~veezi.client.ClientBuilder.with_default_caching`.
DEFAULT_CACHE_TTL = 300.0

#: Default bound on the number of cached responses per client.
DEFAULT_CACHE_MAX_ENTRIES = 1024


class CachePolicy(str, enum.Enum):
    """The caching behaviour a :class:`CacheConfig` resolves to."""

    DISABLED = "disabled"
    DEFAULT_TTL = "default_ttl"
    CUSTOM_TTL = "custom_ttl"
    PER_ROUTE = "per_route"


class CacheConfig(BaseModel):
    """Response cache settings.

    ``route_ttls`` maps a route template (e.g. ``"v4/film"``) to its own TTL
    in seconds.  Routes without an override use ``ttl_seconds``.  A TTL of
    ``0`` turns caching off for that route only.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Enable response caching")
    ttl_seconds: float = Field(
        default=DEFAULT_CACHE_TTL, description="Default cache TTL in seconds"
    )
    route_ttls: dict[str, float] = Field(
        default_factory=dict, description="Per-route TTL overrides in seconds"
    )
    max_entries: int = Field(
        default=DEFAULT_CACHE_MAX_ENTRIES,
        description="Upper bound on live entries; the least recently used is evicted first",
    )

    @property
    def policy(self) -> CachePolicy:
        if not self.enabled:
            return CachePolicy.DISABLED
        if self.route_ttls:
            return CachePolicy.PER_ROUTE
        if self.ttl_seconds == DEFAULT_CACHE_TTL:
            return CachePolicy.DEFAULT_TTL
        return CachePolicy.CUSTOM_TTL

    def ttl_for(self, route: str) -> float:
        """Return the TTL in seconds that applies to *route*."""
        return self.route_ttls.get(route, self.ttl_seconds)


class RequestConfig(BaseModel):
    """HTTP settings applied to every API call made by a client."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class ClientConfig(BaseModel):
    """Everything needed to construct a :class:`~veezi.client.VeeziClient`.

    Example::

        ClientConfig(
            base_url="https://api.us.veezi.com/",
            api_key="secret",
            cache=CacheConfig(enabled=True, ttl_seconds=60),
        )
    """

    model_config = ConfigDict(frozen=True)

    base_url: Optional[str] = Field(default=None, description="API base URL")
    api_key: Optional[str] = Field(
        default=None,
        repr=False,
        description="Value sent in the VeeziAccessToken header",
    )
    cache: CacheConfig = Field(default_factory=CacheConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)
