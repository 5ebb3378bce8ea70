"""Fluent construction of :class:`~veezi.client.client.VeeziClient` instances.

:class:`ClientBuilder` is immutable: every ``with_*`` call returns a new
builder and leaves the original untouched, so a partially configured
builder can be shared and specialised safely.  Nothing is validated until
:meth:`ClientBuilder.build`, which raises
:class:`~veezi.exceptions.ConfigurationError` before any network activity.

Example::

    client = (
        ClientBuilder()
        .with_base_url("https://api.us.veezi.com/")
        .with_api_key("secret")
        .with_default_caching()
        .with_route_ttl(Route.SESSIONS, 30)
        .build()
    )
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Optional, Union

import httpx

from veezi.cache import ResponseCache
from veezi.client.client import VeeziClient
from veezi.client.executor import Executor, HttpExecutor
from veezi.client.routes import Route
from veezi.exceptions import ConfigurationError
from veezi.models import DEFAULT_CACHE_TTL, ClientConfig

Duration = Union[float, int, timedelta]


def _seconds(value: Duration) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


class ClientBuilder:
    """Accumulates client settings and builds a validated :class:`VeeziClient`.

    Args:
        config: Starting configuration.  Defaults to an empty
            :class:`~veezi.models.ClientConfig` with caching disabled.
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self._config = config or ClientConfig()
        self._http_client: Optional[httpx.AsyncClient] = None
        self._executor: Optional[Executor] = None
        self._clock: Callable[[], float] = time.monotonic

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> ClientBuilder:
        """Start from ``VEEZI_*`` environment variables.

        See :func:`veezi.config.load_config_from_env` for the variables read.
        """
        from veezi.config import load_config_from_env

        return cls(load_config_from_env(environ))

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _replace(self, **changes: Any) -> ClientBuilder:
        clone = ClientBuilder.__new__(ClientBuilder)
        clone._config = self._config
        clone._http_client = self._http_client
        clone._executor = self._executor
        clone._clock = self._clock
        for name, value in changes.items():
            setattr(clone, f"_{name}", value)
        return clone

    def _update_config(self, **changes: Any) -> ClientBuilder:
        return self._replace(config=self._config.model_copy(update=changes))

    def _update_cache(self, **changes: Any) -> ClientBuilder:
        return self._update_config(cache=self._config.cache.model_copy(update=changes))

    # ------------------------------------------------------------------ #
    # Connection
    # ------------------------------------------------------------------ #

    def with_base_url(self, base_url: str) -> ClientBuilder:
        return self._update_config(base_url=base_url)

    def with_api_key(self, api_key: str) -> ClientBuilder:
        return self._update_config(api_key=api_key)

    def with_timeout(self, timeout: Duration) -> ClientBuilder:
        request = self._config.request.model_copy(update={"timeout": _seconds(timeout)})
        return self._update_config(request=request)

    def with_http_client(self, http_client: httpx.AsyncClient) -> ClientBuilder:
        """Use a caller-owned :class:`httpx.AsyncClient` (not closed by the client)."""
        return self._replace(http_client=http_client)

    def with_executor(self, executor: Executor) -> ClientBuilder:
        """Replace the HTTP executor entirely (e.g. with a test double)."""
        return self._replace(executor=executor)

    # ------------------------------------------------------------------ #
    # Caching
    # ------------------------------------------------------------------ #

    def with_default_caching(self) -> ClientBuilder:
        """Enable caching with :data:`~veezi.models.DEFAULT_CACHE_TTL` (300 seconds)."""
        return self._update_cache(enabled=True, ttl_seconds=DEFAULT_CACHE_TTL)

    def with_caching(self, ttl: Duration = DEFAULT_CACHE_TTL) -> ClientBuilder:
        """Enable caching with a custom default TTL."""
        return self._update_cache(enabled=True, ttl_seconds=_seconds(ttl))

    def with_route_ttl(self, route: Union[Route, str], ttl: Duration) -> ClientBuilder:
        """Enable caching and override the TTL for one route.

        A TTL of ``0`` disables caching for that route only.  *route* may be
        a :class:`Route` or its template string, e.g. ``"v4/film"``.

        Raises:
            ConfigurationError: If *route* is not a known route template.
        """
        if not isinstance(route, Route):
            try:
                route = Route(route)
            except ValueError:
                known = ", ".join(member.template for member in Route)
                raise ConfigurationError(
                    f"Unknown route {route!r}; expected one of: {known}"
                ) from None
        route_ttls = {**self._config.cache.route_ttls, route.template: _seconds(ttl)}
        return self._update_cache(enabled=True, route_ttls=route_ttls)

    def with_max_entries(self, max_entries: int) -> ClientBuilder:
        """Bound the number of responses the cache holds at once."""
        return self._update_cache(max_entries=max_entries)

    def without_caching(self) -> ClientBuilder:
        return self._update_cache(enabled=False)

    def with_clock(self, clock: Callable[[], float]) -> ClientBuilder:
        """Clock used by the response cache (defaults to :func:`time.monotonic`)."""
        return self._replace(clock=clock)

    # ------------------------------------------------------------------ #
    # Build
    # ------------------------------------------------------------------ #

    def validate(self) -> None:
        """Check the accumulated settings.

        Raises:
            ConfigurationError: If the base URL or API key is missing or
                malformed, a TTL / timeout is negative, or the cache size
                bound is not positive.
        """
        config = self._config
        if not config.base_url or not config.base_url.strip():
            raise ConfigurationError("A base URL is required")
        try:
            url = httpx.URL(config.base_url.strip())
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Invalid base URL {config.base_url!r}: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(
                f"Base URL must be an absolute http(s) URL, got {config.base_url!r}"
            )
        if not config.api_key or not config.api_key.strip():
            raise ConfigurationError("An API key is required")
        if config.request.timeout <= 0:
            raise ConfigurationError("Timeout must be positive")
        if config.cache.ttl_seconds < 0:
            raise ConfigurationError("Cache TTL must not be negative")
        for route, ttl in config.cache.route_ttls.items():
            if ttl < 0:
                raise ConfigurationError(f"Cache TTL for {route!r} must not be negative")
        if config.cache.max_entries <= 0:
            raise ConfigurationError("Cache max_entries must be positive")

    def build(self) -> VeeziClient:
        """Validate the settings and construct the client.

        Raises:
            ConfigurationError: See :meth:`validate`.
        """
        self.validate()
        config = self._config
        assert config.base_url is not None and config.api_key is not None

        executor = self._executor or HttpExecutor(
            base_url=config.base_url.strip(),
            api_key=config.api_key.strip(),
            request_config=config.request,
            http_client=self._http_client,
        )
        cache = ResponseCache(config.cache, clock=self._clock) if config.cache.enabled else None
        return VeeziClient(executor, cache)
