"""The Veezi API client.

:class:`VeeziClient` is the single entry point for callers.  It exposes one
coroutine per upstream operation and runs every call through the same
pipeline:

1. derive the :class:`~veezi.cache.EndpointKey` from route and parameters,
2. return the cached, already-typed value on a hit,
3. otherwise ask the executor for the JSON body,
4. decode it into domain records (a failure is raised and nothing is cached),
5. store the decoded value and return it.

Convenience methods such as :meth:`VeeziClient.list_sessions_today` are thin
compositions of a primitive list call and a query filter, so they share the
primitive's cache entry.

Build clients with :class:`~veezi.client.builder.ClientBuilder`::

    client = (
        ClientBuilder()
        .with_base_url("https://api.us.veezi.com/")
        .with_api_key(token)
        .with_default_caching()
        .build()
    )
    async with client:
        sessions = await client.list_sessions_today()
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from veezi.cache import EndpointKey, ResponseCache
from veezi.client.executor import Executor
from veezi.client.routes import Route
from veezi.domain import Attribute, Film, FilmPackage, Screen, Session, Site
from veezi.exceptions import DeserializationError
from veezi.query import FilmList, RecordList, SessionList

logger = logging.getLogger(__name__)

R = TypeVar("R")

_SESSIONS = TypeAdapter(list[Session])
_FILMS = TypeAdapter(list[Film])
_FILM_PACKAGES = TypeAdapter(list[FilmPackage])
_SCREENS = TypeAdapter(list[Screen])
_ATTRIBUTES = TypeAdapter(list[Attribute])


class VeeziClient:
    """Asynchronous, typed client for the Veezi API.

    Every method either returns decoded records or raises a
    :class:`~veezi.exceptions.VeeziError` subclass:
    :class:`~veezi.exceptions.TransportError` for network failures and
    non-2xx responses, :class:`~veezi.exceptions.DeserializationError` for
    bodies that do not match the expected schema.

    Args:
        executor: Performs the HTTP calls.
        cache: Response cache owned by this client, or ``None`` to always
            call the executor.
    """

    def __init__(self, executor: Executor, cache: Optional[ResponseCache] = None) -> None:
        self._executor = executor
        self._cache = cache

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> VeeziClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the executor's HTTP resources, if it holds any."""
        close = getattr(self._executor, "aclose", None)
        if close is not None:
            await close()

    # ------------------------------------------------------------------ #
    # Cache management
    # ------------------------------------------------------------------ #

    @property
    def caching_enabled(self) -> bool:
        return self._cache is not None and self._cache.config.enabled

    def invalidate(self, route: Route, *params: Any) -> None:
        """Drop the cached result for *route* called with *params*."""
        if self._cache is not None:
            self._cache.invalidate(EndpointKey(route.template, params))

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def cache_stats(self) -> dict[str, Any]:
        if self._cache is None:
            return {"enabled": False}
        return self._cache.stats()

    # ------------------------------------------------------------------ #
    # Sessions
    # ------------------------------------------------------------------ #

    async def list_sessions(self) -> SessionList:
        """All future sessions."""
        return await self._fetch(
            Route.SESSIONS, (), lambda body: SessionList(_SESSIONS.validate_python(body))
        )

    async def list_web_sessions(self) -> SessionList:
        """All future sessions that should be available for online sales.

        The API only returns sessions whose sales cut-off is in the future,
        whose status is open, whose show type is public and which sell
        through the ``WWW`` channel.
        """
        return await self._fetch(
            Route.WEB_SESSIONS, (), lambda body: SessionList(_SESSIONS.validate_python(body))
        )

    async def get_session(self, session_id: int) -> Session:
        return await self._fetch(Route.SESSION, (session_id,), Session.model_validate)

    async def list_sessions_today(self, today: Optional[date] = None) -> SessionList:
        """Sessions starting today (or on *today*, when given)."""
        return (await self.list_sessions()).filter_today(today)

    async def list_open_sessions(self, now: Optional[datetime] = None) -> SessionList:
        """Sessions for which tickets can still be sold."""
        return (await self.list_sessions()).filter_open_for_sales(now)

    async def list_sessions_for_film(self, film_id: str) -> SessionList:
        return (await self.list_sessions()).filter_by_film(film_id)

    async def list_sessions_for_screen(self, screen_id: int) -> SessionList:
        return (await self.list_sessions()).filter_by_screen(screen_id)

    async def list_sessions_with_attribute(self, attribute_id: str) -> SessionList:
        return (await self.list_sessions()).filter_containing_attribute(attribute_id)

    # ------------------------------------------------------------------ #
    # Films and packages
    # ------------------------------------------------------------------ #

    async def list_films(self) -> FilmList:
        """Every film in the Veezi system."""
        return await self._fetch(
            Route.FILMS, (), lambda body: FilmList(_FILMS.validate_python(body))
        )

    async def get_film(self, film_id: str) -> Film:
        return await self._fetch(Route.FILM, (film_id,), Film.model_validate)

    async def list_active_films(self) -> FilmList:
        return (await self.list_films()).filter_active()

    async def list_film_packages(self) -> RecordList[FilmPackage]:
        return await self._fetch(
            Route.FILM_PACKAGES,
            (),
            lambda body: RecordList(_FILM_PACKAGES.validate_python(body)),
        )

    async def get_film_package(self, package_id: int) -> FilmPackage:
        return await self._fetch(Route.FILM_PACKAGE, (package_id,), FilmPackage.model_validate)

    # ------------------------------------------------------------------ #
    # Site, screens and attributes
    # ------------------------------------------------------------------ #

    async def list_screens(self) -> RecordList[Screen]:
        """Every screen of the current site."""
        return await self._fetch(
            Route.SCREENS, (), lambda body: RecordList(_SCREENS.validate_python(body))
        )

    async def get_screen(self, screen_id: int) -> Screen:
        return await self._fetch(Route.SCREEN, (screen_id,), Screen.model_validate)

    async def get_site(self) -> Site:
        """Details of the site the access token belongs to."""
        return await self._fetch(Route.SITE, (), Site.model_validate)

    async def list_attributes(self) -> RecordList[Attribute]:
        return await self._fetch(
            Route.ATTRIBUTES, (), lambda body: RecordList(_ATTRIBUTES.validate_python(body))
        )

    async def get_attribute(self, attribute_id: str) -> Attribute:
        return await self._fetch(Route.ATTRIBUTE, (attribute_id,), Attribute.model_validate)

    # ------------------------------------------------------------------ #
    # Pipeline
    # ------------------------------------------------------------------ #

    async def _fetch(
        self, route: Route, params: tuple[Any, ...], decode: Callable[[Any], R]
    ) -> R:
        """Serve *route* from the cache, or fetch, decode and cache it."""
        key = EndpointKey(route.template, params)

        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        body = await self._executor.execute(route, params)

        try:
            value = decode(body)
        except ValidationError as exc:
            logger.debug("Failed to decode %s %s: %s", route.template, params, exc)
            raise DeserializationError(
                f"Response for {route.template} does not match the expected schema: "
                f"{exc.error_count()} validation error(s)",
                cause=exc,
            ) from exc

        if self._cache is not None:
            self._cache.put(key, value)
        return value
