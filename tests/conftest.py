"""Shared test fixtures for veezi.

Provides raw JSON payloads loaded from ``tests/fixtures``, factories for
domain records, a controllable clock for cache tests, and a counting fake
executor that stands in for the HTTP layer.  These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from veezi.client import ClientBuilder, Route
from veezi.domain import Film, Session


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load(name: str) -> Any:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeExecutor:
    """Executor double that serves canned bodies and records every call.

    ``responses`` maps a :class:`Route` to either a JSON body, an exception
    instance to raise, or a callable taking the params tuple.
    """

    def __init__(self, responses: dict[Route, Any] | None = None) -> None:
        self.responses: dict[Route, Any] = dict(responses or {})
        self.calls: list[tuple[Route, tuple[Any, ...]]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def calls_for(self, route: Route) -> int:
        return sum(1 for called, _ in self.calls if called is route)

    async def execute(self, route: Route, params: tuple[Any, ...] = ()) -> Any:
        self.calls.append((route, params))
        body = self.responses[route]
        if isinstance(body, Exception):
            raise body
        if callable(body):
            return body(params)
        return copy.deepcopy(body)

    async def aclose(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Raw payload fixtures (plain JSON loaded from files)
# ---------------------------------------------------------------------------


@pytest.fixture
def sessions_raw() -> list[dict[str, Any]]:
    return _load("sessions.json")


@pytest.fixture
def films_raw() -> list[dict[str, Any]]:
    return _load("films.json")


@pytest.fixture
def site_raw() -> dict[str, Any]:
    return _load("site.json")


@pytest.fixture
def film_packages_raw() -> list[dict[str, Any]]:
    return _load("film_packages.json")


@pytest.fixture
def screens_raw() -> list[dict[str, Any]]:
    return _load("screens.json")


@pytest.fixture
def attributes_raw() -> list[dict[str, Any]]:
    return _load("attributes.json")


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_session(sessions_raw: list[dict[str, Any]]) -> Callable[..., Session]:
    """Build a :class:`Session` from the first fixture payload with overrides.

    Overrides use the API's PascalCase keys, e.g.
    ``make_session(Id=5, PreShowStartTime="2026-10-21T10:00:00")``.
    """

    def _make(**overrides: Any) -> Session:
        payload = copy.deepcopy(sessions_raw[0])
        payload.update(overrides)
        return Session.model_validate(payload)

    return _make


@pytest.fixture
def make_film(films_raw: list[dict[str, Any]]) -> Callable[..., Film]:
    """Build a :class:`Film` from the first fixture payload with PascalCase overrides."""

    def _make(**overrides: Any) -> Film:
        payload = copy.deepcopy(films_raw[0])
        payload.update(overrides)
        return Film.model_validate(payload)

    return _make


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def fake_executor(
    sessions_raw: list[dict[str, Any]],
    films_raw: list[dict[str, Any]],
    site_raw: dict[str, Any],
    film_packages_raw: list[dict[str, Any]],
    screens_raw: list[dict[str, Any]],
    attributes_raw: list[dict[str, Any]],
) -> FakeExecutor:
    """A fake executor answering every route from the JSON fixtures."""
    sessions_by_id = {s["Id"]: s for s in sessions_raw}
    films_by_id = {f["Id"]: f for f in films_raw}
    packages_by_id = {p["Id"]: p for p in film_packages_raw}
    screens_by_id = {s["Id"]: s for s in screens_raw}
    attributes_by_id = {a["Id"]: a for a in attributes_raw}

    return FakeExecutor(
        {
            Route.SESSIONS: sessions_raw,
            Route.WEB_SESSIONS: [s for s in sessions_raw if "WWW" in s["SalesVia"]],
            Route.SESSION: lambda params: sessions_by_id[params[0]],
            Route.FILMS: films_raw,
            Route.FILM: lambda params: films_by_id[params[0]],
            Route.FILM_PACKAGES: film_packages_raw,
            Route.FILM_PACKAGE: lambda params: packages_by_id[params[0]],
            Route.SCREENS: screens_raw,
            Route.SCREEN: lambda params: screens_by_id[params[0]],
            Route.SITE: site_raw,
            Route.ATTRIBUTES: attributes_raw,
            Route.ATTRIBUTE: lambda params: attributes_by_id[params[0]],
        }
    )


@pytest.fixture
def builder(fake_executor: FakeExecutor, clock: ManualClock) -> ClientBuilder:
    """A valid builder wired to the fake executor and manual clock (no caching)."""
    return (
        ClientBuilder()
        .with_base_url("https://api.example.com/")
        .with_api_key("test-key")
        .with_executor(fake_executor)
        .with_clock(clock)
    )
