"""HTTP executor -- the only component that talks to the network.

:class:`HttpExecutor` wraps an :class:`httpx.AsyncClient` and performs one
authenticated ``GET`` per call to :meth:`~HttpExecutor.execute`.  It adds
the base URL, the ``VeeziAccessToken`` header and JSON decoding, and maps
failures onto :mod:`veezi.exceptions`.  It never retries and never caches;
both concerns belong to the caller.

Anything with an async ``execute(route, params)`` method satisfies the
:class:`Executor` protocol and can be handed to
:class:`~veezi.client.VeeziClient` instead.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from veezi.client.routes import Route
from veezi.exceptions import (
    AuthError,
    ConnectionError_,
    DeserializationError,
    NotFoundError,
    ServerError,
    TransportError,
)
from veezi.models import RequestConfig

logger = logging.getLogger(__name__)

AUTH_HEADER = "VeeziAccessToken"


@runtime_checkable
class Executor(Protocol):
    """Performs a single API call and returns the decoded JSON body."""

    async def execute(self, route: Route, params: tuple[Any, ...] = ()) -> Any: ...


class HttpExecutor:
    """Executor backed by :class:`httpx.AsyncClient`.

    Args:
        base_url: API root, e.g. ``https://api.us.veezi.com/``.  Route paths
            are joined onto it, so a path component in the base URL is kept.
        api_key: Access token sent in the ``VeeziAccessToken`` header.
        request_config: Timeout and SSL settings for an owned client.
        http_client: Optional pre-configured client.  When given, the
            executor does not close it; otherwise one is created lazily and
            closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        request_config: Optional[RequestConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        self._base_url = httpx.URL(base_url)
        self._api_key = api_key
        self._request_config = request_config or RequestConfig()
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._request_config.timeout,
                verify=self._request_config.verify_ssl,
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this executor created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Request
    # ------------------------------------------------------------------ #

    def url_for(self, route: Route, params: tuple[Any, ...] = ()) -> httpx.URL:
        """Absolute URL for *route* rendered with *params*."""
        return self._base_url.join(route.path(*params))

    async def execute(self, route: Route, params: tuple[Any, ...] = ()) -> Any:
        """Send ``GET`` for *route* and return the decoded JSON body.

        Raises:
            ConnectionError_: On network, timeout or redirect-loop errors.
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On any other non-2xx status.
            DeserializationError: When the body cannot be decoded or is not
                valid JSON.
        """
        url = self.url_for(route, params)
        headers = {AUTH_HEADER: self._api_key, "Accept": "application/json"}

        logger.debug("GET %s", url)
        try:
            response = await self._get_client().get(url, headers=headers)
        except httpx.DecodingError as exc:
            raise DeserializationError(
                f"Response from {url} could not be decoded: {exc}", cause=exc
            ) from exc
        except httpx.RequestError as exc:
            raise ConnectionError_(f"Request to {url} failed: {exc}", cause=exc) from exc

        logger.debug("HTTP %s for GET %s", response.status_code, url)
        self._map_response_error(response)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DeserializationError(
                f"Response from {url} is not valid JSON: {exc}", cause=exc
            ) from exc

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for any non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return

        # Try to extract an error message from the response body.
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("Message") or detail.get("message") or detail.get("error") or ""
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        prefix = f"HTTP {status}"
        full_msg = f"{prefix}: {msg}" if msg else prefix

        cause: Optional[BaseException]
        try:
            response.raise_for_status()
            cause = None
        except httpx.HTTPStatusError as exc:
            cause = exc

        error_type: type[TransportError]
        if status in (401, 403):
            error_type = AuthError
        elif status == 404:
            error_type = NotFoundError
        else:
            error_type = ServerError
        raise error_type(full_msg, status_code=status, cause=cause)
