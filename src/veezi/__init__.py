"""veezi -- typed, cached asyncio client for the Veezi cinema API.

This package wraps the Veezi REST API (sessions, films, film packages,
screens, attributes and the site) in an asynchronous client that decodes
responses into immutable Pydantic records, caches them per client with a
time-to-live, and offers chainable queries over the returned collections.

Typical usage::

    from veezi import ClientBuilder

    client = (
        ClientBuilder()
        .with_base_url("https://api.us.veezi.com/")
        .with_api_key(token)
        .with_default_caching()
        .build()
    )
    async with client:
        sessions = await client.list_sessions()
        for day, todays in sessions.filter_open_for_sales().group_by_date().items():
            print(day, len(todays))

Modules:
    client: :class:`VeeziClient`, :class:`ClientBuilder` and the HTTP executor.
    cache: Per-client TTL response cache.
    domain: Typed records mirroring the API's JSON resources.
    query: Fluent filters, sorts, groupings and aggregates.
    models: Pydantic configuration models.
    config: Environment and credential resolution.
    exceptions: Exception hierarchy.
"""

from veezi.client import ClientBuilder, Route, VeeziClient
from veezi.exceptions import (
    AuthError,
    CacheError,
    ConfigurationError,
    ConnectionError_,
    DeserializationError,
    NotFoundError,
    ServerError,
    TransportError,
    VeeziError,
)
from veezi.models import CacheConfig, CachePolicy, ClientConfig, RequestConfig
from veezi.query import FilmList, RecordList, SessionList

__version__ = "0.3.0"

__all__ = [
    "AuthError",
    "CacheConfig",
    "CacheError",
    "CachePolicy",
    "ClientBuilder",
    "ClientConfig",
    "ConfigurationError",
    "ConnectionError_",
    "DeserializationError",
    "FilmList",
    "NotFoundError",
    "RecordList",
    "RequestConfig",
    "Route",
    "ServerError",
    "SessionList",
    "TransportError",
    "VeeziClient",
    "VeeziError",
    "__version__",
]
