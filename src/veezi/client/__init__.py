"""HTTP client module for veezi.

Provides the asynchronous :class:`VeeziClient`, its :class:`ClientBuilder`,
and the :class:`HttpExecutor` that wraps :mod:`httpx`.

Classes:
    :class:`VeeziClient` -- typed, cached access to every API operation.
    :class:`ClientBuilder` -- immutable, validating client configuration.
    :class:`HttpExecutor` -- authenticated ``GET`` over :class:`httpx.AsyncClient`.
    :class:`Route` -- the fixed route templates of the API.

Example::

    from veezi.client import ClientBuilder

    async with ClientBuilder.from_env().with_default_caching().build() as client:
        films = await client.list_active_films()
"""

from veezi.client.builder import ClientBuilder
from veezi.client.client import VeeziClient
from veezi.client.executor import Executor, HttpExecutor
from veezi.client.routes import Route

__all__ = ["ClientBuilder", "Executor", "HttpExecutor", "Route", "VeeziClient"]
