"""Environment-based configuration for :class:`~veezi.client.ClientBuilder`.

Applications usually keep the Veezi access token outside their code.  This
module turns ``VEEZI_*`` environment variables and credential source
descriptors into a :class:`~veezi.models.ClientConfig`:

* ``VEEZI_BASE_URL`` -- API root (default :data:`~veezi.models.DEFAULT_BASE_URL`).
* ``VEEZI_API_KEY`` -- access token, or a source descriptor such as
  ``env:OTHER_VAR`` / ``file:~/.veezi-token`` (see :func:`resolve_credential`).
  ``VEEZI_KEY`` is accepted as a fallback name.
* ``VEEZI_CACHE_TTL`` -- when set, enables caching with this TTL in seconds;
  ``0`` keeps caching disabled.
* ``VEEZI_TIMEOUT`` -- request timeout in seconds.

Values are not validated here beyond parsing numbers; validation happens in
:meth:`~veezi.client.ClientBuilder.build`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from veezi.exceptions import ConfigurationError
from veezi.models import DEFAULT_BASE_URL, CacheConfig, ClientConfig, RequestConfig

ENV_BASE_URL = "VEEZI_BASE_URL"
ENV_API_KEY = "VEEZI_API_KEY"
ENV_API_KEY_FALLBACK = "VEEZI_KEY"
ENV_CACHE_TTL = "VEEZI_CACHE_TTL"
ENV_TIMEOUT = "VEEZI_TIMEOUT"


def resolve_credential(source: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``VAR_NAME`` from the environment
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else -- used verbatim as the credential

    Args:
        source: The source descriptor string.
        environ: Environment mapping to read from (defaults to ``os.environ``).

    Returns:
        The resolved credential string.

    Raises:
        ConfigurationError: If the source can't be resolved.
    """
    env = os.environ if environ is None else environ

    if source.startswith("env:"):
        var_name = source[4:]
        value = env.get(var_name)
        if value is None:
            raise ConfigurationError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigurationError(f"Cannot read credential file {path}: {exc}") from exc

    return source


def _parse_seconds(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from exc


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a :class:`~veezi.models.ClientConfig` from ``VEEZI_*`` variables.

    Args:
        environ: Environment mapping to read from (defaults to ``os.environ``).

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed or a
            credential source cannot be resolved.
    """
    env = os.environ if environ is None else environ

    base_url = env.get(ENV_BASE_URL) or DEFAULT_BASE_URL

    api_key: Optional[str] = None
    raw_key = env.get(ENV_API_KEY) or env.get(ENV_API_KEY_FALLBACK)
    if raw_key:
        api_key = resolve_credential(raw_key, env)

    cache = CacheConfig()
    raw_ttl = env.get(ENV_CACHE_TTL)
    if raw_ttl:
        ttl = _parse_seconds(ENV_CACHE_TTL, raw_ttl)
        if ttl > 0:
            cache = CacheConfig(enabled=True, ttl_seconds=ttl)

    request = RequestConfig()
    raw_timeout = env.get(ENV_TIMEOUT)
    if raw_timeout:
        request = RequestConfig(timeout=_parse_seconds(ENV_TIMEOUT, raw_timeout))

    return ClientConfig(base_url=base_url, api_key=api_key, cache=cache, request=request)
