"""Construction and detection of the shared transport handle.

The transport handle is whatever performs the actual request. By default it
is an :class:`httpx.AsyncClient` built from a
:class:`~endpointkit.models.ClientConfig`, but any object with an awaitable
``request(method, url, *, params=None, json=None, **options)`` method that
returns an :class:`httpx.Response` can be passed in its place.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import httpx
import pydantic

from endpointkit.exceptions import ConfigError
from endpointkit.models import ClientConfig


def is_transport_handle(obj: Any) -> bool:
    """Return ``True`` if *obj* looks like a pre-built transport handle."""
    return callable(getattr(obj, "request", None))


def coerce_client_config(
    config: Optional[Union[ClientConfig, Mapping[str, Any]]],
) -> ClientConfig:
    """Return *config* as a :class:`ClientConfig`.

    ``None`` gives the defaults; a mapping is validated field by field.

    Raises:
        ConfigError: If the mapping contains unknown keys or invalid values.
    """
    if config is None:
        return ClientConfig()
    if isinstance(config, ClientConfig):
        return config
    try:
        return ClientConfig.model_validate(dict(config))
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc


def build_client(config: Optional[Union[ClientConfig, Mapping[str, Any]]] = None) -> httpx.AsyncClient:
    """Build one :class:`httpx.AsyncClient` from *config*.

    No request is sent; the client opens connections lazily.

    Example::

        client = build_client({"base_url": "https://api.example.com", "timeout": 5})
    """
    return httpx.AsyncClient(**coerce_client_config(config).client_kwargs())
