"""Transport handle transformers.

A transformer is a callable that receives a transport handle and returns
one, usually the same :class:`httpx.AsyncClient` with extra behaviour
attached. :func:`~endpointkit.init_api_functions` applies a sequence of them,
in order, to the handle it constructs; this is where response interceptors,
default headers and request logging are plugged in instead of inside the
generated functions.

Example::

    apis = init_api_functions(
        FRUIT_API,
        {"base_url": "https://api.example.com"},
        transformers=[with_headers({"X-Client": "shop"}), raise_for_status, log_exchanges()],
    )
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)

Transformer = Callable[[Any], Any]


async def _raise_on_error_status(response: httpx.Response) -> None:
    if response.is_error:
        await response.aread()
        response.raise_for_status()


def raise_for_status(client: httpx.AsyncClient) -> httpx.AsyncClient:
    """Make 4xx and 5xx responses raise :class:`httpx.HTTPStatusError`.

    The error propagates out of the generated function unchanged, as any
    other transport failure does.
    """
    client.event_hooks["response"].append(_raise_on_error_status)
    return client


def with_headers(headers: Mapping[str, str]) -> Transformer:
    """Return a transformer merging *headers* into the client's defaults."""

    def _transform(client: httpx.AsyncClient) -> httpx.AsyncClient:
        client.headers.update(headers)
        return client

    return _transform


def log_exchanges(log: Optional[logging.Logger] = None) -> Transformer:
    """Return a transformer logging every request and response at DEBUG.

    Args:
        log: Logger to write to; defaults to this module's logger.
    """
    target = log or logger

    async def _log_request(request: httpx.Request) -> None:
        target.debug("-> %s %s", request.method, request.url)

    async def _log_response(response: httpx.Response) -> None:
        request = response.request
        target.debug(
            "<- %s %s %d %s",
            request.method,
            request.url,
            response.status_code,
            response.reason_phrase,
        )

    def _transform(client: httpx.AsyncClient) -> httpx.AsyncClient:
        client.event_hooks["request"].append(_log_request)
        client.event_hooks["response"].append(_log_response)
        return client

    return _transform
