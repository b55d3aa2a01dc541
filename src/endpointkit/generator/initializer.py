"""Batch initializer -- a table of endpoints becomes a table of functions.

:func:`init_api_functions` accepts a mapping of name to
:class:`~endpointkit.endpoint.Endpoint` and produces an
:class:`ApiFunctions` mapping with exactly the same keys. Every function in
the result shares one transport handle, which is either

* built here, once, from a :class:`~endpointkit.models.ClientConfig` (or
  a plain mapping of its fields) and then passed through the optional
  transformer pipeline, or
* supplied by the caller and reused as-is.

No request is sent during initialisation.
"""

from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Sequence, Union

from endpointkit.client.transformers import Transformer
from endpointkit.client.transport import build_client, coerce_client_config, is_transport_handle
from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import ConfigError, DescriptorError
from endpointkit.generator.factory import ApiFunction, check_endpoint, coerce_response_mode
from endpointkit.models import (
    DEFAULT_CAPABILITIES,
    ClientConfig,
    MethodCapabilities,
    ResponseValidationMode,
)


class ApiFunctions(Mapping[str, ApiFunction]):
    """Read-only mapping of endpoint name to generated function.

    Functions are reachable both by key and as attributes::

        await apis["find_by_id"]({"id": "1"})
        await apis.find_by_id({"id": "1"})

    Attribute access does not reach names shadowed by mapping methods
    (``get``, ``items``, ``keys``, ``values``); use the key for those.

    When the transport handle was built by :func:`init_api_functions`, the
    mapping owns it and :meth:`aclose` (or ``async with``) closes it. A
    caller-supplied handle is left for the caller to close.
    """

    def __init__(self, functions: Mapping[str, ApiFunction], client: Any, owns_client: bool) -> None:
        self._functions = MappingProxyType(dict(functions))
        self._client = client
        self._owns_client = owns_client

    @property
    def client(self) -> Any:
        """The transport handle shared by every function."""
        return self._client

    def __getitem__(self, name: str) -> ApiFunction:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __getattr__(self, name: str) -> ApiFunction:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._functions[name]
        except KeyError:
            raise AttributeError(f"No API function named {name!r}") from None

    async def aclose(self) -> None:
        """Close the transport handle if it was built by the initializer."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ApiFunctions:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<ApiFunctions {list(self._functions)}>"


def apply_transformers(client: Any, transformers: Sequence[Transformer]) -> Any:
    """Pass *client* through *transformers* in order and return the result.

    Raises:
        ConfigError: If a transformer returns ``None``.
    """
    for transformer in transformers:
        result = transformer(client)
        if result is None:
            name = getattr(transformer, "__name__", repr(transformer))
            raise ConfigError(f"Transformer {name} returned None instead of a transport handle")
        client = result
    return client


_closing: set[asyncio.Task[None]] = set()


def _discard_client(client: Any) -> None:
    """Close a handle built here that will never be handed out.

    Inside a running event loop the close is scheduled as a task;
    otherwise it runs to completion before returning.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(client.aclose())
        return
    task = loop.create_task(client.aclose())
    _closing.add(task)
    task.add_done_callback(_closing.discard)


def init_api_functions(
    endpoints: Mapping[str, Endpoint],
    transport: Union[ClientConfig, Mapping[str, Any], Any, None] = None,
    *,
    transformers: Sequence[Transformer] = (),
    response_mode: Union[ResponseValidationMode, str] = ResponseValidationMode.STRICT,
    capabilities: MethodCapabilities = DEFAULT_CAPABILITIES,
) -> ApiFunctions:
    """Generate one function per endpoint, all sharing one transport handle.

    Args:
        endpoints: Mapping of function name to endpoint descriptor.
        transport: Either a pre-built transport handle (anything with a
            ``request`` method, typically an :class:`httpx.AsyncClient`),
            or the configuration to build one from: a
            :class:`~endpointkit.models.ClientConfig`, a mapping of its
            fields, or ``None`` for the defaults.
        transformers: Callables applied in order to a handle built here.
        response_mode: Default response validation policy for every
            function; endpoints may override it.
        capabilities: Which methods may declare a query or a body.

    Returns:
        An :class:`ApiFunctions` mapping with the same keys as *endpoints*.

    Raises:
        DescriptorError: If any endpoint is invalid. Nothing is built in
            that case.
        ConfigError: If the configuration or the response mode is invalid,
            a transformer returns ``None``, or transformers are given
            together with a pre-built handle.

    When a transformer fails, the handle built here is closed before the
    error propagates.

    Example::

        apis = init_api_functions(FRUIT_API, {"base_url": "https://api.example.com"})
        response = await apis.find({"limit": 5})
    """
    for name, endpoint in endpoints.items():
        if not isinstance(endpoint, Endpoint):
            raise DescriptorError(f"{name!r} is not an Endpoint: {endpoint!r}")
        check_endpoint(endpoint, capabilities)
    response_mode = coerce_response_mode(response_mode)

    if is_transport_handle(transport):
        if transformers:
            raise ConfigError("Transformers apply only to a handle built by init_api_functions")
        client = transport
        owns_client = False
    else:
        built = build_client(coerce_client_config(transport))
        try:
            client = apply_transformers(built, transformers)
        except Exception:
            _discard_client(built)
            raise
        owns_client = True

    functions = {
        name: ApiFunction(
            endpoint,
            client,
            name=name,
            response_mode=response_mode,
            capabilities=capabilities,
        )
        for name, endpoint in endpoints.items()
    }
    return ApiFunctions(functions, client, owns_client)
