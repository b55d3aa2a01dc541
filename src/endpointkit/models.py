"""Shared Pydantic models and enumerations for endpointkit.

The models fall into two groups:

**Endpoint semantics** -- consulted when functions are generated:
    :class:`HTTPMethod`, :class:`ResponseValidationMode` and
    :class:`MethodCapabilities`.

**Transport configuration** -- used to build the shared transport handle:
    :class:`ClientConfig`, loadable from a project config file or the
    environment through :mod:`endpointkit.config`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HTTPMethod(str, enum.Enum):
    """HTTP methods an endpoint descriptor may declare.

    Lookup is case-insensitive, so ``HTTPMethod("get")`` is ``HTTPMethod.GET``.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def _missing_(cls, value: object) -> Optional[HTTPMethod]:
        if isinstance(value, str):
            upper = value.upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class ResponseValidationMode(str, enum.Enum):
    """What a generated function does when the response fails validation.

    ``STRICT`` raises :class:`~endpointkit.exceptions.ResponseValidationError`.
    ``SAFE`` returns the envelope with ``data`` set to ``None``.
    """

    STRICT = "strict"
    SAFE = "safe"


class MethodCapabilities(BaseModel):
    """Which HTTP methods may carry query parameters and request bodies.

    The default table allows a query on GET and POST and a body on POST,
    PUT and PATCH. Descriptors that declare a query or body schema on any
    other method are rejected when their function is generated.

    Example::

        MethodCapabilities(query_methods={"GET", "POST", "DELETE"})
    """

    model_config = ConfigDict(frozen=True)

    query_methods: frozenset[HTTPMethod] = Field(
        default=frozenset({HTTPMethod.GET, HTTPMethod.POST}),
        description="Methods allowed to declare a query schema",
    )
    body_methods: frozenset[HTTPMethod] = Field(
        default=frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH}),
        description="Methods allowed to declare a body schema",
    )

    def allows_query(self, method: Union[HTTPMethod, str]) -> bool:
        return HTTPMethod(method) in self.query_methods

    def allows_body(self, method: Union[HTTPMethod, str]) -> bool:
        return HTTPMethod(method) in self.body_methods


DEFAULT_CAPABILITIES = MethodCapabilities()


class ClientConfig(BaseModel):
    """Settings used to construct the shared :class:`httpx.AsyncClient`.

    Loaded from ``endpointkit.yaml`` / ``endpointkit.json`` and the
    ``ENDPOINTKIT_*`` environment variables by
    :func:`~endpointkit.config.resolve_client_config`, or built directly in
    code and handed to :func:`~endpointkit.init_api_functions`.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = Field(default="", description="Base URL prepended to every endpoint URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :class:`httpx.AsyncClient`."""
        return {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "verify": self.verify_ssl,
            "follow_redirects": self.follow_redirects,
            "headers": dict(self.headers),
        }
