"""Endpoint descriptors -- the static configuration of one HTTP call.

An :class:`Endpoint` is declared once, usually as a value in a module-level
table, and handed to :func:`~endpointkit.init_api_functions` or
:func:`~endpointkit.create_api_function`::

    FRUIT_API = {
        "find_by_id": Endpoint(
            "GET", "/fruit/:id", path_params=IdPath, response=Fruit
        ),
        "update": Endpoint(
            "PATCH", "/fruit/:id", path_params=IdPath, body=FruitPatch
        ),
    }

Which schemas are present decides the positional signature of the
generated function; see :mod:`endpointkit.generator.shapes`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from endpointkit.exceptions import DescriptorError
from endpointkit.models import HTTPMethod, ResponseValidationMode
from endpointkit.validation import as_validator

RESERVED_OPTIONS = frozenset({"method", "url", "params", "json", "content", "data", "files"})
"""Request arguments owned by the generated function, never passthrough."""

SCHEMA_FIELDS = ("path_params", "query", "body", "response")


@dataclass(frozen=True)
class Endpoint:
    """Immutable descriptor of a single API endpoint.

    Args:
        method: HTTP method, as :class:`~endpointkit.models.HTTPMethod` or a
            case-insensitive string.
        url: URL template. Placeholders are path segments prefixed with
            ``:``, e.g. ``/fruit/:id``.
        path_params: Schema or validator for the placeholder mapping.
        query: Schema or validator for the query parameters.
        body: Schema or validator for the JSON request body.
        response: Schema or validator for the response payload.
        options: Extra keyword arguments for the transport's ``request``
            (``headers``, ``timeout``, ``cookies``, ``extensions``, ...).
        response_mode: Per-endpoint override of the response validation
            policy.
        sparse_body: Send only the body fields the caller supplied.
            Partial updates (PATCH) set this; by default the whole
            validated body, defaults included, is sent.

    Schemas that are not already validators are wrapped in
    :class:`~endpointkit.validation.SchemaValidator` here, once.

    Raises:
        DescriptorError: On an unsupported method, an empty URL, a schema
            pydantic cannot handle, or reserved keys in *options*.
    """

    method: HTTPMethod
    url: str
    path_params: Any = None
    query: Any = None
    body: Any = None
    response: Any = None
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)
    response_mode: Optional[ResponseValidationMode] = None
    sparse_body: bool = False

    def __post_init__(self) -> None:
        try:
            method = HTTPMethod(self.method)
        except ValueError:
            raise DescriptorError(f"Unsupported HTTP method: {self.method!r}") from None
        object.__setattr__(self, "method", method)

        if not isinstance(self.url, str) or not self.url:
            raise DescriptorError(f"Endpoint URL must be a non-empty string, got {self.url!r}")

        for name in SCHEMA_FIELDS:
            schema = getattr(self, name)
            if schema is not None:
                object.__setattr__(self, name, as_validator(schema))

        reserved = sorted(RESERVED_OPTIONS.intersection(self.options))
        if reserved:
            raise DescriptorError(
                f"Options for {method.value} {self.url} may not set: {', '.join(reserved)}"
            )
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

        if self.response_mode is not None:
            try:
                mode = ResponseValidationMode(self.response_mode)
            except ValueError:
                raise DescriptorError(
                    f"Unknown response mode: {self.response_mode!r}"
                ) from None
            object.__setattr__(self, "response_mode", mode)

    def __str__(self) -> str:
        return f"{self.method.value} {self.url}"
