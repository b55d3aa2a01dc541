"""Function factory -- one callable per endpoint descriptor.

:func:`create_api_function` turns an :class:`~endpointkit.endpoint.Endpoint`
and a transport handle into an :class:`ApiFunction`. Each call of that
function runs the same pipeline:

1. Bind the arguments against the fixed signature of the endpoint's
   :class:`~endpointkit.generator.shapes.CallShape`. A missing or extra
   argument fails like an invalid one, with
   :class:`~endpointkit.exceptions.ValidationError`.
2. Validate path parameters, query and body, in that order
   (:class:`~endpointkit.exceptions.ValidationError`).
3. Render the URL template
   (:class:`~endpointkit.exceptions.MissingPathParameterError`).
4. Send exactly one request through the transport handle, with the
   endpoint's passthrough options.
5. Validate the response payload, if a response schema is declared, and
   return the :class:`~endpointkit.client.response.ApiResponse` envelope.

Steps 1-3 are local; nothing is sent when any of them fails. Errors raised
by the transport in step 4 are not caught.

Everything that depends only on the descriptor (shape, signature, method
capability checks, placeholder checks) is resolved when the function is
created, not per call.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from endpointkit.client.response import ApiResponse
from endpointkit.client.transport import build_client
from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import (
    ConfigError,
    DescriptorError,
    FieldError,
    ResponseValidationError,
    ValidationError,
)
from endpointkit.generator.shapes import CallShape, Slot
from endpointkit.generator.templating import placeholders, render_path
from endpointkit.models import (
    DEFAULT_CAPABILITIES,
    MethodCapabilities,
    ResponseValidationMode,
)
from endpointkit.validation import Validator, to_wire


def check_endpoint(endpoint: Endpoint, capabilities: MethodCapabilities = DEFAULT_CAPABILITIES) -> None:
    """Reject descriptors whose function could never be called correctly.

    Raises:
        DescriptorError: If the method may not carry the declared query or
            body, or if URL placeholders and the path parameter schema do
            not come together.
    """
    method = endpoint.method
    if endpoint.query is not None and not capabilities.allows_query(method):
        raise DescriptorError(f"{endpoint}: {method.value} endpoints cannot declare a query schema")
    if endpoint.body is not None and not capabilities.allows_body(method):
        raise DescriptorError(f"{endpoint}: {method.value} endpoints cannot declare a body schema")

    names = placeholders(endpoint.url)
    if names and endpoint.path_params is None:
        raise DescriptorError(
            f"{endpoint}: URL has placeholders ({', '.join(names)}) but no path parameter schema"
        )
    if endpoint.path_params is not None and not names:
        raise DescriptorError(f"{endpoint}: path parameter schema declared but URL has no placeholders")


def coerce_response_mode(value: Union[ResponseValidationMode, str]) -> ResponseValidationMode:
    """Parse a response mode given by the caller, raising :class:`ConfigError`."""
    try:
        return ResponseValidationMode(value)
    except ValueError:
        raise ConfigError(f"Unknown response mode: {value!r}") from None


class ApiFunction:
    """Awaitable callable bound to one endpoint and one transport handle.

    Instances hold no per-call state and can be awaited concurrently.

    Attributes:
        endpoint: The descriptor this function was generated from.
        name: Name used in error messages (the table key when created by
            :func:`~endpointkit.init_api_functions`).
        shape: The resolved argument layout.
        response_mode: Policy applied when the response fails validation.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        client: Any,
        *,
        name: Optional[str] = None,
        response_mode: Union[ResponseValidationMode, str] = ResponseValidationMode.STRICT,
        capabilities: MethodCapabilities = DEFAULT_CAPABILITIES,
    ) -> None:
        check_endpoint(endpoint, capabilities)
        self.endpoint = endpoint
        self.name = name or str(endpoint)
        self.shape = CallShape.of(endpoint)
        self.response_mode = endpoint.response_mode or coerce_response_mode(response_mode)
        self.__signature__ = self.shape.signature()
        self._client = client
        self._validators: tuple[tuple[Slot, Validator], ...] = tuple(
            (slot, getattr(endpoint, slot.value)) for slot in self.shape.slots
        )

    @property
    def client(self) -> Any:
        """The shared transport handle."""
        return self._client

    async def __call__(self, *args: Any, **kwargs: Any) -> ApiResponse:
        arguments = self._bind(args, kwargs)
        values = {
            slot: self._validate(slot, validator, arguments[slot.value])
            for slot, validator in self._validators
        }

        url = self.endpoint.url
        request_kwargs: dict[str, Any] = dict(self.endpoint.options)
        if Slot.PATH in values:
            url = render_path(url, self._as_mapping(Slot.PATH, to_wire(values[Slot.PATH])))
        if Slot.QUERY in values:
            query = self._as_mapping(Slot.QUERY, to_wire(values[Slot.QUERY], exclude_none=True))
            request_kwargs["params"] = {k: v for k, v in query.items() if v is not None}
        if Slot.BODY in values:
            request_kwargs["json"] = to_wire(values[Slot.BODY], exclude_unset=self.endpoint.sparse_body)

        response = await self._client.request(self.endpoint.method.value, url, **request_kwargs)
        return self._check_response(ApiResponse.from_httpx(response))

    def _bind(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
        try:
            return self.__signature__.bind(*args, **kwargs).arguments
        except TypeError as exc:
            given = {slot.value for slot in self.shape.slots[: len(args)]} | set(kwargs)
            missing = next((s.value for s in self.shape.slots if s.value not in given), None)
            raise ValidationError(
                [FieldError(loc=(), msg=str(exc), type="arity")], slot=missing, endpoint=self.name
            ) from None

    def _validate(self, slot: Slot, validator: Validator, value: Any) -> Any:
        result = validator.try_validate(value)
        if not result.ok:
            raise ValidationError(result.errors, slot=slot.value, endpoint=self.name)
        return result.value

    def _as_mapping(self, slot: Slot, value: Any) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise DescriptorError(
                f"{self.name}: {slot.value} schema must produce a mapping, got {type(value).__name__}"
            )
        return value

    def _check_response(self, envelope: ApiResponse) -> ApiResponse:
        validator = self.endpoint.response
        if validator is None:
            return envelope

        result = validator.try_validate(envelope.data)
        if result.ok:
            return envelope.with_data(result.value)
        if self.response_mode is ResponseValidationMode.SAFE:
            return envelope.with_data(None)
        raise ResponseValidationError(result.errors, envelope, endpoint=self.name)

    def __repr__(self) -> str:
        return f"<ApiFunction {self.name}{self.__signature__} -> {self.endpoint}>"


def create_api_function(
    endpoint: Endpoint,
    client: Any = None,
    *,
    name: Optional[str] = None,
    response_mode: Union[ResponseValidationMode, str] = ResponseValidationMode.STRICT,
    capabilities: MethodCapabilities = DEFAULT_CAPABILITIES,
) -> ApiFunction:
    """Generate the function for a single endpoint.

    Args:
        endpoint: The endpoint descriptor.
        client: Transport handle. When omitted, a fresh
            :class:`httpx.AsyncClient` with default settings is built for
            this function alone.
        name: Name used in error messages.
        response_mode: Default response validation policy; the endpoint's
            own ``response_mode`` wins when set.
        capabilities: Which methods may declare a query or a body.

    Returns:
        The generated :class:`ApiFunction`.

    Raises:
        DescriptorError: If the endpoint cannot be generated (see
            :func:`check_endpoint`).

    Example::

        find_by_id = create_api_function(
            Endpoint("GET", "/fruit/:id", path_params=IdPath, response=Fruit),
            client,
        )
        response = await find_by_id({"id": "1"})
        response.data.name  # "Apple"
    """
    if client is None:
        client = build_client()
    return ApiFunction(
        endpoint,
        client,
        name=name,
        response_mode=response_mode,
        capabilities=capabilities,
    )
