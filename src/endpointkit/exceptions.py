"""Exception hierarchy for endpointkit.

All exceptions raised by endpointkit itself inherit from
:class:`EndpointKitError`, which carries an ``exit_code`` attribute mapped to
a constant from :mod:`endpointkit.exit_codes`. The command line catches
``EndpointKitError`` and exits with the matching code.

Failures of the transport are *not* part of this hierarchy. They are raised
by the transport handle (``httpx`` by default) and reach the caller
unchanged; :data:`TransportError` is an alias of :class:`httpx.HTTPError`
so callers can catch them without importing httpx.

Subclass hierarchy::

    EndpointKitError              (exit 1)
    +-- DescriptorError           (exit 2)
    +-- ValidationError           (exit 3)
    +-- MissingPathParameterError (exit 3)
    +-- ResponseValidationError   (exit 4)
    +-- ConfigError               (exit 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

import httpx

from endpointkit.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RESPONSE_CONTRACT,
    EXIT_VALIDATION_FAILURE,
)

if TYPE_CHECKING:
    from endpointkit.client.response import ApiResponse


TransportError = httpx.HTTPError
"""Failures raised by the transport handle, passed through untouched."""


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint reported by a validator.

    Attributes:
        loc: Location of the offending value inside the validated input,
            e.g. ``("items", 0, "price")``. Empty for the input as a whole.
        msg: Human-readable description of the violated constraint.
        type: Machine-readable error kind (pydantic's error ``type``).
    """

    loc: tuple[Union[str, int], ...]
    msg: str
    type: str = "value_error"

    @property
    def path(self) -> str:
        """Dotted field path, ``<root>`` for the input as a whole."""
        return ".".join(str(part) for part in self.loc) or "<root>"

    def __str__(self) -> str:
        return f"{self.path}: {self.msg}"


def _describe(errors: Sequence[FieldError]) -> str:
    return "; ".join(str(err) for err in errors)


class EndpointKitError(Exception):
    """Base exception for all endpointkit errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`endpointkit.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class DescriptorError(EndpointKitError):
    """Raised when an endpoint descriptor cannot be turned into a function."""

    exit_code = EXIT_INVALID_USAGE


class ValidationError(EndpointKitError):
    """Raised when a call argument fails its validator.

    Always raised before any request is sent.

    Attributes:
        errors: The violated constraints.
        slot: Which argument failed (``"path_params"``, ``"query"`` or
            ``"body"``), ``None`` when raised by a validator directly.
        endpoint: Name of the generated function, when known.
    """

    exit_code = EXIT_VALIDATION_FAILURE

    def __init__(
        self,
        errors: Sequence[FieldError],
        slot: Optional[str] = None,
        endpoint: Optional[str] = None,
    ):
        self.errors = list(errors)
        self.slot = slot
        self.endpoint = endpoint
        where = f" {slot}" if slot else ""
        target = f" for {endpoint}" if endpoint else ""
        super().__init__(f"Invalid{where}{target}: {_describe(self.errors)}")


class MissingPathParameterError(EndpointKitError):
    """Raised when a URL placeholder has no usable value.

    Attributes:
        placeholder: Name of the placeholder, without the leading ``:``.
        template: The URL template being rendered.
    """

    exit_code = EXIT_VALIDATION_FAILURE

    def __init__(self, placeholder: str, template: str):
        self.placeholder = placeholder
        self.template = template
        super().__init__(
            f"Missing value for path parameter {placeholder!r} in {template!r}"
        )


class ResponseValidationError(EndpointKitError):
    """Raised in strict mode when a response payload fails its validator.

    The request has already completed when this is raised; the full
    envelope is kept on the exception for inspection.

    Attributes:
        errors: The violated constraints.
        response: The envelope carrying the raw, unvalidated data.
        endpoint: Name of the generated function, when known.
    """

    exit_code = EXIT_RESPONSE_CONTRACT

    def __init__(
        self,
        errors: Sequence[FieldError],
        response: "ApiResponse",
        endpoint: Optional[str] = None,
    ):
        self.errors = list(errors)
        self.response = response
        self.endpoint = endpoint
        target = f" from {endpoint}" if endpoint else ""
        super().__init__(
            f"Unexpected response{target} (HTTP {response.status_code}): "
            f"{_describe(self.errors)}"
        )

    @property
    def data(self) -> Any:
        """The payload that failed validation."""
        return self.response.data


class ConfigError(EndpointKitError):
    """Raised for configuration problems (invalid config file, bad env values, unloadable targets)."""

    exit_code = EXIT_GENERIC_FAILURE
