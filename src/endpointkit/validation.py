"""Validation capability consumed by generated functions.

Generated functions never inspect schemas themselves. They talk to a
:class:`Validator`, which offers two operations:

* ``validate(value)`` -- return the checked (and possibly coerced) value,
  or raise :class:`~endpointkit.exceptions.ValidationError`.
* ``try_validate(value)`` -- never raise for invalid input; return a
  :class:`ValidationResult` instead.

:class:`SchemaValidator` implements both on top of a pydantic
:class:`~pydantic.TypeAdapter`, so any type pydantic understands (models,
``list[Model]``, ``TypedDict``, dataclasses, ...) can be used as a schema.
Custom validators subclass :class:`BaseValidator` and only implement
``validate``.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import pydantic
from pydantic import BaseModel, TypeAdapter
from pydantic_core import to_jsonable_python

from endpointkit.exceptions import DescriptorError, FieldError, ValidationError


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :meth:`Validator.try_validate`.

    Attributes:
        ok: ``True`` when the input was accepted.
        value: The validated value when ``ok``, otherwise ``None``.
        errors: The violated constraints when not ``ok``.
    """

    ok: bool
    value: Any = None
    errors: tuple[FieldError, ...] = ()


@runtime_checkable
class Validator(Protocol):
    """Anything that can check a value in a throwing and a non-throwing way."""

    def validate(self, value: Any) -> Any: ...

    def try_validate(self, value: Any) -> ValidationResult: ...


class BaseValidator(abc.ABC):
    """Base class for custom validators.

    Subclasses implement :meth:`validate`; :meth:`try_validate` is derived
    from it.
    """

    @abc.abstractmethod
    def validate(self, value: Any) -> Any:
        """Return the validated value or raise :class:`ValidationError`."""

    def try_validate(self, value: Any) -> ValidationResult:
        try:
            return ValidationResult(ok=True, value=self.validate(value))
        except ValidationError as exc:
            return ValidationResult(ok=False, errors=tuple(exc.errors))


class SchemaValidator(BaseValidator):
    """Validator backed by a pydantic :class:`~pydantic.TypeAdapter`.

    Args:
        schema: Any type pydantic can build a validator for.

    Raises:
        DescriptorError: If pydantic cannot generate a schema for *schema*.

    Example::

        validator = SchemaValidator(list[Fruit])
        fruits = validator.validate([{"id": "1", "name": "Apple", ...}])
    """

    def __init__(self, schema: Any) -> None:
        self.schema = schema
        try:
            self._adapter: TypeAdapter[Any] = TypeAdapter(schema)
        except pydantic.PydanticUserError as exc:
            raise DescriptorError(f"Unsupported schema {schema!r}: {exc}") from exc

    def validate(self, value: Any) -> Any:
        try:
            return self._adapter.validate_python(value)
        except pydantic.ValidationError as exc:
            raise ValidationError(field_errors(exc)) from exc

    def try_validate(self, value: Any) -> ValidationResult:
        try:
            return ValidationResult(ok=True, value=self._adapter.validate_python(value))
        except pydantic.ValidationError as exc:
            return ValidationResult(ok=False, errors=tuple(field_errors(exc)))

    def __repr__(self) -> str:
        name = getattr(self.schema, "__name__", None) or repr(self.schema)
        return f"SchemaValidator({name})"


def field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    """Convert pydantic error details into :class:`FieldError` records."""
    return [
        FieldError(loc=tuple(err["loc"]), msg=err["msg"], type=err["type"])
        for err in exc.errors(include_url=False)
    ]


def as_validator(schema: Any) -> Validator:
    """Return *schema* if it already is a :class:`Validator`, else wrap it."""
    if isinstance(schema, Validator):
        return schema
    return SchemaValidator(schema)


def to_wire(value: Any, *, exclude_unset: bool = False, exclude_none: bool = False) -> Any:
    """Turn a validated value into JSON-compatible Python data.

    Pydantic models are dumped in JSON mode using their aliases; everything
    else goes through :func:`pydantic_core.to_jsonable_python`.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(
            mode="json",
            by_alias=True,
            exclude_unset=exclude_unset,
            exclude_none=exclude_none,
        )
    return to_jsonable_python(value, by_alias=True, exclude_none=exclude_none)
