"""Tests for call-shape resolution and generated signatures."""

from __future__ import annotations

import inspect

import pytest
from pydantic import BaseModel

from endpointkit import Endpoint
from endpointkit.generator.shapes import CallShape, Slot


class _Path(BaseModel):
    id: str


class _Query(BaseModel):
    q: str = ""


class _Body(BaseModel):
    name: str


def _endpoint(path: bool, query: bool, body: bool) -> Endpoint:
    return Endpoint(
        "POST",
        "/things/:id" if path else "/things",
        path_params=_Path if path else None,
        query=_Query if query else None,
        body=_Body if body else None,
    )


# ---------------------------------------------------------------------------
# CallShape.of
# ---------------------------------------------------------------------------


class TestShapeResolution:
    @pytest.mark.parametrize(
        ("path", "query", "body", "expected"),
        [
            (False, False, False, CallShape.NONE),
            (True, False, False, CallShape.PATH),
            (False, True, False, CallShape.QUERY),
            (False, False, True, CallShape.BODY),
            (True, True, False, CallShape.PATH_QUERY),
            (True, False, True, CallShape.PATH_BODY),
            (False, True, True, CallShape.QUERY_BODY),
            (True, True, True, CallShape.PATH_QUERY_BODY),
        ],
    )
    def test_all_eight_shapes(self, path: bool, query: bool, body: bool, expected: CallShape) -> None:
        assert CallShape.of(_endpoint(path, query, body)) is expected

    def test_response_schema_does_not_affect_shape(self) -> None:
        endpoint = Endpoint("GET", "/things", response=list[_Body])
        assert CallShape.of(endpoint) is CallShape.NONE

    def test_there_are_exactly_eight_shapes(self) -> None:
        assert len(CallShape) == 8


# ---------------------------------------------------------------------------
# Slots and signatures
# ---------------------------------------------------------------------------


class TestSignature:
    def test_slots_follow_path_query_body_order(self) -> None:
        assert CallShape.PATH_QUERY_BODY.slots == (Slot.PATH, Slot.QUERY, Slot.BODY)
        assert CallShape.QUERY_BODY.slots == (Slot.QUERY, Slot.BODY)

    def test_arity(self) -> None:
        assert CallShape.NONE.arity == 0
        assert CallShape.PATH_BODY.arity == 2
        assert CallShape.PATH_QUERY_BODY.arity == 3

    def test_signature_parameter_names(self) -> None:
        signature = CallShape.PATH_BODY.signature()
        assert list(signature.parameters) == ["path_params", "body"]
        assert str(signature) == "(path_params, body)"

    def test_parameters_are_positional_or_keyword(self) -> None:
        for param in CallShape.PATH_QUERY.signature().parameters.values():
            assert param.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
            assert param.default is inspect.Parameter.empty

    def test_empty_signature_rejects_arguments(self) -> None:
        with pytest.raises(TypeError):
            CallShape.NONE.signature().bind({"unexpected": 1})
