"""Tests for the response envelope and body extraction."""

from __future__ import annotations

import httpx
import pytest

from endpointkit.client.response import ApiResponse, extract_response_data


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(
    status_code: int = 200,
    content: bytes | None = None,
    json_data: object | None = None,
    headers: dict[str, str] | None = None,
    text: str | None = None,
) -> httpx.Response:
    """Build an httpx.Response bound to a GET request."""
    request = httpx.Request("GET", "https://api.example.com/test")
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, headers=headers, request=request)
    if text is not None:
        return httpx.Response(status_code, text=text, headers=headers, request=request)
    return httpx.Response(status_code, content=content or b"", headers=headers, request=request)


# ---------------------------------------------------------------------------
# ApiResponse
# ---------------------------------------------------------------------------


class TestApiResponse:
    def test_from_httpx(self) -> None:
        raw = _make_response(201, json_data={"id": "6"}, headers={"X-Request-Id": "abc"})
        envelope = ApiResponse.from_httpx(raw)
        assert envelope.status_code == 201
        assert envelope.data == {"id": "6"}
        assert envelope.headers["x-request-id"] == "abc"
        assert envelope.response is raw

    def test_with_data_returns_copy(self) -> None:
        envelope = ApiResponse.from_httpx(_make_response(json_data=[1, 2]))
        replaced = envelope.with_data(None)
        assert replaced.data is None
        assert envelope.data == [1, 2]
        assert replaced.status_code == envelope.status_code
        assert replaced.response is envelope.response

    def test_is_frozen(self) -> None:
        envelope = ApiResponse.from_httpx(_make_response(json_data={}))
        with pytest.raises(AttributeError):
            envelope.data = "x"  # type: ignore[misc]

    @pytest.mark.parametrize(("status", "expected"), [(200, True), (204, True), (404, False), (500, False)])
    def test_is_success(self, status: int, expected: bool) -> None:
        assert ApiResponse.from_httpx(_make_response(status)).is_success is expected


# ---------------------------------------------------------------------------
# extract_response_data
# ---------------------------------------------------------------------------


class TestExtractResponseData:
    def test_json_parse(self) -> None:
        response = _make_response(json_data={"key": "value", "nested": {"a": 1}})
        assert extract_response_data(response) == {"key": "value", "nested": {"a": 1}}

    def test_json_list_parse(self) -> None:
        assert extract_response_data(_make_response(json_data=[1, 2, 3])) == [1, 2, 3]

    def test_fallback_to_text(self) -> None:
        response = _make_response(text="This is not JSON")
        assert extract_response_data(response) == "This is not JSON"

    def test_empty_body_returns_none(self) -> None:
        assert extract_response_data(_make_response(204, content=b"")) is None

    def test_json_without_content_type(self) -> None:
        response = _make_response(content=b'{"parsed": true}')
        assert extract_response_data(response) == {"parsed": True}

    def test_malformed_json_falls_back_to_text(self) -> None:
        response = _make_response(
            content=b'{"broken": json',
            headers={"content-type": "application/json"},
        )
        data = extract_response_data(response)
        assert isinstance(data, str)
        assert '{"broken": json' in data
