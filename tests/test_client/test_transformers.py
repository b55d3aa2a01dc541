"""Tests for the built-in transport handle transformers."""

from __future__ import annotations

import logging

import httpx
import pytest

from endpointkit import TransportError, init_api_functions
from endpointkit.client import build_client, log_exchanges, raise_for_status, with_headers
from fruit_api import BASE_URL, FRUIT_API, FruitStore


def _client(store: FruitStore) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=store.transport())


class TestRaiseForStatus:
    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        client = raise_for_status(_client(FruitStore()))
        async with client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await client.get("/fruit/99")
        assert exc_info.value.response.status_code == 404
        assert exc_info.value.response.json() == {"message": "target not found"}

    @pytest.mark.asyncio
    async def test_success_passes(self) -> None:
        client = raise_for_status(_client(FruitStore()))
        async with client:
            response = await client.get("/fruit/1")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_error_propagates_through_generated_function(self, monkeypatch: pytest.MonkeyPatch) -> None:
        store = FruitStore()
        monkeypatch.setattr(
            "endpointkit.generator.initializer.build_client",
            lambda config: _client(store),
        )
        async with init_api_functions(FRUIT_API, transformers=[raise_for_status]) as apis:
            with pytest.raises(TransportError):
                await apis.find_by_id({"id": "99"})
        assert len(store.requests) == 1


class TestWithHeaders:
    @pytest.mark.asyncio
    async def test_headers_sent_on_every_request(self) -> None:
        store = FruitStore()
        client = with_headers({"X-Client": "shop"})(_client(store))
        async with client:
            await client.get("/fruit")
            await client.get("/fruit/1")
        assert [r.headers["X-Client"] for r in store.requests] == ["shop", "shop"]

    def test_returns_same_handle(self) -> None:
        client = build_client()
        assert with_headers({"X-A": "1"})(client) is client


class TestLogExchanges:
    @pytest.mark.asyncio
    async def test_logs_request_and_response(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="endpointkit.client.transformers")
        client = log_exchanges()(_client(FruitStore()))
        async with client:
            await client.get("/fruit/1")
        messages = [r.getMessage() for r in caplog.records]
        assert f"-> GET {BASE_URL}/fruit/1" in messages
        assert f"<- GET {BASE_URL}/fruit/1 200 OK" in messages

    @pytest.mark.asyncio
    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="shop.http")
        client = log_exchanges(logging.getLogger("shop.http"))(_client(FruitStore()))
        async with client:
            await client.delete("/fruit/2")
        assert {r.name for r in caplog.records} == {"shop.http"}
        assert caplog.records[-1].getMessage().endswith("204 No Content")
