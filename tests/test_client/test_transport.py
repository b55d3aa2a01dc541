"""Tests for transport handle construction and detection."""

from __future__ import annotations

import httpx
import pytest

from endpointkit import ClientConfig, ConfigError
from endpointkit.client import build_client, coerce_client_config, is_transport_handle


class TestIsTransportHandle:
    def test_async_client(self) -> None:
        assert is_transport_handle(httpx.AsyncClient())

    def test_object_with_request_method(self) -> None:
        class Handle:
            async def request(self, method, url, **kwargs):
                raise NotImplementedError

        assert is_transport_handle(Handle())

    @pytest.mark.parametrize("value", [None, {}, {"base_url": "x"}, ClientConfig()])
    def test_configuration_is_not_a_handle(self, value: object) -> None:
        assert not is_transport_handle(value)

    def test_non_callable_request_attribute(self) -> None:
        class NotAHandle:
            request = "GET"

        assert not is_transport_handle(NotAHandle())


class TestCoerceClientConfig:
    def test_none_gives_defaults(self) -> None:
        assert coerce_client_config(None) == ClientConfig()

    def test_model_is_returned_as_is(self) -> None:
        config = ClientConfig(base_url="https://api.example.com")
        assert coerce_client_config(config) is config

    def test_mapping_is_validated(self) -> None:
        config = coerce_client_config({"base_url": "https://api.example.com", "timeout": "2.5"})
        assert config.timeout == 2.5

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Invalid client configuration"):
            coerce_client_config({"retries": 3})


class TestBuildClient:
    def test_applies_config(self) -> None:
        client = build_client(
            ClientConfig(
                base_url="https://api.example.com/v1",
                timeout=4,
                follow_redirects=False,
                headers={"X-App": "shop"},
            )
        )
        assert isinstance(client, httpx.AsyncClient)
        assert client.base_url.path == "/v1/"
        assert client.timeout.connect == 4
        assert client.follow_redirects is False
        assert client.headers["X-App"] == "shop"

    def test_defaults(self) -> None:
        client = build_client()
        assert client.timeout.read == 30
        assert client.follow_redirects is True

    def test_each_call_builds_a_new_client(self) -> None:
        assert build_client() is not build_client()
