"""Shared test fixtures for endpointkit.

Every test talks to :class:`fruit_api.FruitStore` through
:class:`httpx.MockTransport`; nothing here opens a socket.
"""

from __future__ import annotations

from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from endpointkit import ApiFunctions, ResponseValidationMode, init_api_functions
from endpointkit.output import reset_output
from fruit_api import BASE_URL, FRUIT_API, FruitStore


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests():
    """Reset the global OutputManager after every test.

    The manager keeps references to sys.stdout/sys.stderr, which CliRunner
    swaps out while a command runs.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fruit backend
# ---------------------------------------------------------------------------


@pytest.fixture
def fruit_store() -> FruitStore:
    """A fresh five-fruit store."""
    return FruitStore()


@pytest_asyncio.fixture
async def fruit_client(fruit_store: FruitStore) -> AsyncIterator[httpx.AsyncClient]:
    """An AsyncClient routed to *fruit_store*."""
    async with httpx.AsyncClient(base_url=BASE_URL, transport=fruit_store.transport()) as client:
        yield client


@pytest.fixture
def fruit_apis(fruit_client: httpx.AsyncClient) -> ApiFunctions:
    """The fruit endpoint table in strict response mode."""
    return init_api_functions(FRUIT_API, fruit_client)


@pytest.fixture
def safe_fruit_apis(fruit_client: httpx.AsyncClient) -> ApiFunctions:
    """The fruit endpoint table in safe response mode."""
    return init_api_functions(FRUIT_API, fruit_client, response_mode=ResponseValidationMode.SAFE)
