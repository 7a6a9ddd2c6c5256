"""Shared fixtures: fake HTTP transport and sample providers."""

import json
from typing import Any, Callable, Iterator

import httpx
import pytest
import pytest_asyncio

from deeptranslate.languages import find_language
from deeptranslate.models import Provider, ProviderKind


class FakeTransport:
    """Records requests and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], Any] = lambda request: httpx.Response(
            200, json={"choices": [{"message": {"content": "ok"}}]}
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def respond_json(self, payload: Any, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=payload)

    def respond_text(self, text: str, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, text=text)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest_asyncio.fixture
async def client(transport):
    async with httpx.AsyncClient(transport=httpx.MockTransport(transport)) as c:
        yield c


@pytest.fixture
def english():
    return find_language("en")


@pytest.fixture
def french():
    return find_language("fr")


@pytest.fixture
def make_provider() -> Callable[..., Provider]:
    """Factory for providers with a key and model set, unless overridden."""

    def _make(kind: ProviderKind, **overrides: Any) -> Provider:
        values: dict[str, Any] = {
            "display_name": kind.value,
            "kind": kind,
            "api_key": "secret-key",
            "model_id": "test-model",
        }
        if kind is ProviderKind.CUSTOM:
            values["custom_endpoint"] = "http://localhost:1234/v1/chat/completions"
        values.update(overrides)
        return Provider(**values)

    return _make


@pytest.fixture
def builder(transport) -> Iterator[httpx.Client]:
    """Client used only to build requests in synchronous tests, closed afterwards."""
    with httpx.Client(transport=httpx.MockTransport(transport)) as builder_client:
        yield builder_client
