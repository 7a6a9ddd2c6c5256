"""Tests for vendor model listing, filtering and cache refresh."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from deeptranslate.errors import ModelFetchError
from deeptranslate.model_fetcher import ModelFetcher, custom_models_endpoint, filter_models
from deeptranslate.models import ProviderKind


@pytest.fixture
def fetcher(client):
    return ModelFetcher(client=client)


class TestFilterModels:
    """Non-chat models are dropped, the rest sorted."""

    def test_reference_list(self):
        models = ["gpt-4o", "dall-e-3", "whisper-1", "text-embedding-3-small", "gpt-4o-mini"]
        assert filter_models(models) == ["gpt-4o", "gpt-4o-mini"]

    def test_case_insensitive(self):
        assert filter_models(["TTS-1-HD", "Omni-Moderation-Latest", "mistral-large"]) == [
            "mistral-large"
        ]

    def test_coding_and_modalities_excluded(self):
        models = ["codestral-latest", "deepseek-coder", "gemini-1.5-pro", "imagen-3", "code-bison"]
        assert filter_models(models) == ["codestral-latest", "gemini-1.5-pro"]


class TestCustomModelsEndpoint:
    """Heuristic rewrite of custom chat endpoints."""

    @pytest.mark.parametrize(
        "endpoint, expected",
        [
            ("http://localhost:1234/v1/chat/completions", "http://localhost:1234/v1/models"),
            ("http://localhost:11434/v1", "http://localhost:11434/v1/models"),
            ("http://localhost:11434/v1/", "http://localhost:11434/v1/models"),
            ("https://proxy.example.com/v1/messages", None),
            ("", None),
            (None, None),
        ],
    )
    def test_rewrite(self, endpoint, expected):
        assert custom_models_endpoint(endpoint) == expected


class TestFetchModels:
    """Per-vendor listing requests and parsing."""

    @pytest.mark.asyncio
    async def test_openai_style(self, fetcher, transport):
        transport.respond_json(
            {"data": [{"id": "gpt-4o-mini"}, {"id": "whisper-1"}, {"id": "gpt-4o"}]}
        )

        models = await fetcher.fetch_models(ProviderKind.OPENAI, "sk-test")

        assert models == ["gpt-4o", "gpt-4o-mini"]
        request = transport.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://api.openai.com/v1/models"
        assert request.headers["Authorization"] == "Bearer sk-test"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind, url",
        [
            (ProviderKind.DEEPSEEK, "https://api.deepseek.com/models"),
            (ProviderKind.MISTRAL, "https://api.mistral.ai/v1/models"),
        ],
    )
    async def test_openai_compatible_vendors(self, fetcher, transport, kind, url):
        transport.respond_json({"data": [{"id": "chat-model"}]})
        assert await fetcher.fetch_models(kind, "key") == ["chat-model"]
        assert str(transport.requests[0].url) == url

    @pytest.mark.asyncio
    async def test_gemini_strips_prefix_and_uses_query_key(self, fetcher, transport):
        transport.respond_json(
            {
                "models": [
                    {"name": "models/gemini-1.5-pro", "displayName": "Gemini 1.5 Pro"},
                    {"name": "models/text-embedding-004"},
                    {"name": "models/gemini-1.5-flash"},
                ]
            }
        )

        models = await fetcher.fetch_models(ProviderKind.GEMINI, "g-key")

        assert models == ["gemini-1.5-flash", "gemini-1.5-pro"]
        request = transport.requests[0]
        assert request.url.params["key"] == "g-key"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_anthropic_has_no_listing(self, fetcher, transport):
        assert await fetcher.fetch_models(ProviderKind.ANTHROPIC, "key") == []
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_missing_key_returns_empty(self, fetcher, transport):
        assert await fetcher.fetch_models(ProviderKind.OPENAI, "") == []
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_custom_keyless(self, fetcher, transport):
        """Custom endpoints are listed without a key and without auth."""
        transport.respond_json({"data": [{"id": "llama3"}, {"id": "nomic-embed-text"}]})

        models = await fetcher.fetch_models(
            ProviderKind.CUSTOM, "", "http://localhost:11434/v1/chat/completions"
        )

        assert models == ["llama3"]
        request = transport.requests[0]
        assert str(request.url) == "http://localhost:11434/v1/models"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_custom_messages_endpoint_is_skipped(self, fetcher, transport):
        models = await fetcher.fetch_models(
            ProviderKind.CUSTOM, "key", "https://proxy.example.com/v1/messages"
        )
        assert models == []
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_http_error(self, fetcher, transport):
        transport.respond_text("invalid key", status_code=401)

        with pytest.raises(ModelFetchError) as exc_info:
            await fetcher.fetch_models(ProviderKind.OPENAI, "bad")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_malformed_body(self, fetcher, transport):
        transport.respond_json({"object": "list"})

        with pytest.raises(ModelFetchError):
            await fetcher.fetch_models(ProviderKind.MISTRAL, "key")

    @pytest.mark.asyncio
    async def test_transport_error(self, fetcher, transport):
        def fail(request):
            raise httpx.ConnectError("unreachable", request=request)

        transport.handler = fail

        with pytest.raises(ModelFetchError):
            await fetcher.fetch_models(ProviderKind.DEEPSEEK, "key")


class TestRefreshProvider:
    """Model cache staleness (3 days)."""

    @pytest.mark.asyncio
    async def test_fresh_cache_is_kept(self, fetcher, transport, make_provider):
        now = datetime(2025, 3, 10, tzinfo=timezone.utc)
        provider = make_provider(ProviderKind.OPENAI).with_models(
            ["gpt-4o"], fetched_at=now - timedelta(days=2)
        )

        assert await fetcher.refresh_provider(provider, now=now) is provider
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_stale_cache_is_refreshed(self, fetcher, transport, make_provider):
        now = datetime(2025, 3, 10, tzinfo=timezone.utc)
        transport.respond_json({"data": [{"id": "gpt-4.1"}, {"id": "gpt-4o"}]})
        provider = make_provider(ProviderKind.OPENAI).with_models(
            ["gpt-4o"], fetched_at=now - timedelta(days=3, seconds=1)
        )

        refreshed = await fetcher.refresh_provider(provider, now=now)

        assert refreshed.cached_models == ["gpt-4.1", "gpt-4o"]
        assert refreshed.models_fetched_at == now
        assert refreshed.id == provider.id

    @pytest.mark.asyncio
    async def test_force_refresh(self, fetcher, transport, make_provider):
        now = datetime(2025, 3, 10, tzinfo=timezone.utc)
        transport.respond_json({"data": [{"id": "deepseek-chat"}]})
        provider = make_provider(ProviderKind.DEEPSEEK).with_models(["old"], fetched_at=now)

        refreshed = await fetcher.refresh_provider(provider, force=True, now=now)
        assert refreshed.cached_models == ["deepseek-chat"]

    @pytest.mark.asyncio
    async def test_empty_listing_keeps_provider(self, fetcher, transport, make_provider):
        """Anthropic lists nothing, so the provider is returned as-is."""
        provider = make_provider(ProviderKind.ANTHROPIC)
        assert await fetcher.refresh_provider(provider) is provider
