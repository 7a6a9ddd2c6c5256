"""Tests for the provider model and translation value types."""

from datetime import datetime, timedelta, timezone

import pytest

from deeptranslate.models import Provider, ProviderKind, WireFormat, default_providers


class TestProviderKind:
    @pytest.mark.parametrize(
        "kind, wire_format",
        [
            (ProviderKind.OPENAI, WireFormat.OPENAI_COMPATIBLE),
            (ProviderKind.DEEPSEEK, WireFormat.OPENAI_COMPATIBLE),
            (ProviderKind.MISTRAL, WireFormat.OPENAI_COMPATIBLE),
            (ProviderKind.ANTHROPIC, WireFormat.ANTHROPIC),
            (ProviderKind.GEMINI, WireFormat.GEMINI),
            (ProviderKind.CUSTOM, WireFormat.CUSTOM),
        ],
    )
    def test_wire_format(self, kind, wire_format):
        """DeepSeek and Mistral collapse onto the OpenAI schema."""
        assert kind.wire_format is wire_format


class TestProvider:
    def test_gemini_endpoint_uses_model(self):
        provider = Provider("Gemini", ProviderKind.GEMINI, api_key="k", model_id="gemini-1.5-flash")
        assert provider.api_endpoint == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-1.5-flash:generateContent"
        )

    def test_custom_endpoint(self):
        provider = Provider(
            "Local", ProviderKind.CUSTOM, custom_endpoint=" http://localhost:8080/v1/chat/completions "
        )
        assert provider.api_endpoint == "http://localhost:8080/v1/chat/completions"
        assert not provider.requires_api_key

    def test_ids_are_unique(self):
        assert len({p.id for p in default_providers() + default_providers()}) == 10

    def test_models_cache_staleness(self):
        now = datetime(2025, 3, 10, 12, tzinfo=timezone.utc)
        provider = Provider("OpenAI", ProviderKind.OPENAI, api_key="k", model_id="gpt-4o")

        assert provider.models_cache_stale(now=now)
        assert not provider.with_models(["gpt-4o"], fetched_at=now - timedelta(days=3)).models_cache_stale(now=now)
        assert provider.with_models(["gpt-4o"], fetched_at=now - timedelta(days=4)).models_cache_stale(now=now)
        assert provider.with_models([], fetched_at=now).models_cache_stale(now=now)

    def test_dict_round_trip(self):
        provider = Provider(
            "Mistral",
            ProviderKind.MISTRAL,
            api_key="m-key",
            model_id="mistral-large",
            include_system_message=False,
        ).with_models(["mistral-large", "mistral-small"])

        restored = Provider.from_dict(provider.to_dict())

        assert restored == provider

    def test_from_dict_naive_timestamp_is_utc(self):
        provider = Provider.from_dict(
            {
                "name": "OpenAI",
                "kind": "OpenAI",
                "model": "gpt-4o",
                "cached_models": ["gpt-4o"],
                "models_fetched_at": "2025-03-01T08:00:00",
            }
        )
        assert provider.models_fetched_at.tzinfo is timezone.utc
        assert provider.api_key == ""
