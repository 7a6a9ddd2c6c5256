"""Anthropic messages API adapter."""

import httpx

from deeptranslate import config
from deeptranslate.adapters.base import TranslationAdapter
from deeptranslate.languages import Language
from deeptranslate.models import Provider
from deeptranslate.prompts import build_prompt


class AnthropicAdapter(TranslationAdapter):
    """Translates through Anthropic's ``/v1/messages`` endpoint.

    Args:
        provider: Anthropic provider configuration.
        legacy_headers: Send ``Authorization: Bearer`` and ``x-api-version``
            as older app releases did, instead of the documented
            ``x-api-key`` and ``anthropic-version`` headers.
    """

    def __init__(self, provider: Provider, legacy_headers: bool | None = None) -> None:
        super().__init__(provider)
        if legacy_headers is None:
            legacy_headers = config.ANTHROPIC_LEGACY_HEADERS
        self.legacy_headers = legacy_headers

    def build_headers(self) -> dict[str, str]:
        if self.legacy_headers:
            return {
                "Authorization": f"Bearer {self.provider.api_key}",
                "x-api-version": config.ANTHROPIC_API_VERSION,
            }
        return {
            "x-api-key": self.provider.api_key,
            "anthropic-version": config.ANTHROPIC_API_VERSION,
        }

    def build_request(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> httpx.Request:
        payload = {
            "model": self.provider.model_id,
            "messages": [{"role": "user", "content": build_prompt(text, source, target)}],
            "max_tokens": config.ANTHROPIC_MAX_TOKENS,
            "temperature": config.TRANSLATION_TEMPERATURE,
        }
        return client.build_request(
            "POST",
            self.provider.api_endpoint,
            json=payload,
            headers=self.build_headers(),
        )

    def parse_response(self, response: httpx.Response) -> str:
        return self.extract_text(response, "content", 0, "text")
