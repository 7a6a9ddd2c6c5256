"""Gemini generateContent adapter."""

import httpx

from deeptranslate import config
from deeptranslate.adapters.base import TranslationAdapter
from deeptranslate.languages import Language
from deeptranslate.prompts import build_prompt


class GeminiAdapter(TranslationAdapter):
    """Translates through Gemini's ``generateContent`` endpoint.

    The API key travels only as the ``key`` query parameter, never as a header.
    """

    def build_request(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> httpx.Request:
        payload = {
            "contents": [{"parts": [{"text": build_prompt(text, source, target)}]}],
            "generationConfig": {"temperature": config.TRANSLATION_TEMPERATURE},
        }
        return client.build_request(
            "POST",
            self.provider.api_endpoint,
            params={"key": self.provider.api_key},
            json=payload,
        )

    def parse_response(self, response: httpx.Response) -> str:
        return self.extract_text(response, "candidates", 0, "content", "parts", 0, "text")
