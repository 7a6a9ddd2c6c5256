"""OpenAI-compatible chat-completions adapter (OpenAI, DeepSeek, Mistral)."""

from typing import Any

import httpx

from deeptranslate import config
from deeptranslate.adapters.base import TranslationAdapter
from deeptranslate.languages import Language
from deeptranslate.prompts import SYSTEM_PROMPT, build_prompt


class OpenAICompatibleAdapter(TranslationAdapter):
    """Speaks the ``messages`` / ``choices`` chat-completions schema."""

    def build_messages(self, text: str, source: Language, target: Language) -> list[dict[str, str]]:
        messages = []
        if self.provider.include_system_message:
            messages.append({"role": "system", "content": SYSTEM_PROMPT})
        messages.append({"role": "user", "content": build_prompt(text, source, target)})
        return messages

    def build_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.provider.api_key}"}

    def build_request(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> httpx.Request:
        payload: dict[str, Any] = {
            "model": self.provider.model_id,
            "messages": self.build_messages(text, source, target),
            "temperature": config.TRANSLATION_TEMPERATURE,
        }
        return client.build_request(
            "POST",
            self.provider.api_endpoint,
            json=payload,
            headers=self.build_headers(),
        )

    def parse_response(self, response: httpx.Response) -> str:
        return self.extract_text(response, "choices", 0, "message", "content")
