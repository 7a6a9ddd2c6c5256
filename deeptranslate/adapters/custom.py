"""Custom endpoint adapter: OpenAI-compatible with a plain-text fallback."""

import logging

import httpx

from deeptranslate.adapters.openai_compat import OpenAICompatibleAdapter
from deeptranslate.errors import InvalidConfiguration, UnparseableResponse
from deeptranslate.languages import Language

logger = logging.getLogger(__name__)


class CustomAdapter(OpenAICompatibleAdapter):
    """Calls a user-supplied endpoint, typically a self-hosted model server.

    Requests use the OpenAI chat-completions shape. Many local servers answer
    with plain text rather than JSON, so a 2xx body that does not parse as a
    chat completion is returned as-is (trimmed). HTTP and network failures
    still propagate.
    """

    def validate(self) -> None:
        super().validate()
        endpoint = self.provider.api_endpoint
        if not endpoint:
            raise InvalidConfiguration(self.name, "custom endpoint is not set")
        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as exc:
            raise InvalidConfiguration(self.name, f"invalid endpoint {endpoint!r}: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidConfiguration(
                self.name, f"endpoint must be an absolute http(s) URL, got {endpoint!r}"
            )

    def build_headers(self) -> dict[str, str]:
        # Keyless local servers get no Authorization header
        if not self.provider.has_api_key:
            return {}
        return super().build_headers()

    async def translate(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> str:
        self.validate()
        request = self.build_request(client, text, source, target)
        response = await self.send(client, request)
        try:
            return self.parse_response(response)
        except UnparseableResponse as exc:
            logger.debug("%s: %s, using raw body as translation", self.name, exc.detail)
            return response.text.strip()
