"""Vendor model listing, used to populate model pickers.

Not on the translation hot path: results are cached on the Provider and
refreshed once the cache is older than ``MODEL_CACHE_TTL_DAYS``.
"""

import logging
from datetime import datetime
from typing import Any

import httpx

from deeptranslate import config
from deeptranslate.errors import ModelFetchError
from deeptranslate.models import Provider, ProviderKind

logger = logging.getLogger(__name__)

MODEL_LIST_ENDPOINTS: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "https://api.openai.com/v1/models",
    ProviderKind.DEEPSEEK: "https://api.deepseek.com/models",
    ProviderKind.MISTRAL: "https://api.mistral.ai/v1/models",
    ProviderKind.GEMINI: "https://generativelanguage.googleapis.com/v1beta/models",
}

# Substrings of model ids that are not chat/translation models
EXCLUDED_MODEL_KEYWORDS: tuple[str, ...] = (
    # OpenAI non-chat and legacy completion models
    "dall-e", "tts", "whisper", "embedding", "embed", "moderation",
    "davinci", "babbage", "curie", "ada",
    # Other modalities
    "image", "audio", "video", "vision",
    # Coding specific
    "coder", "code-",
)


def filter_models(model_ids: list[str]) -> list[str]:
    """Drop non-chat models (case-insensitive keyword match) and sort the rest."""
    kept = [
        model_id for model_id in model_ids
        if not any(keyword in model_id.lower() for keyword in EXCLUDED_MODEL_KEYWORDS)
    ]
    return sorted(kept)


def custom_models_endpoint(endpoint: str | None) -> str | None:
    """Guess the models endpoint of a custom chat endpoint.

    ``.../chat/completions`` becomes ``.../models``; anything else gets
    ``/models`` appended. Anthropic-like ``.../messages`` endpoints have no
    listing, so None is returned for them (and for an empty endpoint).
    """
    if not endpoint or not endpoint.strip():
        return None
    endpoint = endpoint.strip()
    if endpoint.endswith("/chat/completions"):
        return endpoint[: -len("/chat/completions")] + "/models"
    if endpoint.endswith("/messages"):
        return None
    if endpoint.endswith("/"):
        return endpoint + "models"
    return endpoint + "/models"


class ModelFetcher:
    """Lists the models a vendor offers.

    Args:
        client: Shared HTTP client. When omitted, one is created with the
            configured timeout and closed in ``close()``.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(
            timeout=config.HTTP_TIMEOUT_SECONDS
        )

    async def fetch_models(
        self,
        kind: ProviderKind,
        api_key: str,
        custom_endpoint: str | None = None,
    ) -> list[str]:
        """Fetch, filter and sort the vendor's model ids.

        Returns an empty list when listing is impossible: no key for a
        vendor that needs one, Anthropic (no listing endpoint), or a custom
        endpoint that does not look OpenAI-compatible.

        Raises:
            ModelFetchError: Network failure, non-2xx status or bad JSON.
        """
        name = kind.value
        if kind is not ProviderKind.CUSTOM and not api_key:
            return []

        if kind is ProviderKind.ANTHROPIC:
            return []

        if kind is ProviderKind.GEMINI:
            data = await self._get_json(name, MODEL_LIST_ENDPOINTS[kind], params={"key": api_key})
            names = self._collect(name, data, "models", "name")
            return filter_models([model.removeprefix("models/") for model in names])

        headers: dict[str, str] = {}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        if kind is ProviderKind.CUSTOM:
            url = custom_models_endpoint(custom_endpoint)
            if url is None:
                return []
        else:
            url = MODEL_LIST_ENDPOINTS[kind]

        data = await self._get_json(name, url, headers=headers)
        return filter_models(self._collect(name, data, "data", "id"))

    async def refresh_provider(
        self,
        provider: Provider,
        force: bool = False,
        now: datetime | None = None,
    ) -> Provider:
        """Return the provider with a fresh model cache.

        The provider is returned unchanged when its cache is still fresh (and
        ``force`` is False) or when the vendor returned no models.
        """
        if not force and not provider.models_cache_stale(now=now):
            return provider
        logger.info("Refreshing model list for %s", provider.display_name)
        models = await self.fetch_models(
            provider.kind, provider.api_key.strip(), provider.custom_endpoint
        )
        if not models:
            return provider
        return provider.with_models(models, fetched_at=now)

    async def _get_json(
        self,
        name: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        try:
            response = await self._client.get(url, headers=headers, params=params)
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise ModelFetchError(name, str(exc) or type(exc).__name__) from exc
        if not response.is_success:
            logger.error(
                "%s model list error: %s %s", name, response.status_code, response.reason_phrase
            )
            raise ModelFetchError(name, response.text or "Unknown Error", response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise ModelFetchError(name, "body is not valid JSON") from exc

    @staticmethod
    def _collect(name: str, data: Any, list_key: str, item_key: str) -> list[str]:
        items = data.get(list_key) if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ModelFetchError(name, f"missing '{list_key}' list")
        values = []
        for item in items:
            if not isinstance(item, dict) or not isinstance(item.get(item_key), str):
                raise ModelFetchError(name, f"'{list_key}' entry without '{item_key}'")
            values.append(item[item_key])
        return values

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ModelFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
