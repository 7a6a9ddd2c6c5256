"""Translation orchestrator.

Validates a call, picks the adapter for the provider's wire format, performs
the single HTTP attempt and keeps call-scoped in-flight accounting.

Key design: in-flight state is a counter, not a shared boolean, so an early
finishing call never reports "idle" while another call is still running.
"""

import asyncio
import logging
import time

import httpx

from deeptranslate import config
from deeptranslate.adapters import adapter_for
from deeptranslate.errors import (
    InvalidConfiguration,
    MissingCredential,
    TranslationCancelled,
    TranslationError,
)
from deeptranslate.languages import Language
from deeptranslate.models import Provider, TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)


class TranslationHandle:
    """A running translation that the caller may cancel.

    Args:
        task: Task running ``TranslationService.translate``.
        provider_name: Provider display name, for the cancellation error.
    """

    def __init__(self, task: asyncio.Task[str], provider_name: str) -> None:
        self._task = task
        self._provider_name = provider_name
        self._cancel_requested = False

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> bool:
        """Abort the HTTP call. Returns False if the call already finished."""
        self._cancel_requested = True
        return self._task.cancel()

    async def result(self) -> str:
        """Wait for the translation.

        Raises:
            TranslationCancelled: ``cancel()`` was called before completion.
            TranslationError: Any adapter or validation failure.
        """
        try:
            return await self._task
        except asyncio.CancelledError:
            # Only convert our own cancellation; a cancelled waiter re-raises
            if self._cancel_requested and self._task.cancelled():
                raise TranslationCancelled(self._provider_name) from None
            raise


class TranslationService:
    """Coordinates validation, adapter dispatch and in-flight state.

    Args:
        client: Shared HTTP client. When omitted, the service creates one
            with ``timeout`` and closes it in ``close()``.
        timeout: Per-call timeout in seconds for the owned client.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = config.HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of translations currently waiting on the network."""
        return self._in_flight

    @property
    def is_translating(self) -> bool:
        return self._in_flight > 0

    async def translate(
        self,
        text: str,
        source: Language,
        target: Language,
        provider: Provider,
    ) -> str:
        """Translate text with the given provider.

        Args:
            text: Text to translate. Whitespace-only text is a no-op.
            source: Concrete source language (``auto`` must be resolved first).
            target: Concrete target language.
            provider: Backend to call.

        Returns:
            The trimmed translation, or ``""`` when there was nothing to
            translate (no network call is made in that case).

        Raises:
            MissingCredential: The provider needs an API key and has none.
            InvalidConfiguration: ``auto`` language or unusable provider setup.
            TransportFailure: Network-level failure.
            HttpStatusFailure: Non-2xx vendor response.
            UnparseableResponse: 2xx response with an unexpected shape.
        """
        if not text.strip():
            logger.debug("Empty input, nothing to translate")
            return ""

        if provider.requires_api_key and not provider.has_api_key:
            raise MissingCredential(provider.display_name)

        for language in (source, target):
            if language.is_auto:
                raise InvalidConfiguration(
                    provider.display_name,
                    "language 'auto' must be resolved before translating",
                )

        adapter = adapter_for(provider)
        logger.debug(
            "Dispatching %s->%s to %s (%s)",
            source.code,
            target.code,
            provider.display_name,
            type(adapter).__name__,
        )

        self._in_flight += 1
        started = time.perf_counter()
        try:
            translated = await adapter.translate(self._client, text, source, target)
        except asyncio.CancelledError:
            logger.info("Translation via %s cancelled", provider.display_name)
            raise
        except TranslationError as exc:
            logger.warning("Translation via %s failed: %s", provider.display_name, exc)
            raise
        finally:
            self._in_flight -= 1

        logger.info(
            "Translated %d chars %s->%s via %s in %.0fms",
            len(text),
            source.code,
            target.code,
            provider.display_name,
            (time.perf_counter() - started) * 1000,
        )
        return translated

    async def translate_request(self, request: TranslationRequest) -> TranslationResult | None:
        """Translate a request and wrap the outcome for the history store.

        Returns:
            The result, or None when the translation came back empty.
        """
        translated = await self.translate(
            request.text, request.source, request.target, request.provider
        )
        if not translated:
            return None
        return TranslationResult(
            source_text=request.text,
            translated_text=translated,
            source_language=request.source,
            target_language=request.target,
            provider_name=request.provider.display_name,
        )

    def submit(
        self,
        text: str,
        source: Language,
        target: Language,
        provider: Provider,
    ) -> TranslationHandle:
        """Start a translation in the background and return a cancellable handle."""
        task = asyncio.create_task(self.translate(text, source, target, provider))
        return TranslationHandle(task, provider.display_name)

    async def close(self) -> None:
        """Close the underlying HTTP client if this service created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TranslationService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
