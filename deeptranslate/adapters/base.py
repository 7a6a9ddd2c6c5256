"""Abstract translation adapter interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from deeptranslate.errors import (
    HttpStatusFailure,
    InvalidConfiguration,
    TransportFailure,
    UnparseableResponse,
)
from deeptranslate.languages import Language
from deeptranslate.models import Provider

logger = logging.getLogger(__name__)

# A JSON path step: dict key or list index
PathStep = str | int


def format_path(path: tuple[PathStep, ...]) -> str:
    """Render ``("choices", 0, "message")`` as ``choices[0].message``."""
    rendered = ""
    for step in path:
        if isinstance(step, int):
            rendered += f"[{step}]"
        else:
            rendered += f".{step}" if rendered else step
    return rendered


class TranslationAdapter(ABC):
    """Base class for all vendor wire-format adapters.

    An adapter turns a translation call into one vendor HTTP request and the
    vendor's JSON answer back into plain text. It holds no state besides the
    provider it was built for.

    Args:
        provider: Provider configuration the requests are built from.
    """

    def __init__(self, provider: Provider) -> None:
        self.provider = provider

    @property
    def name(self) -> str:
        return self.provider.display_name

    def validate(self) -> None:
        """Raise InvalidConfiguration if the provider cannot be called."""
        if not self.provider.model_id.strip():
            raise InvalidConfiguration(self.name, "model id is not set")

    @abstractmethod
    def build_request(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> httpx.Request:
        """Build the vendor HTTP request for one translation.

        Args:
            client: Client used to build (and later send) the request.
            text: Source text, embedded verbatim in the prompt.
            source: Concrete source language.
            target: Concrete target language.

        Returns:
            A request ready for ``client.send``.
        """
        ...

    @abstractmethod
    def parse_response(self, response: httpx.Response) -> str:
        """Extract the trimmed translated text from a 2xx vendor response.

        Raises:
            UnparseableResponse: The body does not have the expected shape.
        """
        ...

    async def translate(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> str:
        """Translate text with a single HTTP round trip."""
        self.validate()
        request = self.build_request(client, text, source, target)
        response = await self.send(client, request)
        return self.parse_response(response)

    async def send(self, client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
        """Send a request, normalizing transport and status failures."""
        try:
            response = await client.send(request)
        except httpx.TransportError as exc:
            logger.error("%s request failed: %s", self.name, exc.__class__.__name__)
            raise TransportFailure(self.name, exc) from exc

        if not response.is_success:
            logger.error(
                "%s API error: %s %s",
                self.name,
                response.status_code,
                response.reason_phrase,
            )
            raise HttpStatusFailure(self.name, response.status_code, response.text)
        return response

    def json_body(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise UnparseableResponse(self.name, "body is not valid JSON", response.text) from exc

    def extract_text(self, response: httpx.Response, *path: PathStep) -> str:
        """Follow a JSON path to a string field and return it trimmed.

        Missing keys, out-of-range indices (e.g. an empty ``choices`` list),
        wrong container types and non-string leaves all raise
        UnparseableResponse. An empty string leaf is returned as ``""``.
        """
        node = self.json_body(response)
        for step in path:
            if isinstance(step, int):
                found = isinstance(node, list) and -len(node) <= step < len(node)
            else:
                found = isinstance(node, dict) and step in node
            if not found:
                raise UnparseableResponse(
                    self.name, f"missing {format_path(path)}", response.text
                )
            node = node[step]
        if not isinstance(node, str):
            raise UnparseableResponse(
                self.name, f"{format_path(path)} is not a string", response.text
            )
        return node.strip()
