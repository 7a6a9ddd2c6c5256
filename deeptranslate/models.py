"""Provider configuration and translation value types."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from deeptranslate import config
from deeptranslate.languages import Language


class WireFormat(str, Enum):
    """Request/response schema family spoken by a provider."""

    OPENAI_COMPATIBLE = "openai_compatible"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    CUSTOM = "custom"


class ProviderKind(str, Enum):
    """Vendor of a configured translation backend."""

    OPENAI = "OpenAI"
    DEEPSEEK = "DeepSeek"
    ANTHROPIC = "Anthropic"
    GEMINI = "Gemini"
    MISTRAL = "Mistral"
    CUSTOM = "Custom"

    @property
    def wire_format(self) -> WireFormat:
        # DeepSeek and Mistral speak OpenAI's chat-completions schema
        if self in (ProviderKind.OPENAI, ProviderKind.DEEPSEEK, ProviderKind.MISTRAL):
            return WireFormat.OPENAI_COMPATIBLE
        if self is ProviderKind.ANTHROPIC:
            return WireFormat.ANTHROPIC
        if self is ProviderKind.GEMINI:
            return WireFormat.GEMINI
        return WireFormat.CUSTOM


CHAT_ENDPOINTS: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "https://api.openai.com/v1/chat/completions",
    ProviderKind.DEEPSEEK: "https://api.deepseek.com/v1/chat/completions",
    ProviderKind.ANTHROPIC: "https://api.anthropic.com/v1/messages",
    ProviderKind.GEMINI: "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
    ProviderKind.MISTRAL: "https://api.mistral.ai/v1/chat/completions",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if not value:
        return None
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Provider:
    """A configured translation backend.

    Attributes:
        display_name: User-facing label, also used in error messages.
        kind: Vendor; selects the wire format.
        api_key: Secret credential. May be empty only for CUSTOM.
        model_id: Model identifier passed to the vendor API.
        custom_endpoint: Absolute chat endpoint, CUSTOM only.
        include_system_message: Send the translator system message in
            OpenAI-compatible requests.
        cached_models: Last fetched model list.
        models_fetched_at: When ``cached_models`` was fetched (UTC).
        id: Opaque unique identifier.
    """

    display_name: str
    kind: ProviderKind
    api_key: str = ""
    model_id: str = ""
    custom_endpoint: str | None = None
    include_system_message: bool = True
    cached_models: list[str] | None = None
    models_fetched_at: datetime | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def api_endpoint(self) -> str:
        if self.kind is ProviderKind.CUSTOM:
            return (self.custom_endpoint or "").strip()
        return CHAT_ENDPOINTS[self.kind].format(model=self.model_id)

    @property
    def requires_api_key(self) -> bool:
        return self.kind is not ProviderKind.CUSTOM

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    def models_cache_stale(
        self,
        now: datetime | None = None,
        ttl: timedelta = timedelta(days=config.MODEL_CACHE_TTL_DAYS),
    ) -> bool:
        """Return True when the model list should be fetched again."""
        if not self.cached_models or self.models_fetched_at is None:
            return True
        return (now or _utcnow()) - self.models_fetched_at > ttl

    def with_models(self, models: list[str], fetched_at: datetime | None = None) -> "Provider":
        return replace(self, cached_models=list(models), models_fetched_at=fetched_at or _utcnow())

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.display_name,
            "kind": self.kind.value,
            "api_key": self.api_key,
            "model": self.model_id,
        }
        if self.custom_endpoint:
            data["endpoint"] = self.custom_endpoint
        if not self.include_system_message:
            data["include_system_message"] = False
        if self.cached_models:
            data["cached_models"] = list(self.cached_models)
        if self.models_fetched_at is not None:
            data["models_fetched_at"] = self.models_fetched_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Provider":
        kwargs: dict[str, Any] = {}
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(
            display_name=data.get("name", ""),
            kind=ProviderKind(data["kind"]),
            api_key=data.get("api_key", "") or "",
            model_id=data.get("model", "") or "",
            custom_endpoint=data.get("endpoint"),
            include_system_message=data.get("include_system_message", True),
            cached_models=data.get("cached_models"),
            models_fetched_at=_parse_datetime(data.get("models_fetched_at")),
            **kwargs,
        )


def default_providers() -> list[Provider]:
    """The built-in vendor providers, without credentials."""
    return [
        Provider("OpenAI", ProviderKind.OPENAI, model_id="gpt-4o"),
        Provider("DeepSeek", ProviderKind.DEEPSEEK, model_id="deepseek-chat"),
        Provider("Anthropic", ProviderKind.ANTHROPIC, model_id="claude-3-sonnet"),
        Provider("Gemini", ProviderKind.GEMINI, model_id="gemini-pro"),
        Provider("Mistral", ProviderKind.MISTRAL, model_id="mistral-large"),
    ]


@dataclass(frozen=True)
class TranslationRequest:
    """One translation call: text, languages and the provider to use."""

    text: str
    source: Language
    target: Language
    provider: Provider


def _language_to_dict(language: Language) -> dict[str, str]:
    return {"name": language.name, "code": language.code, "flag": language.flag}


def _language_from_dict(data: dict[str, str]) -> Language:
    return Language(data["name"], data["code"], data.get("flag", ""))


@dataclass(frozen=True)
class TranslationResult:
    """A completed translation, as kept in history."""

    source_text: str
    translated_text: str
    source_language: Language
    target_language: Language
    provider_name: str
    timestamp: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source_text": self.source_text,
            "translated_text": self.translated_text,
            "source_language": _language_to_dict(self.source_language),
            "target_language": _language_to_dict(self.target_language),
            "provider": self.provider_name,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranslationResult":
        return cls(
            source_text=data["source_text"],
            translated_text=data["translated_text"],
            source_language=_language_from_dict(data["source_language"]),
            target_language=_language_from_dict(data["target_language"]),
            provider_name=data["provider"],
            timestamp=_parse_datetime(data["timestamp"]) or _utcnow(),
            id=data["id"],
        )
