from deeptranslate.adapters.anthropic import AnthropicAdapter
from deeptranslate.adapters.base import TranslationAdapter
from deeptranslate.adapters.custom import CustomAdapter
from deeptranslate.adapters.gemini import GeminiAdapter
from deeptranslate.adapters.openai_compat import OpenAICompatibleAdapter
from deeptranslate.models import Provider, WireFormat

ADAPTERS: dict[WireFormat, type[TranslationAdapter]] = {
    WireFormat.OPENAI_COMPATIBLE: OpenAICompatibleAdapter,
    WireFormat.ANTHROPIC: AnthropicAdapter,
    WireFormat.GEMINI: GeminiAdapter,
    WireFormat.CUSTOM: CustomAdapter,
}


def adapter_for(provider: Provider) -> TranslationAdapter:
    """Build the adapter matching a provider's wire format."""
    cls = ADAPTERS.get(provider.kind.wire_format)
    if cls is None:
        raise ValueError(
            f"No adapter for wire format '{provider.kind.wire_format}'. "
            f"Available: {[fmt.value for fmt in ADAPTERS]}"
        )
    return cls(provider)


__all__ = [
    "ADAPTERS",
    "AnthropicAdapter",
    "CustomAdapter",
    "GeminiAdapter",
    "OpenAICompatibleAdapter",
    "TranslationAdapter",
    "adapter_for",
]
