"""Supported language catalog and the ``auto`` detection sentinel."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """A catalog entry: display name, language code and flag glyph."""

    name: str
    code: str
    flag: str

    @property
    def is_auto(self) -> bool:
        return self.code == AUTO_CODE


AUTO_CODE = "auto"

SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    Language("简体中文", "zh-CN", "🇨🇳"),
    Language("English", "en", "🇺🇸"),
    Language("日本語", "ja", "🇯🇵"),
    Language("Español", "es", "🇪🇸"),
    Language("Français", "fr", "🇫🇷"),
    Language("Deutsch", "de", "🇩🇪"),
    Language("Italiano", "it", "🇮🇹"),
    Language("한국어", "ko", "🇰🇷"),
    Language("Русский", "ru", "🇷🇺"),
    Language("Português", "pt", "🇵🇹"),
    Language("العربية", "ar", "🇸🇦"),
    Language("हिन्दी", "hi", "🇮🇳"),
    Language("Türkçe", "tr", "🇹🇷"),
    Language("Tiếng Việt", "vi", "🇻🇳"),
    Language("Nederlands", "nl", "🇳🇱"),
)

AUTO = Language("Auto detect", AUTO_CODE, "✨")

ENGLISH = SUPPORTED_LANGUAGES[1]


def find_language(code: str | None) -> Language | None:
    """Find the catalog entry matching a language code.

    Matching is by prefix in either direction, so a detector's ``"zh"``
    resolves to ``zh-CN`` and a locale's ``"en-US"`` resolves to ``en``.

    Args:
        code: Language code, BCP-47 tag or None.

    Returns:
        The first matching catalog entry, or None.
    """
    if not code or code == AUTO_CODE:
        return None
    for language in SUPPORTED_LANGUAGES:
        if language.code.startswith(code) or code.startswith(language.code):
            return language
    return None


def resolve_source_language(
    source: Language,
    detected_code: str | None = None,
    fallback: Language = ENGLISH,
) -> Language:
    """Turn a possibly-``auto`` source language into a concrete one.

    Args:
        source: Language chosen by the user, possibly ``AUTO``.
        detected_code: Code reported by an external language detector.
        fallback: Language used when detection gave nothing usable.

    Returns:
        A catalog language; never ``AUTO``.
    """
    if not source.is_auto:
        return source
    return find_language(detected_code) or fallback


def display_name(code: str) -> str:
    language = find_language(code)
    return language.name if language else code
