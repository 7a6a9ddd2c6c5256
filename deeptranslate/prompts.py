"""Translator prompt templates shared by all adapters."""

from deeptranslate.languages import Language

SYSTEM_PROMPT = (
    "You are a professional translator. Just provide the accurate translation, no extra content."
)


def build_prompt(text: str, source: Language, target: Language) -> str:
    """Build the user prompt asking for a translation-only answer.

    The source text is concatenated verbatim (no formatting or escaping) so
    quotes, braces, newlines and any script survive unchanged.
    """
    header = f"Please translate the following {source.name} text to {target.name}:"
    footer = "Return only the translated text, no extra content."
    return header + "\n\n" + text + "\n\n" + footer
