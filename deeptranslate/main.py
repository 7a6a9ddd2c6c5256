"""Command-line entry point: translate, list models, manage providers and history."""

import argparse
import asyncio
import logging
import sys

from deeptranslate import config
from deeptranslate.errors import InvalidConfiguration, TranslationError
from deeptranslate.languages import (
    AUTO,
    SUPPORTED_LANGUAGES,
    Language,
    find_language,
    resolve_source_language,
)
from deeptranslate.model_fetcher import ModelFetcher
from deeptranslate.models import Provider, TranslationRequest
from deeptranslate.service import TranslationService
from deeptranslate.store import HistoryStore, ProviderStore

logger = logging.getLogger(__name__)


def _language(code: str) -> Language:
    if code == AUTO.code:
        return AUTO
    language = find_language(code)
    if language is None:
        codes = ", ".join(lang.code for lang in SUPPORTED_LANGUAGES)
        raise argparse.ArgumentTypeError(f"unsupported language '{code}' (choose from: {codes})")
    return language


def _resolve_languages(
    source: Language,
    target: Language,
    detected_code: str | None,
    provider: Provider,
) -> tuple[Language, Language]:
    """Pick the concrete source and target for a translate command.

    A detected language equal to the target means the text is already in
    the target language, so an explicit pair is swapped.
    """
    detected = find_language(detected_code)
    if detected is not None and detected == target and not source.is_auto:
        return target, source

    resolved = resolve_source_language(source, detected_code)
    if resolved == target:
        if detected is None and source.is_auto:
            detail = (
                f"source language fell back to {resolved.code}, which is also the target; "
                "pass --from or --detected"
            )
        else:
            detail = f"source and target are both {resolved.code}; pass a different --from"
        raise InvalidConfiguration(provider.display_name, detail)
    return resolved, target


def _pick_provider(store: ProviderStore, key: str | None) -> Provider:
    if key is None:
        return store.active
    provider = store.find(key)
    if provider is None:
        raise SystemExit(f"Unknown provider '{key}'")
    return provider


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deeptranslate", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    p_translate = sub.add_parser("translate", help="Translate text with a provider")
    p_translate.add_argument("text")
    p_translate.add_argument("--to", dest="target", type=_language, required=True)
    p_translate.add_argument("--from", dest="source", type=_language, default=AUTO)
    p_translate.add_argument(
        "--detected",
        default=None,
        help="Language code reported by a detector; replaces --from auto, "
        "or swaps --from/--to when it equals --to",
    )
    p_translate.add_argument("--provider", default=None, help="Provider id or name")

    p_models = sub.add_parser("models", help="Show the provider's model list")
    p_models.add_argument("--provider", default=None, help="Provider id or name")
    p_models.add_argument("--refresh", action="store_true", help="Fetch even if the cache is fresh")

    p_history = sub.add_parser("history", help="Show translation history")
    p_history.add_argument("--clear", action="store_true")

    p_providers = sub.add_parser("providers", help="List configured providers")
    p_providers.add_argument("--activate", default=None, help="Provider id or name to make active")

    return parser


async def _translate(args: argparse.Namespace) -> int:
    providers = ProviderStore.load(config.PROVIDERS_FILE)
    history = HistoryStore.load(config.HISTORY_FILE)
    provider = _pick_provider(providers, args.provider)
    source, target = _resolve_languages(args.source, args.target, args.detected, provider)

    request = TranslationRequest(args.text, source, target, provider)
    async with TranslationService() as service:
        result = await service.translate_request(request)

    if result is None:
        return 0
    print(result.translated_text)
    history.add(result)
    history.save(config.HISTORY_FILE)
    return 0


async def _models(args: argparse.Namespace) -> int:
    providers = ProviderStore.load(config.PROVIDERS_FILE)
    provider = _pick_provider(providers, args.provider)
    async with ModelFetcher() as fetcher:
        refreshed = await fetcher.refresh_provider(provider, force=args.refresh)
    if refreshed is not provider:
        providers.update(refreshed)
        providers.save(config.PROVIDERS_FILE)
    for model_id in refreshed.cached_models or []:
        marker = "*" if model_id == refreshed.model_id else " "
        print(f"{marker} {model_id}")
    return 0


def _history(args: argparse.Namespace) -> int:
    history = HistoryStore.load(config.HISTORY_FILE)
    if args.clear:
        history.clear()
        history.save(config.HISTORY_FILE)
        return 0
    for entry in history.entries:
        print(
            f"{entry.timestamp:%Y-%m-%d %H:%M} [{entry.provider_name}] "
            f"{entry.source_language.code}->{entry.target_language.code}: "
            f"{entry.source_text!r} -> {entry.translated_text!r}"
        )
    return 0


def _providers(args: argparse.Namespace) -> int:
    store = ProviderStore.load(config.PROVIDERS_FILE)
    if args.activate:
        store.set_active(_pick_provider(store, args.activate).id)
        store.save(config.PROVIDERS_FILE)
    active = store.active
    for provider in store.providers:
        marker = "*" if provider.id == active.id else " "
        key_state = "key set" if provider.has_api_key else "no key"
        print(
            f"{marker} {provider.id}  {provider.display_name} "
            f"({provider.kind.value}, {provider.model_id}, {key_state})"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the deeptranslate CLI."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    args = build_parser().parse_args(argv)
    try:
        if args.command == "translate":
            return asyncio.run(_translate(args))
        if args.command == "models":
            return asyncio.run(_models(args))
        if args.command == "history":
            return _history(args)
        return _providers(args)
    except TranslationError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
