"""Provider configuration and translation history stores.

Both stores are plain owned mutable objects with a single writer. The
provider store persists to YAML, the history to JSON.
"""

import json
import logging
from pathlib import Path

import yaml

from deeptranslate import config
from deeptranslate.errors import InvalidConfiguration
from deeptranslate.models import Provider, TranslationResult, default_providers

logger = logging.getLogger(__name__)


class ProviderStore:
    """Configured providers, exactly one of which is active.

    Args:
        providers: Initial providers. Defaults to the built-in vendors.
        active_id: Id of the active provider. An unknown id falls back to
            the first provider.
    """

    def __init__(
        self,
        providers: list[Provider] | None = None,
        active_id: str | None = None,
    ) -> None:
        self._providers: list[Provider] = (
            list(providers) if providers is not None else default_providers()
        )
        self._active_id = active_id

    @property
    def providers(self) -> tuple[Provider, ...]:
        return tuple(self._providers)

    @property
    def active(self) -> Provider:
        """The active provider, or the first one when the stored id is stale."""
        if not self._providers:
            raise InvalidConfiguration("ProviderStore", "no providers configured")
        for provider in self._providers:
            if provider.id == self._active_id:
                return provider
        return self._providers[0]

    def get(self, provider_id: str) -> Provider | None:
        for provider in self._providers:
            if provider.id == provider_id:
                return provider
        return None

    def find(self, key: str) -> Provider | None:
        """Look a provider up by id, then by case-insensitive display name."""
        found = self.get(key)
        if found is not None:
            return found
        for provider in self._providers:
            if provider.display_name.lower() == key.lower():
                return provider
        return None

    def add(self, provider: Provider) -> None:
        if self.get(provider.id) is not None:
            raise ValueError(f"Provider id '{provider.id}' already exists")
        self._providers.append(provider)
        logger.info("Added provider %s (%s)", provider.display_name, provider.kind.value)

    def update(self, provider: Provider) -> bool:
        """Replace the provider with the same id. Returns False if absent."""
        for index, existing in enumerate(self._providers):
            if existing.id == provider.id:
                self._providers[index] = provider
                return True
        return False

    def remove(self, provider_id: str) -> bool:
        """Remove a provider. Removing the active one activates the first."""
        before = len(self._providers)
        self._providers = [p for p in self._providers if p.id != provider_id]
        if len(self._providers) == before:
            return False
        if self._active_id == provider_id:
            self._active_id = self._providers[0].id if self._providers else None
        logger.info("Removed provider %s", provider_id)
        return True

    def set_active(self, provider_id: str) -> None:
        if self.get(provider_id) is None:
            raise KeyError(f"Unknown provider '{provider_id}'")
        self._active_id = provider_id

    @classmethod
    def load(cls, path: Path = config.PROVIDERS_FILE) -> "ProviderStore":
        """Load providers from YAML; missing or empty files give the defaults."""
        if not path.exists():
            logger.info("Provider file %s not found, using defaults", path)
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise InvalidConfiguration("ProviderStore", f"{path} is not valid YAML: {exc}") from exc

        if not data:
            logger.warning("Provider file %s is empty, using defaults", path)
            return cls()
        if not isinstance(data, dict):
            raise InvalidConfiguration(
                "ProviderStore", f"{path} must be a mapping with a 'providers' list"
            )
        if not data.get("providers"):
            logger.warning("Provider file %s has no providers, using defaults", path)
            return cls()

        try:
            providers = [Provider.from_dict(entry) for entry in data["providers"]]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise InvalidConfiguration(
                "ProviderStore", f"{path} has a malformed provider entry: {exc!r}"
            ) from exc
        logger.info("Loaded %d providers from %s", len(providers), path)
        return cls(providers, data.get("active"))

    def save(self, path: Path = config.PROVIDERS_FILE) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "active": self.active.id if self._providers else None,
            "providers": [provider.to_dict() for provider in self._providers],
        }
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        logger.debug("Saved %d providers to %s", len(self._providers), path)


class HistoryStore:
    """Most-recent-first translation history, capped at ``limit`` entries.

    Args:
        entries: Initial entries, newest first.
        limit: Maximum number of entries kept.
    """

    def __init__(
        self,
        entries: list[TranslationResult] | None = None,
        limit: int = config.HISTORY_LIMIT,
    ) -> None:
        self.limit = limit
        self._entries: list[TranslationResult] = list(entries or [])[:limit]

    @property
    def entries(self) -> tuple[TranslationResult, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, result: TranslationResult) -> None:
        """Insert as newest, evicting the oldest entries beyond the limit."""
        self._entries.insert(0, result)
        del self._entries[self.limit:]

    def remove(self, result_id: str) -> bool:
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.id != result_id]
        return len(self._entries) != before

    def clear(self) -> None:
        self._entries.clear()

    @classmethod
    def load(
        cls,
        path: Path = config.HISTORY_FILE,
        limit: int = config.HISTORY_LIMIT,
    ) -> "HistoryStore":
        if not path.exists():
            return cls(limit=limit)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except ValueError as exc:
            raise InvalidConfiguration("HistoryStore", f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise InvalidConfiguration("HistoryStore", f"{path} must contain a list of entries")

        try:
            entries = [TranslationResult.from_dict(entry) for entry in raw]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise InvalidConfiguration(
                "HistoryStore", f"{path} has malformed history: {exc!r}"
            ) from exc
        return cls(entries, limit=limit)

    def save(self, path: Path = config.HISTORY_FILE) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([entry.to_dict() for entry in self._entries], f, ensure_ascii=False, indent=2)
