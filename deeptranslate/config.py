"""Environment variable loading with defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .envdefault first (base defaults), then .env (overrides)
_base_dir = Path(__file__).resolve().parent.parent
load_dotenv(_base_dir / ".envdefault")
load_dotenv(_base_dir / ".env", override=True)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# HTTP
HTTP_TIMEOUT_SECONDS: float = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "30"))

# Sampling
TRANSLATION_TEMPERATURE: float = float(os.environ.get("TRANSLATION_TEMPERATURE", "0.1"))

# Anthropic
ANTHROPIC_API_VERSION: str = os.environ.get("ANTHROPIC_API_VERSION", "2023-06-01")
ANTHROPIC_MAX_TOKENS: int = int(os.environ.get("ANTHROPIC_MAX_TOKENS", "1000"))
# true: Authorization: Bearer + x-api-version (historical app behavior)
# false: x-api-key + anthropic-version (vendor documented)
ANTHROPIC_LEGACY_HEADERS: bool = _env_bool("ANTHROPIC_LEGACY_HEADERS", "false")

# Model list cache
MODEL_CACHE_TTL_DAYS: float = float(os.environ.get("MODEL_CACHE_TTL_DAYS", "3"))

# Stores
HISTORY_LIMIT: int = int(os.environ.get("HISTORY_LIMIT", "100"))
PROVIDERS_FILE: Path = Path(os.environ.get("PROVIDERS_FILE", "providers.yaml"))
HISTORY_FILE: Path = Path(os.environ.get("HISTORY_FILE", "history.json"))

# Logging
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
