"""Translation error taxonomy.

Every error carries a human-readable message naming the provider, so callers
can display ``str(exc)`` directly.
"""


class TranslationError(Exception):
    """Base class for all translation and model-listing failures."""

    def __init__(self, provider_name: str, message: str) -> None:
        super().__init__(message)
        self.provider_name = provider_name


class MissingCredential(TranslationError):
    """The provider needs an API key and none is configured."""

    def __init__(self, provider_name: str) -> None:
        super().__init__(provider_name, f"{provider_name}: API key is not set")


class InvalidConfiguration(TranslationError):
    """The provider or request cannot be sent as configured."""

    def __init__(self, provider_name: str, detail: str) -> None:
        super().__init__(provider_name, f"{provider_name}: invalid configuration: {detail}")
        self.detail = detail


class TransportFailure(TranslationError):
    """Network-level failure (timeout, DNS, TLS, connection reset)."""

    def __init__(self, provider_name: str, cause: Exception) -> None:
        reason = str(cause) or type(cause).__name__
        super().__init__(provider_name, f"{provider_name}: network error: {reason}")
        self.cause = cause


class HttpStatusFailure(TranslationError):
    """The vendor answered with a status outside 200-299."""

    def __init__(self, provider_name: str, status_code: int, body: str) -> None:
        super().__init__(
            provider_name, f"{provider_name} API error ({status_code}): {body or 'Unknown Error'}"
        )
        self.status_code = status_code
        self.body = body


class UnparseableResponse(TranslationError):
    """2xx response whose body does not have the expected shape."""

    def __init__(self, provider_name: str, detail: str, body: str = "") -> None:
        super().__init__(provider_name, f"{provider_name}: unparseable response: {detail}")
        self.detail = detail
        self.body = body


class TranslationCancelled(TranslationError):
    """The caller cancelled the translation before it completed."""

    def __init__(self, provider_name: str) -> None:
        super().__init__(provider_name, f"{provider_name}: translation cancelled")


class ModelFetchError(TranslationError):
    """Listing the vendor's models failed."""

    def __init__(self, provider_name: str, detail: str, status_code: int | None = None) -> None:
        super().__init__(provider_name, f"{provider_name}: failed to fetch models: {detail}")
        self.detail = detail
        self.status_code = status_code
