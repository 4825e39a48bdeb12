"""Core exception hierarchy for enrichr.

All enrichr exceptions inherit from EnrichrError, enabling both specific
and broad exception handling. Pipeline stages catch these at their
boundaries and turn them into skips or short-circuits; only configuration
errors are fatal.

Exception Hierarchy:
    EnrichrError (base)
    ├── FetchError - retrieving a page failed
    │   ├── FetchTimeoutError
    │   ├── HttpStatusError
    │   ├── InsufficientContentError
    │   └── RenderError
    ├── ExtractionError - HTML did not yield a usable document
    │   ├── NoTitleError
    │   └── ContentTooShortError
    ├── SearchError - competitor search failed
    │   ├── SearchProviderError
    │   └── NoCredentialsError
    ├── RewriteError - external rewrite call failed
    │   ├── QuotaExceededError
    │   ├── InvalidCredentialError
    │   └── EmptyResponseError
    ├── StorageError - article store issues
    │   ├── ArticleNotFoundError
    │   └── PersistenceConflictError
    │       └── DuplicateUrlError
    └── ConfigurationError - config issues
        ├── MissingConfigError
        └── InvalidConfigError
"""

from typing import Any, Dict, Optional


class EnrichrError(Exception):
    """Base exception for all enrichr errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "FETCH_TIMEOUT")
        details: Optional dict with additional context
    """

    error_code: str = "ENRICHR_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dict for summaries and JSON output."""
        return {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# Fetch Errors
class FetchError(EnrichrError):
    """Base class for page retrieval errors."""

    error_code = "FETCH_ERROR"


class FetchTimeoutError(FetchError):
    """Network operation exceeded its timeout."""

    error_code = "FETCH_TIMEOUT"

    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(
            f"Timed out after {timeout_seconds}s fetching {url}",
            details={"url": url, "timeout_seconds": timeout_seconds},
        )


class HttpStatusError(FetchError):
    """Origin answered with a non-2xx status."""

    error_code = "HTTP_ERROR"

    def __init__(self, url: str, status: int):
        self.status = status
        super().__init__(
            f"HTTP {status} fetching {url}",
            details={"url": url, "status": status},
        )


class InsufficientContentError(FetchError):
    """Page yielded too little text even after rendering."""

    error_code = "INSUFFICIENT_CONTENT"

    def __init__(self, url: str, body_length: int, minimum: int):
        super().__init__(
            f"Only {body_length} characters extracted from {url} (minimum {minimum})",
            details={"url": url, "body_length": body_length, "minimum": minimum},
        )


class RenderError(FetchError):
    """Headless browser could not render the page."""

    error_code = "RENDER_ERROR"

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Browser rendering failed for {url}: {reason}",
            details={"url": url, "reason": reason},
        )


# Extraction Errors
class ExtractionError(EnrichrError):
    """Base class for extraction errors."""

    error_code = "EXTRACTION_ERROR"


class NoTitleError(ExtractionError):
    """No title could be resolved from the document."""

    error_code = "NO_TITLE"

    def __init__(self, source: str = "document"):
        super().__init__(f"Could not resolve a title from {source}", details={"source": source})


class MalformedMarkupError(ExtractionError):
    """HTML parser rejected the markup."""

    error_code = "MALFORMED_MARKUP"

    def __init__(self, reason: str):
        super().__init__(f"Markup could not be parsed: {reason}", details={"reason": reason})


class ContentTooShortError(ExtractionError):
    """Extracted body is below the acceptable minimum."""

    error_code = "TOO_SHORT"

    def __init__(self, body_length: int, minimum: int):
        super().__init__(
            f"Extracted body has {body_length} characters (minimum {minimum})",
            details={"body_length": body_length, "minimum": minimum},
        )


# Search Errors
class SearchError(EnrichrError):
    """Base class for competitor search errors."""

    error_code = "SEARCH_ERROR"


class SearchProviderError(SearchError):
    """The selected search provider failed."""

    error_code = "SEARCH_PROVIDER_ERROR"

    def __init__(self, provider: str, reason: str):
        super().__init__(
            f"{provider} search failed: {reason}",
            details={"provider": provider, "reason": reason},
        )


class NoCredentialsError(SearchError):
    """No search provider can be used with the configured credentials."""

    error_code = "NO_SEARCH_CREDENTIALS"

    def __init__(self):
        super().__init__(
            "No search provider available. Set SERPAPI_KEY, or GOOGLE_API_KEY with "
            "GOOGLE_SEARCH_ENGINE_ID, or enable ENRICHR_BROWSER_SEARCH.",
        )


# Rewrite Errors
class RewriteError(EnrichrError):
    """Base class for external rewrite errors."""

    error_code = "REWRITE_ERROR"


class QuotaExceededError(RewriteError):
    """Rewrite provider quota is exhausted."""

    error_code = "QUOTA_EXCEEDED"

    def __init__(self, provider: str):
        super().__init__(
            f"{provider} quota has been exceeded.",
            details={"provider": provider},
        )


class InvalidCredentialError(RewriteError):
    """Rewrite provider rejected the API key."""

    error_code = "INVALID_CREDENTIAL"

    def __init__(self, provider: str, key_name: str = "OPENAI_API_KEY"):
        super().__init__(
            f"{provider} authentication failed. Check your {key_name} environment variable.",
            details={"provider": provider, "key_name": key_name},
        )


class EmptyResponseError(RewriteError):
    """Rewrite provider returned no content."""

    error_code = "EMPTY_RESPONSE"

    def __init__(self, provider: str):
        super().__init__(f"No content returned from {provider}", details={"provider": provider})


# Storage Errors
class StorageError(EnrichrError):
    """Base class for article store errors."""

    error_code = "STORAGE_ERROR"


class ArticleNotFoundError(StorageError):
    """Requested article does not exist."""

    error_code = "ARTICLE_NOT_FOUND"

    def __init__(self, article_id: int):
        super().__init__(f"Article {article_id} not found", details={"article_id": article_id})


class PersistenceConflictError(StorageError):
    """Write conflicts with an existing record."""

    error_code = "PERSISTENCE_CONFLICT"


class DuplicateUrlError(PersistenceConflictError):
    """An article with this original URL already exists."""

    error_code = "DUPLICATE_URL"

    def __init__(self, original_url: str):
        super().__init__(
            f"An article with URL {original_url} already exists",
            details={"original_url": original_url},
        )


# Configuration Errors
class ConfigurationError(EnrichrError):
    """Base class for configuration errors."""

    error_code = "CONFIG_ERROR"


class MissingConfigError(ConfigurationError):
    """Required configuration is missing."""

    error_code = "MISSING_CONFIG"

    def __init__(self, config_key: str, source: str = "environment"):
        super().__init__(
            f"Required configuration '{config_key}' not found in {source}.",
            details={"config_key": config_key, "source": source},
        )


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "INVALID_CONFIG"

    def __init__(self, config_key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for '{config_key}': {reason}",
            details={"config_key": config_key, "value": str(value), "reason": reason},
        )
