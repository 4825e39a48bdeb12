"""Configuration management for enrichr.

Configuration is built once at startup (``AppConfig.from_env()``) and passed
into each component constructor. Models are frozen so a run never sees its
settings change underneath it.
"""

import os
from enum import Enum
from typing import List, Literal, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from enrichr.core.errors import InvalidConfigError, MissingConfigError, NoCredentialsError

# Load .env file
load_dotenv()


# Realistic desktop browser user agent sent on every fetch
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Social and video platforms never used as competitor sources
DEFAULT_EXCLUDED_DOMAINS = [
    "youtube.com",
    "youtu.be",
    "facebook.com",
    "twitter.com",
    "x.com",
    "instagram.com",
    "linkedin.com",
    "reddit.com",
    "quora.com",
    "pinterest.com",
    "tiktok.com",
]


class SearchMethod(str, Enum):
    """Search provider, chosen once from the available credentials."""

    SERPAPI = "serpapi"
    CUSTOM_SEARCH = "google-custom-search"
    BROWSER = "browser"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_number(name: str, default: str, cast=int):
    raw = os.getenv(name) or default
    try:
        return cast(raw)
    except ValueError as e:
        raise InvalidConfigError(name, raw, f"expected {cast.__name__}") from e


class ScrapeConfig(BaseModel):
    """Configuration for fetching and escalation behavior."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=30.0, gt=0, description="Per network operation timeout (seconds)")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User agent sent on every fetch")
    escalate_below: int = Field(default=200, ge=0, description="Static body length that triggers rendering")
    min_content_length: int = Field(default=100, ge=0, description="Body length floor after rendering")
    settle_delay: float = Field(default=2.0, ge=0, description="Wait after network idle for lazy content")
    network_idle_timeout: float = Field(default=10.0, ge=0, description="Maximum wait for network idle")
    request_delay: float = Field(default=1.0, ge=0, description="Delay between sequential fetches")

    @field_validator("user_agent", mode="before")
    @classmethod
    def default_user_agent(cls, v: Optional[str]) -> str:
        """Fall back to the default user agent for empty values."""
        return v or DEFAULT_USER_AGENT


class SearchConfig(BaseModel):
    """Configuration for the competitor search providers."""

    model_config = ConfigDict(frozen=True)

    serpapi_key: Optional[str] = Field(default=None, description="SerpAPI key")
    google_api_key: Optional[str] = Field(default=None, description="Google Custom Search API key")
    google_search_engine_id: Optional[str] = Field(default=None, description="Google Custom Search engine id")
    max_results: int = Field(default=2, ge=1, description="Maximum competitor results returned")
    raw_results: int = Field(default=10, ge=1, description="Raw results requested before filtering")
    excluded_domains: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_DOMAINS))
    browser_fallback: bool = Field(default=True, description="Allow scraping a public results page")

    @property
    def method(self) -> SearchMethod:
        """Resolve the search method from credentials (priority order)."""
        if self.serpapi_key:
            return SearchMethod.SERPAPI
        if self.google_api_key and self.google_search_engine_id:
            return SearchMethod.CUSTOM_SEARCH
        return SearchMethod.BROWSER

    @property
    def has_api_credentials(self) -> bool:
        return self.method != SearchMethod.BROWSER


class RewriteConfig(BaseModel):
    """Configuration for the external rewrite collaborator."""

    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_base_url: Optional[str] = Field(default=None, description="Custom OpenAI base URL")
    model: str = Field(default="gpt-4o-mini", description="Chat model used for rewriting")
    max_tokens: int = Field(default=4000, gt=0)
    temperature: float = Field(default=0.7, ge=0, le=2)
    body_budget: int = Field(default=3000, gt=0, description="Characters kept per competitor body")
    max_competitors: int = Field(default=2, ge=1, description="Competitors included in a request")


class StoreConfig(BaseModel):
    """Configuration for the article store."""

    model_config = ConfigDict(frozen=True)

    type: Literal["sqlite", "api"] = Field(default="sqlite", description="Store type: sqlite or api")
    sqlite_path: str = Field(default="data/articles.db", description="SQLite database path")
    api_url: str = Field(default="http://localhost:8000/api", description="Article REST API base URL")


class AppConfig(BaseModel):
    """Main application configuration."""

    model_config = ConfigDict(frozen=True)

    blog_url: str = Field(default="https://beyondchats.com/blogs/", description="Blog listing to ingest")
    scrape: ScrapeConfig = Field(default_factory=ScrapeConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    rewrite: RewriteConfig = Field(default_factory=RewriteConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    @property
    def source_domain(self) -> str:
        """Host of the ingested blog, without a leading www."""
        host = urlparse(self.blog_url).netloc.lower()
        return host[4:] if host.startswith("www.") else host

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Environment variable mapping:
        - ENRICHR_BLOG_URL: blog listing URL
        - ENRICHR_TIMEOUT: per-request timeout in seconds
        - SERPAPI_KEY / GOOGLE_API_KEY / GOOGLE_SEARCH_ENGINE_ID: search
        - OPENAI_API_KEY: rewrite provider
        - ENRICHR_STORE: sqlite or api

        Raises:
            InvalidConfigError: A numeric variable does not parse
            pydantic.ValidationError: A value is out of range
        """
        scrape = ScrapeConfig(
            timeout=_env_number("ENRICHR_TIMEOUT", "30", float),
            user_agent=os.getenv("ENRICHR_USER_AGENT"),
            escalate_below=_env_number("ENRICHR_ESCALATE_BELOW", "200"),
            min_content_length=_env_number("ENRICHR_MIN_CONTENT_LENGTH", "100"),
            settle_delay=_env_number("ENRICHR_SETTLE_DELAY", "2.0", float),
            request_delay=_env_number("ENRICHR_REQUEST_DELAY", "1.0", float),
        )

        search = SearchConfig(
            serpapi_key=os.getenv("SERPAPI_KEY") or None,
            google_api_key=os.getenv("GOOGLE_API_KEY") or None,
            google_search_engine_id=os.getenv("GOOGLE_SEARCH_ENGINE_ID") or None,
            max_results=_env_number("MAX_COMPETITOR_RESULTS", "2"),
            browser_fallback=_env_bool("ENRICHR_BROWSER_SEARCH", "true"),
        )

        rewrite = RewriteConfig(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            model=os.getenv("ENRICHR_MODEL", "gpt-4o-mini"),
            max_competitors=_env_number("MAX_COMPETITOR_RESULTS", "2"),
        )

        store = StoreConfig(
            type=os.getenv("ENRICHR_STORE", "sqlite"),
            sqlite_path=os.getenv("ENRICHR_SQLITE_PATH", "data/articles.db"),
            api_url=os.getenv("ENRICHR_API_URL", "http://localhost:8000/api"),
        )

        return cls(
            blog_url=os.getenv("ENRICHR_BLOG_URL", "https://beyondchats.com/blogs/"),
            scrape=scrape,
            search=search,
            rewrite=rewrite,
            store=store,
            debug=_env_bool("ENRICHR_DEBUG"),
            log_level=os.getenv("ENRICHR_LOG_LEVEL", "INFO"),
        )

    def validate_required(self) -> None:
        """Fail fast on configuration no enrichment run can proceed without.

        Raises:
            MissingConfigError: OpenAI API key is not set
            NoCredentialsError: no search API credentials and browser search disabled
        """
        if not self.rewrite.openai_api_key:
            raise MissingConfigError("OPENAI_API_KEY")
        if not self.search.has_api_credentials and not self.search.browser_fallback:
            raise NoCredentialsError()

    def excluded_domains(self) -> List[str]:
        """Search blacklist: the source blog plus the default platforms."""
        domains = list(self.search.excluded_domains)
        if self.source_domain and self.source_domain not in domains:
            domains.insert(0, self.source_domain)
        return domains
