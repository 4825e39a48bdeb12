"""Content fetcher with static-first, render-on-demand escalation."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from enrichr.config import ScrapeConfig
from enrichr.core.errors import (
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    InsufficientContentError,
)
from enrichr.core.models import ExtractedDocument
from enrichr.scrape.browser import BrowserRenderer
from enrichr.scrape.extractor import ContentExtractor

logger = logging.getLogger(__name__)

STRATEGY_STATIC = "static"
STRATEGY_RENDERED = "rendered"


@dataclass
class FetchResult:
    """Result of a fetch operation."""

    url: str
    html: str
    document: ExtractedDocument
    strategy: str = STRATEGY_STATIC
    escalated: bool = False


class ContentFetcher:
    """Fetches pages over plain HTTP and renders them only when needed."""

    def __init__(
        self,
        config: Optional[ScrapeConfig] = None,
        extractor: Optional[ContentExtractor] = None,
        session: Optional[requests.Session] = None,
        renderer: Optional[BrowserRenderer] = None,
    ):
        """
        Initialize content fetcher.

        Args:
            config: Scraping configuration (uses defaults if None)
            extractor: Content extractor used to judge static results
            session: HTTP session (a new one if None)
            renderer: Headless browser renderer used for escalation
        """
        self.config = config or ScrapeConfig()
        self.extractor = extractor or ContentExtractor()
        self.session = session or requests.Session()
        self.renderer = renderer or BrowserRenderer(self.config)

    def fetch_html(self, url: str) -> str:
        """
        Fetch raw HTML with a single static GET.

        Args:
            url: URL to fetch

        Returns:
            Response body

        Raises:
            FetchTimeoutError: Request exceeded the configured timeout
            HttpStatusError: Non-2xx response
            FetchError: Any other transport failure
        """
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }

        try:
            response = self.session.get(
                url,
                headers=headers,
                timeout=self.config.timeout,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(url, self.config.timeout) from e
        except requests.exceptions.HTTPError as e:
            raise HttpStatusError(url, e.response.status_code) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request to {url} failed: {e}", details={"url": url}) from e

        return response.text

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch a page and extract its document, escalating to the browser when
        the static HTML carries too little text.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with the HTML and parsed document that were accepted

        Raises:
            FetchError: Static fetch or rendering failed
            InsufficientContentError: Final body is below the content floor
            MalformedMarkupError: The static or rendered HTML could not be parsed
        """
        logger.info(f"Fetching: {url}")

        html = self.fetch_html(url)
        document = self.extractor.parse(html)
        result = FetchResult(url=url, html=html, document=document)

        if document.body_length < self.config.escalate_below:
            logger.info(
                f"Static fetch of {url} yielded {document.body_length} characters, "
                f"rendering with headless browser"
            )
            html = self.renderer.render(url)
            result = FetchResult(
                url=url,
                html=html,
                document=self.extractor.parse(html),
                strategy=STRATEGY_RENDERED,
                escalated=True,
            )

        if result.document.body_length < self.config.min_content_length:
            raise InsufficientContentError(
                url, result.document.body_length, self.config.min_content_length
            )

        logger.info(f"Fetched {result.document.body_length} characters from {url} ({result.strategy})")
        return result
