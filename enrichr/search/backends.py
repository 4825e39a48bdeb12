"""Concrete search backends: SerpAPI, Google Custom Search and a browser fallback."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

import requests

from enrichr.config import ScrapeConfig, SearchConfig
from enrichr.core.errors import ExtractionError, FetchError, SearchProviderError
from enrichr.core.models import SearchResult
from enrichr.scrape.browser import BrowserRenderer
from enrichr.scrape.extractor import parse_html
from enrichr.search.base import SearchBackend

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search"
CUSTOM_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
BROWSER_SEARCH_URL = "https://www.google.com/search?q={query}"


class _JsonApiBackend(SearchBackend):
    """Shared GET-and-decode logic for JSON search APIs."""

    endpoint = ""

    def __init__(self, config: SearchConfig, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.config = config
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.get(self.endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise SearchProviderError(self.name, str(e)) from e
        except ValueError as e:
            raise SearchProviderError(self.name, f"invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise SearchProviderError(self.name, f"unexpected response payload ({type(data).__name__})")
        return data

    def _result_items(self, data: Dict[str, Any], key: str) -> List[SearchResult]:
        """Map the result objects under ``key`` to SearchResults."""
        items = data.get(key) or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise SearchProviderError(self.name, f"malformed {key!r} in response")

        return [
            SearchResult(
                title=str(item.get("title") or ""),
                url=str(item.get("link") or ""),
                snippet=str(item.get("snippet") or ""),
                source=self.name,
            )
            for item in items
        ]


class SerpApiBackend(_JsonApiBackend):
    """Google results through SerpAPI."""

    endpoint = SERPAPI_URL

    @property
    def name(self) -> str:
        return "serpapi"

    def search(self, query: str, num_results: int = 10) -> List[SearchResult]:
        logger.info("Searching with SerpAPI")
        data = self._get_json(
            {
                "q": query,
                "api_key": self.config.serpapi_key,
                "engine": "google",
                "num": num_results,
            }
        )
        return self._result_items(data, "organic_results")


class CustomSearchBackend(_JsonApiBackend):
    """Google Programmable Search (Custom Search JSON API)."""

    endpoint = CUSTOM_SEARCH_URL

    @property
    def name(self) -> str:
        return "google-custom-search"

    def search(self, query: str, num_results: int = 10) -> List[SearchResult]:
        logger.info("Searching with Google Custom Search API")
        data = self._get_json(
            {
                "q": query,
                "key": self.config.google_api_key,
                "cx": self.config.google_search_engine_id,
                # The API caps a single page at 10 results
                "num": min(num_results, 10),
            }
        )
        return self._result_items(data, "items")


class BrowserSearchBackend(SearchBackend):
    """Renders a public results page in the headless browser and parses it.

    Used only when no search API credentials are configured. Scraping a
    public results page may conflict with the provider's terms of service.
    """

    def __init__(self, renderer: Optional[BrowserRenderer] = None, scrape_config: Optional[ScrapeConfig] = None):
        self.renderer = renderer or BrowserRenderer(scrape_config)

    @property
    def name(self) -> str:
        return "browser"

    def search(self, query: str, num_results: int = 10) -> List[SearchResult]:
        logger.info("Searching with headless browser")
        try:
            html = self.renderer.render(BROWSER_SEARCH_URL.format(query=quote_plus(query)))
            results = parse_results_page(html)
        except (FetchError, ExtractionError) as e:
            raise SearchProviderError(self.name, e.message) from e

        return results[:num_results]


def parse_results_page(html: str) -> List[SearchResult]:
    """Extract organic results (title, link, snippet) from a results page."""
    soup = parse_html(html)

    results = []
    for block in soup.select("#search .g"):
        link = block.select_one("a[href]")
        title = block.select_one("h3")
        if link is None or title is None:
            continue

        snippet = block.select_one(".VwiC3b")
        results.append(
            SearchResult(
                title=title.get_text().strip(),
                url=link["href"],
                snippet=snippet.get_text().strip() if snippet else "",
                source="browser",
            )
        )

    return results
