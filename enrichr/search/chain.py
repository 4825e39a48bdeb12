"""Competitor search with a single, credential-selected provider."""

import logging
from typing import List, Optional

from enrichr.config import AppConfig, SearchMethod
from enrichr.core.errors import NoCredentialsError, SearchError, SearchProviderError
from enrichr.core.models import SearchResult
from enrichr.scrape.browser import BrowserRenderer
from enrichr.search.backends import BrowserSearchBackend, CustomSearchBackend, SerpApiBackend
from enrichr.search.base import SearchBackend, filter_results

logger = logging.getLogger(__name__)


def create_backend(config: AppConfig, renderer: Optional[BrowserRenderer] = None) -> SearchBackend:
    """
    Build the backend selected by the configured credentials.

    Raises:
        NoCredentialsError: No API credentials and browser search is disabled
    """
    method = config.search.method

    if method == SearchMethod.SERPAPI:
        return SerpApiBackend(config.search, timeout=config.scrape.timeout)
    if method == SearchMethod.CUSTOM_SEARCH:
        return CustomSearchBackend(config.search, timeout=config.scrape.timeout)
    if not config.search.browser_fallback:
        raise NoCredentialsError()
    return BrowserSearchBackend(renderer=renderer, scrape_config=config.scrape)


class SearchChain:
    """Finds competitor articles for a title.

    Exactly one provider is used per run. A provider failure or an empty
    result set yields an empty list; the next provider is never tried.
    """

    def __init__(self, config: AppConfig, backend: Optional[SearchBackend] = None):
        """
        Initialize search chain.

        Args:
            config: Application configuration
            backend: Search backend (selected from credentials if None)
        """
        self.config = config
        self.backend = backend or create_backend(config)
        self.excluded_domains = config.excluded_domains()

    def search(self, query: str) -> List[SearchResult]:
        """
        Search for competitor articles.

        Args:
            query: Search query (the subject article's title)

        Returns:
            At most ``max_results`` usable results, possibly empty
        """
        logger.info(f"Search query: {query!r} (method: {self.backend.name})")

        try:
            raw = self.backend.search(query, num_results=self.config.search.raw_results)
        except SearchError as e:
            logger.error(f"Search failed: {e.message}")
            return []
        except Exception as e:
            error = SearchProviderError(self.backend.name, f"{type(e).__name__}: {e}")
            logger.exception(f"Search failed: {error.message}")
            return []

        results = filter_results(raw, self.excluded_domains, self.config.search.max_results)
        if not results:
            logger.warning(f"No suitable search results for {query!r} ({len(raw)} raw)")
            return []

        logger.info(f"Found {len(results)} competitor result(s)")
        for index, result in enumerate(results, 1):
            logger.info(f"  {index}. {result.title} ({result.url})")
        return results
