"""Search backend interface and result filtering."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from enrichr.core.models import SearchResult


class SearchBackend(ABC):
    """Abstract interface for competitor search providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (e.g., 'serpapi', 'browser')."""
        pass

    @abstractmethod
    def search(self, query: str, num_results: int = 10) -> List[SearchResult]:
        """
        Execute a search query.

        Args:
            query: Search query string
            num_results: Raw results to request from the provider

        Returns:
            Unfiltered results in provider order

        Raises:
            SearchProviderError: Provider call failed
        """
        pass


def is_excluded(url: str, excluded_domains: Iterable[str]) -> bool:
    """True when the URL contains any excluded domain (case-insensitive)."""
    lowered = url.lower()
    return any(domain.lower() in lowered for domain in excluded_domains)


def filter_results(
    results: List[SearchResult], excluded_domains: Iterable[str], limit: int
) -> List[SearchResult]:
    """
    Drop unusable results and cap the list.

    Args:
        results: Raw provider results
        excluded_domains: Domain substrings that disqualify a URL
        limit: Maximum results kept

    Returns:
        At most ``limit`` results with non-empty, non-excluded URLs
    """
    excluded = list(excluded_domains)
    kept = [result for result in results if result.url and not is_excluded(result.url, excluded)]
    return kept[: max(limit, 0)]
