"""Competitor search providers."""

from enrichr.search.backends import BrowserSearchBackend, CustomSearchBackend, SerpApiBackend
from enrichr.search.base import SearchBackend, filter_results
from enrichr.search.chain import SearchChain, create_backend

__all__ = [
    "BrowserSearchBackend",
    "CustomSearchBackend",
    "SearchBackend",
    "SearchChain",
    "SerpApiBackend",
    "create_backend",
    "filter_results",
]
