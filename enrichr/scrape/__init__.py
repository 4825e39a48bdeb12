"""Fetching, rendering and extraction of blog pages."""

from enrichr.scrape.browser import BrowserRenderer
from enrichr.scrape.extractor import ContentExtractor, MetadataExtractor, clean_content
from enrichr.scrape.fetcher import ContentFetcher, FetchResult
from enrichr.scrape.pagination import find_article_urls, find_last_page

__all__ = [
    "BrowserRenderer",
    "ContentExtractor",
    "ContentFetcher",
    "FetchResult",
    "MetadataExtractor",
    "clean_content",
    "find_article_urls",
    "find_last_page",
]
