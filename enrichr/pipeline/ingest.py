"""Blog ingestion: discover the oldest articles on a blog and store them."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from enrichr.config import AppConfig
from enrichr.core.errors import DuplicateUrlError, EnrichrError
from enrichr.core.models import ArticleDraft
from enrichr.scrape.extractor import ContentExtractor, MetadataExtractor
from enrichr.scrape.fetcher import ContentFetcher
from enrichr.scrape.pagination import find_article_urls, find_last_page
from enrichr.storage.base import ArticleStore

logger = logging.getLogger(__name__)


@dataclass
class IngestSummary:
    """Counts from one ingestion run."""

    saved: int = 0
    skipped: int = 0
    failed: int = 0
    urls: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.saved + self.skipped + self.failed


class BlogIngestor:
    """Creates one Article per distinct article URL found on a blog."""

    def __init__(
        self,
        config: AppConfig,
        store: ArticleStore,
        fetcher: Optional[ContentFetcher] = None,
        metadata: Optional[MetadataExtractor] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.store = store
        self.fetcher = fetcher or ContentFetcher(config.scrape)
        self.extractor: ContentExtractor = self.fetcher.extractor
        self.metadata = metadata or MetadataExtractor()
        self.sleep = sleep

    def discover(self, limit: int) -> List[str]:
        """
        Find up to ``limit`` article URLs on the blog's last listing page.

        Raises:
            FetchError: A listing page could not be fetched
        """
        blog_url = self.config.blog_url
        last_page = find_last_page(self.fetcher.fetch_html(blog_url), blog_url)
        logger.info(f"Last listing page: {last_page}")

        listing_html = self.fetcher.fetch_html(last_page)
        return find_article_urls(listing_html, last_page, limit=limit)

    def ingest_url(self, url: str) -> bool:
        """
        Fetch, extract and create one article.

        Returns:
            True when a new article was created, False when it already existed

        Raises:
            EnrichrError: Fetching, extraction or storage failed
        """
        if self.store.exists(url):
            logger.info(f"Skipping {url}: already stored")
            return False

        result = self.fetcher.fetch(url)
        document = self.extractor.validate(result.document)

        draft = ArticleDraft(
            title=document.title,
            content=document.body,
            original_url=url,
            author=self.metadata.extract_author(result.html),
            published_at=self.metadata.extract_published_at(result.html),
        )

        try:
            article = self.store.create(draft)
        except DuplicateUrlError:
            logger.info(f"Skipping {url}: stored concurrently")
            return False

        logger.info(f"Saved article {article.id}: {article.title}")
        return True

    def run(self, limit: int = 5) -> IngestSummary:
        """
        Ingest up to ``limit`` of the oldest articles.

        Per-article failures are counted and logged; listing failures propagate.

        Args:
            limit: Maximum articles to process

        Returns:
            IngestSummary with saved/skipped/failed counts
        """
        urls = self.discover(limit)
        summary = IngestSummary(urls=urls)

        if not urls:
            logger.warning("No article links found on the last listing page")
            return summary

        logger.info(f"Found {len(urls)} article(s) to ingest")
        for index, url in enumerate(urls, 1):
            logger.info(f"Processing article {index}/{len(urls)}: {url}")
            try:
                if self.ingest_url(url):
                    summary.saved += 1
                else:
                    summary.skipped += 1
            except EnrichrError as e:
                logger.warning(f"Failed to ingest {url}: {e.message}")
                summary.failed += 1

            if index < len(urls):
                self.sleep(self.config.scrape.request_delay)

        logger.info(f"Ingestion complete: {summary.saved} saved, {summary.skipped} skipped, {summary.failed} failed")
        return summary
