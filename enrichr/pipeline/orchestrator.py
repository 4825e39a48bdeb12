"""Enrichment run: search, scrape competitors, rewrite and persist one article.

Every stage that produces nothing ends the run with a summary instead of an
exception. Only configuration problems detected before the run starts are
reported as fatal.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from enrichr.config import AppConfig
from enrichr.core.errors import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    NoCredentialsError,
    RewriteError,
    StorageError,
)
from enrichr.core.models import Article, CompetitorContent, Reference, SearchResult
from enrichr.rewrite.base import ContentRewriter, build_optimization_request
from enrichr.rewrite.openai_rewriter import OpenAIRewriter
from enrichr.rewrite.validator import validate_optimized_content
from enrichr.scrape.fetcher import ContentFetcher
from enrichr.search.chain import SearchChain
from enrichr.storage.base import ArticleStore

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Orchestration stages in execution order."""

    FETCH_SUBJECT = "fetch_subject"
    SEARCH = "search"
    SCRAPE_COMPETITORS = "scrape_competitors"
    REWRITE = "rewrite"
    VALIDATE = "validate"
    PERSIST = "persist"
    END = "end"


class RunStatus(str, Enum):
    """Terminal outcome of a run."""

    ENRICHED = "enriched"
    DEGRADED = "degraded"
    NO_SUBJECT = "no_subject"
    CONFIG_ERROR = "config_error"


@dataclass
class RunSummary:
    """What one enrichment run did."""

    status: RunStatus
    stage: Stage
    reason: str = ""
    article_id: Optional[int] = None
    title: str = ""
    competitors: int = 0
    references: List[Reference] = field(default_factory=list)
    tokens_used: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status != RunStatus.CONFIG_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "stage": self.stage.value,
            "reason": self.reason,
            "article_id": self.article_id,
            "title": self.title,
            "competitors": self.competitors,
            "references": [ref.to_dict() for ref in self.references],
            "tokens_used": self.tokens_used,
            "issues": list(self.issues),
        }


class EnrichmentOrchestrator:
    """Runs the enrichment stages for one subject article."""

    def __init__(
        self,
        config: AppConfig,
        store: ArticleStore,
        search: Optional[SearchChain] = None,
        fetcher: Optional[ContentFetcher] = None,
        rewriter: Optional[ContentRewriter] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize orchestrator.

        Collaborators that are not given are built from the config when the
        run first needs them, after the configuration has been validated.

        Args:
            config: Application configuration
            store: Article store
            search: Competitor search
            fetcher: Fetcher for competitor pages
            rewriter: External rewrite collaborator
            sleep: Sleep function used between competitor fetches
        """
        self.config = config
        self.store = store
        self._search = search
        self._fetcher = fetcher
        self._rewriter = rewriter
        self.sleep = sleep

    @property
    def search(self) -> SearchChain:
        if self._search is None:
            self._search = SearchChain(self.config)
        return self._search

    @property
    def fetcher(self) -> ContentFetcher:
        if self._fetcher is None:
            self._fetcher = ContentFetcher(self.config.scrape)
        return self._fetcher

    @property
    def rewriter(self) -> ContentRewriter:
        if self._rewriter is None:
            self._rewriter = OpenAIRewriter(self.config.rewrite, timeout=max(self.config.scrape.timeout, 120.0))
        return self._rewriter

    def run(self, article_id: Optional[int] = None) -> RunSummary:
        """
        Enrich one article.

        Args:
            article_id: Article to enrich (the latest published article if None)

        Returns:
            RunSummary; never raises for per-stage failures
        """
        try:
            self.config.validate_required()
        except (ConfigurationError, NoCredentialsError) as e:
            logger.error(f"Configuration error: {e.message}")
            return RunSummary(RunStatus.CONFIG_ERROR, Stage.FETCH_SUBJECT, reason=e.message)

        # FETCH_SUBJECT
        try:
            article = self.store.get(article_id) if article_id is not None else self.store.latest_article()
        except StorageError as e:
            logger.warning(f"No subject article: {e.message}")
            return RunSummary(RunStatus.NO_SUBJECT, Stage.FETCH_SUBJECT, reason=e.message, article_id=article_id)

        if article is None:
            logger.warning("No articles found in the store")
            return RunSummary(RunStatus.NO_SUBJECT, Stage.FETCH_SUBJECT, reason="no articles in store")

        logger.info(f"Subject article {article.id}: {article.title!r} ({len(article.content)} characters)")

        if article.is_updated:
            return self._degraded(article, Stage.FETCH_SUBJECT, "article already optimized")

        # SEARCH
        results = self.search.search(article.title)
        if not results:
            return self._degraded(article, Stage.SEARCH, "no competitor search results")

        # SCRAPE_COMPETITORS
        competitors = self.scrape_competitors(results)
        if not competitors:
            return self._degraded(article, Stage.SCRAPE_COMPETITORS, "no competitor content scraped")

        # REWRITE
        request = build_optimization_request(
            article,
            competitors,
            max_competitors=self.config.rewrite.max_competitors,
            body_budget=self.config.rewrite.body_budget,
        )
        try:
            result = self.rewriter.rewrite(request)
        except RewriteError as e:
            return self._degraded(
                article, Stage.REWRITE, f"rewrite failed ({e.error_code}): {e.message}", competitors=len(competitors)
            )

        if not result.content or not result.content.strip():
            return self._degraded(article, Stage.REWRITE, "rewrite returned no content", competitors=len(competitors))

        if not result.references:
            return self._degraded(article, Stage.REWRITE, "rewrite returned no references", competitors=len(competitors))

        # VALIDATE
        validation = validate_optimized_content(result.content)
        for issue in validation.issues:
            logger.warning(f"Content validation warning: {issue}")

        # PERSIST
        try:
            self.store.update_article(
                article.id,
                optimized_content=result.content,
                is_updated=True,
                references=result.references,
            )
        except StorageError as e:
            return self._degraded(
                article, Stage.PERSIST, f"update failed: {e.message}", competitors=len(competitors)
            )

        logger.info(
            f"Article {article.id} enriched: {len(article.content)} -> {len(result.content)} characters, "
            f"{len(result.references)} reference(s), {result.tokens_used} tokens"
        )
        return RunSummary(
            status=RunStatus.ENRICHED,
            stage=Stage.END,
            article_id=article.id,
            title=article.title,
            competitors=len(competitors),
            references=result.references,
            tokens_used=result.tokens_used,
            issues=validation.issues,
        )

    def scrape_competitors(self, results: List[SearchResult]) -> List[CompetitorContent]:
        """
        Scrape search results one at a time, skipping failures.

        Args:
            results: Search results in rank order

        Returns:
            CompetitorContent for every result that yielded enough text
        """
        logger.info(f"Scraping {len(results)} competitor article(s)")
        competitors = []

        for index, result in enumerate(results):
            if index > 0:
                self.sleep(self.config.scrape.request_delay)

            try:
                fetched = self.fetcher.fetch(result.url)
            except (FetchError, ExtractionError) as e:
                logger.warning(f"Skipping competitor {result.url}: {e.message}")
                continue

            document = fetched.document
            competitors.append(
                CompetitorContent(
                    url=result.url,
                    title=document.title,
                    body=document.body,
                    headings=document.headings,
                    code_blocks=document.code_blocks,
                    original_title=result.title,
                )
            )

        logger.info(f"Scraped {len(competitors)} competitor article(s)")
        return competitors

    def _degraded(self, article: Article, stage: Stage, reason: str, competitors: int = 0) -> RunSummary:
        logger.warning(f"Ending run at {stage.value}: {reason}")
        return RunSummary(
            status=RunStatus.DEGRADED,
            stage=stage,
            reason=reason,
            article_id=article.id,
            title=article.title,
            competitors=competitors,
        )
