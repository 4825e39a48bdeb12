"""Abstract base class for article stores."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from enrichr.core.errors import StorageError
from enrichr.core.models import Article, ArticleDraft

# Only these fields may change after creation
UPDATABLE_FIELDS = frozenset({"content", "optimized_content", "is_updated", "references"})


class ArticleStore(ABC):
    """
    Abstract base class for article stores.

    Implementations:
    - SQLiteArticleStore: local SQLite database
    - ArticleApiStore: remote REST API
    """

    @abstractmethod
    def get(self, article_id: int) -> Article:
        """
        Load one article.

        Raises:
            ArticleNotFoundError: No article with this id
        """
        pass

    @abstractmethod
    def find_by_url(self, original_url: str) -> Optional[Article]:
        """Return the article ingested from this URL, or None."""
        pass

    @abstractmethod
    def create(self, draft: ArticleDraft) -> Article:
        """
        Persist a new article.

        Raises:
            DuplicateUrlError: An article with the same original_url exists
        """
        pass

    @abstractmethod
    def update_article(self, article_id: int, **fields: Any) -> Article:
        """
        Apply a partial update in a single write.

        Args:
            article_id: Article to update
            **fields: Any of content, optimized_content, is_updated, references

        Returns:
            The updated article

        Raises:
            ArticleNotFoundError: No article with this id
            StorageError: Unknown field names
        """
        pass

    @abstractmethod
    def latest_article(self, pending_only: bool = False) -> Optional[Article]:
        """
        Most recently published article (undated articles last, newest id first).

        Args:
            pending_only: Only consider articles that have not been optimized
        """
        pass

    @abstractmethod
    def list_articles(self, limit: Optional[int] = None) -> List[Article]:
        """Articles in latest-first order, all of them when limit is None."""
        pass

    def exists(self, original_url: str) -> bool:
        return self.find_by_url(original_url) is not None

    @staticmethod
    def check_fields(fields: dict) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise StorageError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
