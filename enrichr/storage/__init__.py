"""Article storage backends."""

from enrichr.config import StoreConfig
from enrichr.storage.api import ArticleApiStore
from enrichr.storage.base import ArticleStore
from enrichr.storage.sqlite import SQLiteArticleStore


def create_store(config: StoreConfig, timeout: float = 30.0) -> ArticleStore:
    """Build the article store selected by the configuration."""
    if config.type == "api":
        return ArticleApiStore(config.api_url, timeout=timeout)
    return SQLiteArticleStore(config.sqlite_path)


__all__ = ["ArticleApiStore", "ArticleStore", "SQLiteArticleStore", "create_store"]
