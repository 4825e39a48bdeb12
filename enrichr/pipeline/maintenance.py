"""Maintenance tasks over stored articles."""

import logging
from typing import List

from enrichr.core.models import Article
from enrichr.scrape.extractor import clean_content
from enrichr.storage.base import ArticleStore

logger = logging.getLogger(__name__)


def clean_stored_articles(store: ArticleStore, dry_run: bool = False) -> List[Article]:
    """
    Re-apply content cleanup (trailing share counts, excess whitespace) to
    every stored article.

    Args:
        store: Article store
        dry_run: Report what would change without writing

    Returns:
        Articles whose content changed
    """
    changed = []
    for article in store.list_articles():
        cleaned = clean_content(article.content)
        if cleaned == article.content:
            continue

        if not dry_run:
            article = store.update_article(article.id, content=cleaned)
        logger.info(f"Cleaned article {article.id}: {article.title}")
        changed.append(article)

    return changed
