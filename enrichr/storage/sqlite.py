"""SQLite-based article store for local runs."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from enrichr.core.errors import ArticleNotFoundError, DuplicateUrlError
from enrichr.core.models import Article, ArticleDraft, Reference
from enrichr.storage.base import ArticleStore

logger = logging.getLogger(__name__)

# Latest published first; undated articles sort after dated ones
_LATEST_FIRST = "ORDER BY published_at IS NULL, published_at DESC, id DESC"


class SQLiteArticleStore(ArticleStore):
    """SQLite-based article store."""

    def __init__(self, db_path: str = "data/articles.db"):
        """
        Initialize SQLite article store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self):
        """Initialize database schema."""
        conn = self._connect()
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS articles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                original_url TEXT NOT NULL UNIQUE,
                author TEXT,
                published_at DATETIME,

                is_updated INTEGER DEFAULT 0,
                optimized_content TEXT,
                "references" TEXT,  -- JSON array of {title, url}

                created_at DATETIME NOT NULL,
                updated_at DATETIME NOT NULL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_published
            ON articles(published_at DESC)
        """)

        conn.commit()
        conn.close()

    def _row_to_article(self, row: sqlite3.Row) -> Article:
        """Convert database row to article object."""
        data: Dict[str, Any] = dict(row)
        data["references"] = json.loads(data["references"]) if data["references"] else []
        return Article.from_dict(data)

    def get(self, article_id: int) -> Article:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM articles WHERE id = ?", (article_id,)).fetchone()
        finally:
            conn.close()

        if row is None:
            raise ArticleNotFoundError(article_id)
        return self._row_to_article(row)

    def find_by_url(self, original_url: str) -> Optional[Article]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT * FROM articles WHERE original_url = ?", (original_url,)
            ).fetchone()
        finally:
            conn.close()

        return self._row_to_article(row) if row else None

    def create(self, draft: ArticleDraft) -> Article:
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(
                    """
                    INSERT INTO articles (
                        title, content, original_url, author, published_at,
                        is_updated, "references", created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, 0, '[]', ?, ?)
                    """,
                    (
                        draft.title,
                        draft.content,
                        draft.original_url,
                        draft.author,
                        draft.published_at.isoformat() if draft.published_at else None,
                        now,
                        now,
                    ),
                )
                article_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise DuplicateUrlError(draft.original_url) from e
        finally:
            conn.close()

        logger.debug(f"Created article {article_id} for {draft.original_url}")
        return self.get(article_id)

    def update_article(self, article_id: int, **fields: Any) -> Article:
        self.check_fields(fields)
        if not fields:
            return self.get(article_id)

        values: Dict[str, Any] = {}
        for name, value in fields.items():
            if name == "references":
                value = json.dumps(
                    [ref.to_dict() if isinstance(ref, Reference) else dict(ref) for ref in value]
                )
            elif name == "is_updated":
                value = 1 if value else 0
            values[name] = value
        values["updated_at"] = datetime.now(timezone.utc).isoformat()

        assignments = ", ".join(f'"{name}" = ?' for name in values)
        conn = self._connect()
        try:
            with conn:
                updated = conn.execute(
                    f"UPDATE articles SET {assignments} WHERE id = ?",
                    (*values.values(), article_id),
                ).rowcount
        finally:
            conn.close()

        if updated == 0:
            raise ArticleNotFoundError(article_id)

        logger.debug(f"Updated article {article_id}: {', '.join(sorted(fields))}")
        return self.get(article_id)

    def latest_article(self, pending_only: bool = False) -> Optional[Article]:
        where = "WHERE is_updated = 0 " if pending_only else ""
        conn = self._connect()
        try:
            row = conn.execute(f"SELECT * FROM articles {where}{_LATEST_FIRST} LIMIT 1").fetchone()
        finally:
            conn.close()

        return self._row_to_article(row) if row else None

    def list_articles(self, limit: Optional[int] = None) -> List[Article]:
        query = f"SELECT * FROM articles {_LATEST_FIRST}"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)

        conn = self._connect()
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()

        return [self._row_to_article(row) for row in rows]
