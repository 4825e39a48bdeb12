"""REST client store for a remote article API.

The API wraps every response in ``{"success": bool, "data": ..., "message": str}``
and answers 422 when a create payload fails validation (duplicate URL).
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from enrichr.core.errors import ArticleNotFoundError, DuplicateUrlError, StorageError
from enrichr.core.models import Article, ArticleDraft, Reference
from enrichr.storage.base import ArticleStore

logger = logging.getLogger(__name__)


class ArticleApiStore(ArticleStore):
    """Article store backed by the articles REST API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize API store.

        Args:
            base_url: API root (the articles resource lives at {base_url}/articles)
            timeout: Request timeout in seconds
            session: HTTP session (a new one if None)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send a request and return the decoded envelope."""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise StorageError(f"{method} {url} failed: {e}", details={"url": url}) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            raise StorageError(
                body.get("message") or f"{method} {url} returned HTTP {response.status_code}",
                details={"url": url, "status": response.status_code, "errors": body.get("errors")},
            )

        if not body.get("success", False):
            raise StorageError(body.get("message") or f"{method} {url} was not successful", details={"url": url})

        return body

    def get(self, article_id: int) -> Article:
        try:
            body = self._request("GET", f"/articles/{article_id}")
        except StorageError as e:
            if e.details.get("status") == 404:
                raise ArticleNotFoundError(article_id) from e
            raise
        return Article.from_dict(body["data"])

    def find_by_url(self, original_url: str) -> Optional[Article]:
        body = self._request("GET", "/articles", params={"original_url": original_url})
        for item in body.get("data") or []:
            if item.get("original_url") == original_url:
                return Article.from_dict(item)
        return None

    def create(self, draft: ArticleDraft) -> Article:
        try:
            body = self._request("POST", "/articles", json=draft.to_dict())
        except StorageError as e:
            if e.details.get("status") == 422:
                raise DuplicateUrlError(draft.original_url) from e
            raise
        return Article.from_dict(body["data"])

    def update_article(self, article_id: int, **fields: Any) -> Article:
        self.check_fields(fields)

        payload = dict(fields)
        if "references" in payload:
            payload["references"] = [
                ref.to_dict() if isinstance(ref, Reference) else dict(ref) for ref in payload["references"]
            ]

        try:
            body = self._request("PUT", f"/articles/{article_id}", json=payload)
        except StorageError as e:
            if e.details.get("status") == 404:
                raise ArticleNotFoundError(article_id) from e
            raise
        return Article.from_dict(body["data"])

    def latest_article(self, pending_only: bool = False) -> Optional[Article]:
        params: Dict[str, Any] = {"per_page": 1, "sort": "desc"}
        if pending_only:
            params["is_updated"] = 0

        body = self._request("GET", "/articles", params=params)
        for item in body.get("data") or []:
            article = Article.from_dict(item)
            if not (pending_only and article.is_updated):
                return article
        return None

    def list_articles(self, limit: Optional[int] = None) -> List[Article]:
        articles: List[Article] = []
        page = 1

        while True:
            params: Dict[str, Any] = {"page": page}
            if limit is not None:
                params["per_page"] = limit
            body = self._request("GET", "/articles", params=params)
            articles.extend(Article.from_dict(item) for item in body.get("data") or [])

            if limit is not None and len(articles) >= limit:
                return articles[:limit]

            meta = body.get("meta") or {}
            if page >= int(meta.get("last_page", page)):
                return articles
            page += 1
