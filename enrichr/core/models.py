"""Data model shared by the scraping, search, rewrite and storage layers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Heading:
    """A heading found in an extracted document."""

    level: int
    text: str

    @property
    def tag(self) -> str:
        return f"h{self.level}"


@dataclass
class ExtractedDocument:
    """Structured text produced from one HTML page.

    Transient: the pipelines map it onto an Article or a CompetitorContent.
    """

    title: str
    body: str
    headings: List[Heading] = field(default_factory=list)
    code_blocks: List[str] = field(default_factory=list)
    list_items: List[str] = field(default_factory=list)

    @property
    def body_length(self) -> int:
        return len(self.body)


@dataclass
class SearchResult:
    """A single search result."""

    title: str
    url: str
    snippet: str = ""
    source: str = "unknown"


@dataclass
class CompetitorContent:
    """Text scraped from a third-party page found through search."""

    url: str
    title: str
    body: str
    headings: List[Heading] = field(default_factory=list)
    code_blocks: List[str] = field(default_factory=list)
    original_title: str = ""

    @property
    def display_title(self) -> str:
        """Page title, falling back to the title shown in search results."""
        return self.title or self.original_title


@dataclass
class Reference:
    """A competitor article cited by an optimized article."""

    title: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "url": self.url}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reference":
        return cls(title=data.get("title", ""), url=data.get("url", ""))


@dataclass
class ArticleDraft:
    """Validated create payload produced by blog ingestion."""

    title: str
    content: str
    original_url: str
    author: Optional[str] = None
    published_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "original_url": self.original_url,
            "author": self.author,
            "published_at": self.published_at.isoformat() if self.published_at else None,
        }


@dataclass
class Article:
    """Persisted article, unique by original_url."""

    id: int
    title: str
    content: str
    original_url: str
    author: Optional[str] = None
    published_at: Optional[datetime] = None
    is_updated: bool = False
    optimized_content: Optional[str] = None
    references: List[Reference] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "original_url": self.original_url,
            "author": self.author,
            "published_at": _isoformat(self.published_at),
            "is_updated": self.is_updated,
            "optimized_content": self.optimized_content,
            "references": [ref.to_dict() for ref in self.references],
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Create an Article from a store row or API payload."""
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            content=data.get("content") or "",
            original_url=data.get("original_url", ""),
            author=data.get("author"),
            published_at=_parse_datetime(data.get("published_at")),
            is_updated=bool(data.get("is_updated", False)),
            optimized_content=data.get("optimized_content"),
            references=[Reference.from_dict(ref) for ref in (data.get("references") or [])],
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


@dataclass
class OptimizationRequest:
    """Input handed to the external rewrite collaborator."""

    title: str
    content: str
    competitors: List[CompetitorContent] = field(default_factory=list)


@dataclass
class OptimizationResult:
    """Output of the external rewrite collaborator."""

    content: str
    references: List[Reference] = field(default_factory=list)
    tokens_used: int = 0


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    # Accept the trailing "Z" emitted by JSON APIs
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
