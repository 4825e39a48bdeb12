"""Content extraction from HTML.

Turns arbitrary blog markup into an ExtractedDocument using ordered selector
cascades: noise removal first, then the first content container selector that
matches, then per-element length filters and a trailing-artifact cleanup.
Everything here is a pure function of the input HTML.
"""

import logging
import re
from datetime import datetime
from typing import List, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from dateutil import parser as date_parser

from enrichr.core.errors import ContentTooShortError, MalformedMarkupError, NoTitleError
from enrichr.core.models import ExtractedDocument, Heading

logger = logging.getLogger(__name__)

MIN_BODY_LENGTH = 100
MIN_CODE_LENGTH = 20
MIN_PARAGRAPH_LENGTH = 30
MIN_LIST_ITEM_LENGTH = 10

# Regions that never hold article text. Each targets a disjoint region, so
# removal order does not matter.
UNWANTED_SELECTORS = [
    "nav",
    "header",
    "footer",
    "aside",
    ".sidebar",
    ".advertisement",
    ".ad",
    ".ads",
    ".social-share",
    ".comments",
    ".related-posts",
    ".newsletter",
    ".popup",
    ".modal",
    "script",
    "style",
    "noscript",
    "iframe",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
]

# Ranked content containers; the first selector with a match wins
CONTENT_SELECTORS = [
    "article",
    '[role="main"]',
    "main",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".content",
    ".post-body",
    "#content",
    ".blog-post",
    ".single-post",
]

AUTHOR_SELECTORS = [
    ".author-name",
    ".post-author",
    ".entry-author",
    '[rel="author"]',
    ".byline",
    ".author a",
    'meta[name="author"]',
]

PUBLISHED_SELECTORS = [
    "time[datetime]",
    ".post-date",
    ".entry-date",
    ".published",
    'meta[property="article:published_time"]',
]

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_HORIZONTAL_WS = re.compile(r"[ \t]+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
# Share-count residue: a trailing run of lines holding only a 1-4 digit number
_TRAILING_COUNTS = re.compile(r"(?:(?:\n[ \t]*)+\d{1,4}[ \t]*)+$")


def clean_content(text: str) -> str:
    """
    Remove layout residue from extracted text.

    Collapses runs of spaces/tabs, collapses 3+ newlines to a single blank
    line, strips trailing lines that contain only a short number, and trims.

    Args:
        text: Raw extracted text

    Returns:
        Cleaned text
    """
    text = _HORIZONTAL_WS.sub(" ", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    text = _TRAILING_COUNTS.sub("", text.rstrip())
    return text.strip()


def parse_html(html: str) -> BeautifulSoup:
    """
    Parse HTML with the standard library parser.

    Raises:
        MalformedMarkupError: The parser rejected the markup
    """
    try:
        return BeautifulSoup(html or "", "html.parser")
    except ParserRejectedMarkup as e:
        raise MalformedMarkupError(str(e)) from e


def _normalized_text(element: Tag) -> str:
    return " ".join(element.get_text().split())


class ContentExtractor:
    """Extracts structured text from HTML with selector cascades."""

    def __init__(
        self,
        unwanted_selectors: Optional[List[str]] = None,
        content_selectors: Optional[List[str]] = None,
    ):
        """
        Initialize content extractor.

        Args:
            unwanted_selectors: Noise selectors removed before extraction
            content_selectors: Ranked content container selectors
        """
        self.unwanted_selectors = UNWANTED_SELECTORS if unwanted_selectors is None else unwanted_selectors
        self.content_selectors = CONTENT_SELECTORS if content_selectors is None else content_selectors

    def parse(self, html: str) -> ExtractedDocument:
        """
        Build a document from HTML without applying acceptance thresholds.

        Args:
            html: Raw HTML

        Returns:
            ExtractedDocument (possibly with empty title or short body)

        Raises:
            MalformedMarkupError: The parser rejected the markup
        """
        soup = parse_html(html)

        document_title = ""
        if soup.title:
            document_title = _normalized_text(soup.title)

        for selector in self.unwanted_selectors:
            for element in soup.select(selector):
                # Nested matches are already gone with their ancestor
                if not element.decomposed:
                    element.decompose()

        container = self.find_container(soup)

        return ExtractedDocument(
            title=self._extract_title(soup, container, document_title),
            body=clean_content("\n\n".join(self._extract_paragraphs(container))),
            headings=self._extract_headings(container),
            code_blocks=self._extract_code_blocks(container),
            list_items=[
                text
                for text in (_normalized_text(li) for li in container.find_all("li"))
                if len(text) > MIN_LIST_ITEM_LENGTH
            ],
        )

    def find_container(self, soup: BeautifulSoup) -> Tag:
        """Return the first match of the first matching content selector."""
        for selector in self.content_selectors:
            element = soup.select_one(selector)
            if element is not None:
                logger.debug(f"Content container matched selector {selector!r}")
                return element

        logger.debug("No content container matched, falling back to body")
        return soup.body or soup

    def validate(self, document: ExtractedDocument, min_length: int = MIN_BODY_LENGTH) -> ExtractedDocument:
        """
        Apply acceptance rules to a parsed document.

        Args:
            document: Parsed document
            min_length: Minimum acceptable body length

        Returns:
            The same document

        Raises:
            NoTitleError: No title could be resolved
            ContentTooShortError: Body shorter than min_length
        """
        if not document.title:
            raise NoTitleError()
        if document.body_length < min_length:
            raise ContentTooShortError(document.body_length, min_length)
        return document

    def extract(self, html: str, min_length: int = MIN_BODY_LENGTH) -> ExtractedDocument:
        """Parse and validate in one step."""
        return self.validate(self.parse(html), min_length=min_length)

    def _extract_title(self, soup: BeautifulSoup, container: Tag, document_title: str) -> str:
        for scope in (container, soup):
            h1 = scope.find("h1")
            if h1 is not None:
                title = _normalized_text(h1)
                if title:
                    return title
        return document_title

    def _extract_headings(self, container: Tag) -> List[Heading]:
        headings = []
        for element in container.find_all(_HEADING_TAGS):
            text = _normalized_text(element)
            if text:
                headings.append(Heading(level=int(element.name[1]), text=text))
        return headings

    def _extract_code_blocks(self, container: Tag) -> List[str]:
        blocks = []
        for element in container.find_all(["pre", "code"]):
            # <pre><code> is captured once, through the <pre>
            if element.name == "code" and element.find_parent("pre") is not None:
                continue
            code = element.get_text().strip()
            if len(code) > MIN_CODE_LENGTH:
                blocks.append(code)
        return blocks

    def _extract_paragraphs(self, container: Tag) -> List[str]:
        paragraphs = []
        for element in container.find_all("p"):
            text = _normalized_text(element)
            if len(text) > MIN_PARAGRAPH_LENGTH:
                paragraphs.append(text)
        return paragraphs


class MetadataExtractor:
    """Extracts optional article metadata (author, publication date)."""

    def extract_author(self, html: str) -> Optional[str]:
        """Return the first plausible author name, or None."""
        soup = parse_html(html)

        for selector in AUTHOR_SELECTORS:
            element = soup.select_one(selector)
            if element is None:
                continue
            if element.name == "meta":
                author = (element.get("content") or "").strip()
            else:
                author = _normalized_text(element)
            if author and len(author) < 100:
                return author

        return None

    def extract_published_at(self, html: str) -> Optional[datetime]:
        """Return the first parseable publication date, or None."""
        soup = parse_html(html)

        for selector in PUBLISHED_SELECTORS:
            element = soup.select_one(selector)
            if element is None:
                continue

            raw = element.get("datetime") or element.get("content") or _normalized_text(element)
            if not raw:
                continue

            try:
                return date_parser.parse(raw)
            except (ValueError, OverflowError) as e:
                logger.debug(f"Unparseable date {raw!r} from {selector!r}: {e}")

        return None
