"""Pagination and article link discovery on blog listing pages."""

import logging
import re
from typing import List
from urllib.parse import urljoin, urlparse

from enrichr.scrape.extractor import parse_html

logger = logging.getLogger(__name__)

PAGINATION_SELECTORS = [
    ".pagination a",
    ".page-numbers",
    "nav.pagination a",
    ".wp-pagenavi a",
    "a.page-numbers",
]

ARTICLE_LINK_SELECTORS = [
    'article a[href*="/blog"]',
    '.post a[href*="/blog"]',
    ".blog-post a",
    "h2 a",
    ".entry-title a",
    "article h2 a",
    ".post-title a",
    'a[href*="blog"]',
]

_PAGE_IN_HREF = re.compile(r"/page/(\d+)")
_ARCHIVE_HREF = re.compile(r"/(category|tag|author|page)/")


def _page_candidates(text: str, href: str) -> List[int]:
    candidates = []
    if text.isdecimal():
        candidates.append(int(text))
    match = _PAGE_IN_HREF.search(href)
    if match:
        candidates.append(int(match.group(1)))
    return candidates


def find_last_page(listing_html: str, base_url: str) -> str:
    """
    Infer the URL of the last listing page from the first page's links.

    Selector families are tried in order; within a family the highest page
    number seen (from link text or a /page/{n} href) wins. The first family
    that pushes the maximum above 1 ends the scan.

    Args:
        listing_html: HTML of the first listing page
        base_url: URL of that page

    Returns:
        Absolute URL of the last page, or base_url for single-page listings
    """
    soup = parse_html(listing_html)

    last_number = 1
    last_url = base_url

    for selector in PAGINATION_SELECTORS:
        for link in soup.select(selector):
            href = link.get("href") or ""
            text = link.get_text().strip()

            for number in _page_candidates(text, href):
                if number > last_number and href:
                    last_number = number
                    last_url = urljoin(base_url, href)

        if last_number > 1:
            logger.info(f"Last page {last_number} found via {selector!r}: {last_url}")
            return last_url

    logger.warning("No pagination found. Using the listing page itself.")
    return base_url


def _bare_host(url: str) -> str:
    host = urlparse(url).netloc.lower()
    return host[4:] if host.startswith("www.") else host


def find_article_urls(listing_html: str, page_url: str, limit: int = 5) -> List[str]:
    """
    Collect article links from a listing page.

    Args:
        listing_html: Listing page HTML
        page_url: URL of the listing page (for resolving and host filtering)
        limit: Maximum number of article URLs

    Returns:
        The last ``limit`` article URLs in page order (oldest posts on the
        last listing page)
    """
    soup = parse_html(listing_html)
    host = _bare_host(page_url)
    listing = page_url.rstrip("/")

    urls: List[str] = []
    for selector in ARTICLE_LINK_SELECTORS:
        for link in soup.select(selector):
            if len(urls) >= limit:
                break

            href = (link.get("href") or "").strip()
            if not href or href.startswith("#"):
                continue

            url = urljoin(page_url, href)
            if url in urls or url.rstrip("/") == listing:
                continue
            if _bare_host(url) != host or _ARCHIVE_HREF.search(urlparse(url).path):
                continue

            urls.append(url)

        if len(urls) >= limit:
            break

    logger.info(f"Found {len(urls)} article link(s) on {page_url}")
    return urls[-limit:] if limit > 0 else []

