"""Pytest configuration and fixtures."""

from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup, ParserRejectedMarkup

from enrichr.config import AppConfig, RewriteConfig, ScrapeConfig, SearchConfig, StoreConfig
from enrichr.core.models import ArticleDraft
from enrichr.storage.sqlite import SQLiteArticleStore

LOREM = (
    "Customer support teams increasingly rely on conversational assistants to "
    "answer routine questions, freeing human agents for harder problems."
)


def article_html(
    title="Test Article Title",
    paragraphs=3,
    container="article",
    extra_body="",
    head_title="Page Title",
):
    """Build a blog article page with navigation noise around the content."""
    body = "".join(f"<p>{LOREM} Paragraph {i}.</p>" for i in range(paragraphs))
    return f"""
    <html>
    <head><title>{head_title}</title></head>
    <body>
        <nav><a href="/">Home</a><p>Navigation links that are long enough to count</p></nav>
        <header><p>Site header with a tagline that is long enough to count</p></header>
        <{container}>
            <h1>{title}</h1>
            <h2>Why it matters</h2>
            {body}
            {extra_body}
        </{container}>
        <footer><p>Copyright notice that is definitely long enough to count</p></footer>
        <script>console.log('tracking');</script>
    </body>
    </html>
    """


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for tests."""
    return tmp_path


@pytest.fixture
def app_config(tmp_path):
    """Application config with a rewrite key, API search credentials and no delays."""
    return AppConfig(
        blog_url="https://blog.example.com/blogs/",
        scrape=ScrapeConfig(timeout=5, settle_delay=0, network_idle_timeout=0, request_delay=0),
        search=SearchConfig(serpapi_key="serp-test-key"),
        rewrite=RewriteConfig(openai_api_key="sk-test-key"),
        store=StoreConfig(type="sqlite", sqlite_path=str(tmp_path / "articles.db")),
    )


@pytest.fixture
def store(tmp_path):
    """Empty SQLite article store."""
    return SQLiteArticleStore(str(tmp_path / "articles.db"))


@pytest.fixture
def sample_draft():
    """Provide a sample article draft."""
    return ArticleDraft(
        title="Chatbots for Customer Support",
        content=LOREM * 3,
        original_url="https://blog.example.com/blogs/chatbots-for-support/",
        author="Jane Writer",
    )


@pytest.fixture
def make_article_html():
    """Builder for article pages (see article_html)."""
    return article_html


MALFORMED_MARKER = "<![ x"


@pytest.fixture
def rejecting_parser():
    """Make the HTML parser reject any page containing MALFORMED_MARKER.

    Whether html.parser rejects a given declaration varies across Python
    releases, so rejection is forced here.
    """

    def parse(markup, *args, **kwargs):
        if MALFORMED_MARKER in (markup or ""):
            raise ParserRejectedMarkup("unknown status keyword in marked section")
        return BeautifulSoup(markup, *args, **kwargs)

    with patch("enrichr.scrape.extractor.BeautifulSoup", side_effect=parse):
        yield
