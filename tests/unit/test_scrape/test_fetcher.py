"""Tests for the static-first fetcher and its escalation rule."""

from unittest.mock import MagicMock

import pytest
import requests

from enrichr.config import DEFAULT_USER_AGENT, ScrapeConfig
from enrichr.core.errors import (
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    InsufficientContentError,
    MalformedMarkupError,
    RenderError,
)
from enrichr.scrape.fetcher import STRATEGY_RENDERED, STRATEGY_STATIC, ContentFetcher

URL = "https://competitor.example.org/guide/"


def _page(body_chars):
    return f"<html><body><article><h1>Guide</h1><p>{'a' * body_chars}</p></article></body></html>"


def _response(html, status=200):
    response = MagicMock()
    response.text = html
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def renderer():
    return MagicMock()


@pytest.fixture
def fetcher(session, renderer):
    return ContentFetcher(ScrapeConfig(timeout=7), session=session, renderer=renderer)


class TestFetchHtml:
    """Single static GET with error mapping."""

    def test_sends_browser_headers_and_timeout(self, fetcher, session):
        session.get.return_value = _response("<html></html>")

        assert fetcher.fetch_html(URL) == "<html></html>"

        _, kwargs = session.get.call_args
        assert kwargs["headers"]["User-Agent"] == DEFAULT_USER_AGENT
        assert kwargs["timeout"] == 7

    def test_http_error_status(self, fetcher, session):
        session.get.return_value = _response("Not found", status=404)

        with pytest.raises(HttpStatusError) as exc_info:
            fetcher.fetch_html(URL)

        assert exc_info.value.status == 404

    def test_timeout(self, fetcher, session):
        session.get.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(FetchTimeoutError) as exc_info:
            fetcher.fetch_html(URL)

        assert exc_info.value.details["timeout_seconds"] == 7

    def test_connection_error(self, fetcher, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_html(URL)

        assert not isinstance(exc_info.value, FetchTimeoutError)

    def test_not_retried(self, fetcher, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(FetchError):
            fetcher.fetch_html(URL)

        assert session.get.call_count == 1


class TestEscalation:
    """Render only when the static body is too short."""

    def test_long_static_body_not_rendered(self, fetcher, session, renderer):
        session.get.return_value = _response(_page(250))

        result = fetcher.fetch(URL)

        renderer.render.assert_not_called()
        assert result.strategy == STRATEGY_STATIC
        assert result.escalated is False
        assert result.document.body_length == 250

    def test_short_static_body_rendered(self, fetcher, session, renderer):
        session.get.return_value = _response(_page(150))
        renderer.render.return_value = _page(600)

        result = fetcher.fetch(URL)

        renderer.render.assert_called_once_with(URL)
        assert result.strategy == STRATEGY_RENDERED
        assert result.escalated is True
        assert result.document.body_length == 600
        assert result.html == _page(600)

    def test_threshold_is_exclusive(self, fetcher, session, renderer):
        session.get.return_value = _response(_page(200))

        fetcher.fetch(URL)

        renderer.render.assert_not_called()

    def test_rendered_body_still_short(self, fetcher, session, renderer):
        session.get.return_value = _response(_page(40))
        renderer.render.return_value = _page(60)

        with pytest.raises(InsufficientContentError) as exc_info:
            fetcher.fetch(URL)

        assert exc_info.value.details["body_length"] == 60

    def test_rendered_body_between_floor_and_trigger_accepted(self, fetcher, session, renderer):
        session.get.return_value = _response("<html><body></body></html>")
        renderer.render.return_value = _page(120)

        result = fetcher.fetch(URL)

        assert result.document.body_length == 120

    def test_render_failure_propagates(self, fetcher, session, renderer):
        session.get.return_value = _response(_page(10))
        renderer.render.side_effect = RenderError(URL, "chrome crashed")

        with pytest.raises(RenderError):
            fetcher.fetch(URL)

    def test_static_http_error_not_escalated(self, fetcher, session, renderer):
        session.get.return_value = _response("Forbidden", status=403)

        with pytest.raises(HttpStatusError):
            fetcher.fetch(URL)

        renderer.render.assert_not_called()

    def test_malformed_static_page_rejected(self, fetcher, session, renderer, rejecting_parser):
        session.get.return_value = _response("<html><body><article><h1>Guide</h1><![ x</article></body></html>")

        with pytest.raises(MalformedMarkupError):
            fetcher.fetch(URL)

        renderer.render.assert_not_called()

    def test_malformed_rendered_page_rejected(self, fetcher, session, renderer, rejecting_parser):
        session.get.return_value = _response(_page(10))
        renderer.render.return_value = "<html><body><![ x</body></html>"

        with pytest.raises(MalformedMarkupError):
            fetcher.fetch(URL)
