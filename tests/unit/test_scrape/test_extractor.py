"""Tests for HTML content extraction."""

from datetime import datetime

import pytest

from enrichr.core.errors import ContentTooShortError, ExtractionError, MalformedMarkupError, NoTitleError
from enrichr.scrape.extractor import (
    MIN_BODY_LENGTH,
    ContentExtractor,
    MetadataExtractor,
    clean_content,
)


@pytest.fixture
def extractor():
    return ContentExtractor()


class TestNoiseRemoval:
    """Unwanted regions never reach the document."""

    def test_nav_header_footer_and_scripts_removed(self, extractor, make_article_html):
        document = extractor.parse(make_article_html())

        assert "Navigation links" not in document.body
        assert "Site header" not in document.body
        assert "Copyright notice" not in document.body
        assert "tracking" not in document.body

    def test_noise_inside_container_removed(self, extractor, make_article_html):
        html = make_article_html(
            extra_body=(
                '<div class="social-share"><p>Share this post with all of your friends today</p></div>'
                '<aside><p>Related reading that sits inside the article element</p></aside>'
            )
        )

        document = extractor.parse(html)

        assert "Share this post" not in document.body
        assert "Related reading" not in document.body

    def test_empty_unwanted_list_disables_removal(self):
        extractor = ContentExtractor(unwanted_selectors=[])
        html = """
        <html><body><article>
        <h1>Kept Noise</h1>
        <nav><p>Navigation paragraph that stays when no noise selectors apply.</p></nav>
        </article></body></html>
        """

        document = extractor.parse(html)

        assert document.body == "Navigation paragraph that stays when no noise selectors apply."

    def test_nested_unwanted_elements(self, extractor):
        html = """
        <html><body>
        <article>
            <h1>Nested</h1>
            <aside class="sidebar"><div class="ad"><p>Buy our amazing product now, limited offer</p></div></aside>
            <p>The only paragraph that belongs to the article body text.</p>
        </article>
        </body></html>
        """

        document = extractor.parse(html)

        assert document.body == "The only paragraph that belongs to the article body text."


class TestContainerSelection:
    """Ranked container selectors pick the first family that matches."""

    def test_article_preferred_over_main(self, extractor):
        html = """
        <html><body>
        <main><p>Main region paragraph that is long enough to be kept.</p></main>
        <article><h1>Title</h1><p>Article paragraph that is long enough to be kept.</p></article>
        </body></html>
        """

        document = extractor.parse(html)

        assert document.body == "Article paragraph that is long enough to be kept."

    def test_main_preferred_over_content_class(self, extractor):
        html = """
        <html><body>
        <div class="content"><p>Content class paragraph, long enough to be kept.</p></div>
        <main><p>Main region paragraph that is long enough to be kept.</p></main>
        </body></html>
        """

        document = extractor.parse(html)

        assert document.body == "Main region paragraph that is long enough to be kept."

    def test_first_match_of_selector_is_used(self, extractor):
        html = """
        <html><body>
        <article><h1>First</h1><p>First article paragraph, long enough to be kept.</p></article>
        <article><h1>Second</h1><p>Second article paragraph, long enough to be kept.</p></article>
        </body></html>
        """

        document = extractor.parse(html)

        assert document.title == "First"
        assert "Second article" not in document.body

    def test_falls_back_to_body(self, extractor):
        html = """
        <html><body>
        <div><h1>Loose Page</h1><p>A paragraph without any recognised container element.</p></div>
        </body></html>
        """

        document = extractor.parse(html)

        assert document.title == "Loose Page"
        assert document.body == "A paragraph without any recognised container element."

    def test_custom_content_selectors(self):
        extractor = ContentExtractor(content_selectors=[".story"])
        html = """
        <html><body>
        <article><p>Article paragraph that should be ignored by the custom list.</p></article>
        <div class="story"><p>Story paragraph picked by the custom selector list.</p></div>
        </body></html>
        """

        document = extractor.parse(html)

        assert document.body == "Story paragraph picked by the custom selector list."


    def test_empty_content_selectors_use_body(self):
        extractor = ContentExtractor(content_selectors=[])
        html = """
        <html><body>
        <article><p>Inside the article element, still part of the body.</p></article>
        <div><p>Outside the article element, also part of the body.</p></div>
        </body></html>
        """

        document = extractor.parse(html)

        assert "Inside the article" in document.body
        assert "Outside the article" in document.body


class TestTitle:
    """Title resolution order."""

    def test_title_from_container_h1(self, extractor, make_article_html):
        document = extractor.parse(make_article_html(title="Container Heading"))
        assert document.title == "Container Heading"

    def test_title_from_document_h1_outside_container(self, extractor):
        html = """
        <html><body>
        <div class="hero"><h1>Hero Heading</h1></div>
        <article><p>Paragraph inside the article container element.</p></article>
        </body></html>
        """

        assert extractor.parse(html).title == "Hero Heading"

    def test_title_falls_back_to_title_tag(self, extractor):
        html = """
        <html><head><title>Document Title</title></head>
        <body><article><p>Paragraph inside the article container element.</p></article></body></html>
        """

        assert extractor.parse(html).title == "Document Title"

    def test_empty_title_when_nothing_found(self, extractor):
        html = "<html><body><article><p>Paragraph inside the article container.</p></article></body></html>"

        assert extractor.parse(html).title == ""


class TestElements:
    """Per-element filters."""

    def test_paragraph_length_threshold(self, extractor):
        thirty = "x" * 30
        thirty_one = "y" * 31
        html = f"<html><body><article><h1>T</h1><p>{thirty}</p><p>{thirty_one}</p></article></body></html>"

        document = extractor.parse(html)

        assert document.body == thirty_one

    def test_paragraph_whitespace_normalized(self, extractor):
        html = """
        <html><body><article><h1>T</h1>
        <p>This   paragraph
           spans several     lines in the source markup.</p>
        </article></body></html>
        """

        document = extractor.parse(html)

        assert document.body == "This paragraph spans several lines in the source markup."

    def test_paragraphs_joined_with_blank_line(self, extractor, make_article_html):
        document = extractor.parse(make_article_html(paragraphs=2))

        assert document.body.count("\n\n") == 1
        assert document.body.endswith("Paragraph 1.")

    def test_headings_in_order_with_levels(self, extractor):
        html = """
        <html><body><article>
        <h1>Main</h1><h3>Detail</h3><h2>Section</h2><h6>Footnote</h6>
        </article></body></html>
        """

        document = extractor.parse(html)

        assert [(h.level, h.text) for h in document.headings] == [
            (1, "Main"),
            (3, "Detail"),
            (2, "Section"),
            (6, "Footnote"),
        ]
        assert document.headings[1].tag == "h3"

    def test_code_blocks_captured_once(self, extractor):
        html = """
        <html><body><article><h1>Code</h1>
        <pre><code>print("hello world from python")</code></pre>
        <p>Inline <code>x = 1</code> is far too short to be kept as a block.</p>
        <code>standalone_function_call(argument)</code>
        </article></body></html>
        """

        document = extractor.parse(html)

        assert document.code_blocks == [
            'print("hello world from python")',
            "standalone_function_call(argument)",
        ]

    def test_code_block_whitespace_preserved(self, extractor):
        html = "<html><body><article><pre>\ndef f():\n    return 42\n</pre></article></body></html>"

        document = extractor.parse(html)

        assert document.code_blocks == ["def f():\n    return 42"]

    def test_list_items_threshold(self, extractor):
        html = """
        <html><body><article><h1>List</h1>
        <ul><li>short</li><li>exactly 10</li><li>long enough item</li></ul>
        </article></body></html>
        """

        document = extractor.parse(html)

        assert document.list_items == ["long enough item"]

    def test_body_length_matches_body(self, extractor, make_article_html):
        document = extractor.parse(make_article_html())
        assert document.body_length == len(document.body)

    def test_empty_html(self, extractor):
        document = extractor.parse("")

        assert document.title == ""
        assert document.body == ""
        assert document.headings == []


class TestValidation:
    """Acceptance thresholds."""

    def test_extract_accepts_full_article(self, extractor, make_article_html):
        document = extractor.extract(make_article_html())

        assert document.title == "Test Article Title"
        assert document.body_length >= MIN_BODY_LENGTH

    def test_missing_title_rejected(self, extractor):
        paragraphs = "".join(f"<p>Paragraph number {i} with more than thirty characters.</p>" for i in range(5))
        html = f"<html><body><article>{paragraphs}</article></body></html>"

        with pytest.raises(NoTitleError):
            extractor.extract(html)

    def test_short_body_rejected(self, extractor, make_article_html):
        with pytest.raises(ContentTooShortError) as exc_info:
            extractor.extract(make_article_html(paragraphs=0))

        assert exc_info.value.details["minimum"] == MIN_BODY_LENGTH

    def test_custom_minimum(self, extractor, make_article_html):
        document = extractor.parse(make_article_html(paragraphs=1))

        with pytest.raises(ContentTooShortError):
            extractor.validate(document, min_length=document.body_length + 1)
        assert extractor.validate(document, min_length=document.body_length) is document


@pytest.mark.usefixtures("rejecting_parser")
class TestMalformedMarkup:
    """Markup the parser rejects surfaces as an extraction error."""

    MALFORMED = "<html><body><article><h1>Broken</h1><![ x</article></body></html>"

    def test_parse_rejects(self, extractor):
        with pytest.raises(MalformedMarkupError) as exc_info:
            extractor.parse(self.MALFORMED)

        assert isinstance(exc_info.value, ExtractionError)
        assert exc_info.value.error_code == "MALFORMED_MARKUP"

    def test_metadata_rejects(self):
        with pytest.raises(MalformedMarkupError):
            MetadataExtractor().extract_author(self.MALFORMED)


class TestCleanContent:
    """Trailing artifact cleanup."""

    def test_trailing_share_counts_removed(self):
        assert clean_content("The article ends here.\n\n12\n\n345") == "The article ends here."

    def test_non_trailing_numbers_survive(self):
        text = "Step list\n\n2\n\nThe second step explained in detail."
        assert clean_content(text) == text

    def test_long_numbers_survive(self):
        assert clean_content("Founded in\n\n12345") == "Founded in\n\n12345"

    def test_whitespace_collapsed(self):
        assert clean_content("  Too    many\t\tspaces\n\n\n\n\nhere  ") == "Too many spaces\n\nhere"

    def test_number_inside_line_kept(self):
        assert clean_content("We served 1200") == "We served 1200"


class TestMetadataExtractor:
    """Author and publication date cascades."""

    def test_author_from_class(self):
        html = '<html><body><span class="author-name"> Jane Writer </span></body></html>'
        assert MetadataExtractor().extract_author(html) == "Jane Writer"

    def test_author_from_meta(self):
        html = '<html><head><meta name="author" content="Meta Author"></head><body></body></html>'
        assert MetadataExtractor().extract_author(html) == "Meta Author"

    def test_author_too_long_ignored(self):
        html = f'<html><body><span class="byline">{"x" * 150}</span></body></html>'
        assert MetadataExtractor().extract_author(html) is None

    def test_published_from_time_element(self):
        html = '<html><body><time datetime="2024-03-05T10:00:00">March 5</time></body></html>'
        assert MetadataExtractor().extract_published_at(html) == datetime(2024, 3, 5, 10, 0)

    def test_published_from_meta_property(self):
        html = (
            '<html><head><meta property="article:published_time" content="2023-12-01">'
            "</head><body></body></html>"
        )
        assert MetadataExtractor().extract_published_at(html) == datetime(2023, 12, 1)

    def test_unparseable_date_skipped(self):
        html = '<html><body><span class="post-date">sometime last spring</span></body></html>'
        assert MetadataExtractor().extract_published_at(html) is None

    def test_missing_metadata(self):
        metadata = MetadataExtractor()
        assert metadata.extract_author("<html></html>") is None
        assert metadata.extract_published_at("<html></html>") is None
