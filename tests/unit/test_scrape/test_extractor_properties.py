"""Property-based tests for content extraction.

Properties:
- Parsing is a pure function of the input HTML
- Exactly the paragraphs longer than the threshold make up the body, in order
- Cleanup is idempotent and never leaves trailing share counts
"""

import re

from hypothesis import given, settings, strategies as st

from enrichr.scrape.extractor import MIN_PARAGRAPH_LENGTH, ContentExtractor, clean_content

# Plain words so the text survives HTML parsing unchanged
words = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=12)
paragraph_texts = st.lists(words, min_size=1, max_size=12).map(" ".join)

cleanup_input = st.text(alphabet="ab \t\n0123456789", max_size=80)


def _page(paragraphs):
    body = "".join(f"<p>{text}</p>" for text in paragraphs)
    return f"<html><head><title>T</title></head><body><nav><p>{'n' * 40}</p></nav><article><h1>Title</h1>{body}</article></body></html>"


@given(st.lists(paragraph_texts, max_size=8))
@settings(max_examples=60)
def test_parse_is_deterministic(paragraphs):
    html = _page(paragraphs)
    extractor = ContentExtractor()

    assert extractor.parse(html) == extractor.parse(html)


@given(st.lists(paragraph_texts, max_size=8))
@settings(max_examples=80)
def test_body_is_exactly_long_paragraphs(paragraphs):
    document = ContentExtractor().parse(_page(paragraphs))

    expected = [text for text in paragraphs if len(text) > MIN_PARAGRAPH_LENGTH]
    assert document.body == "\n\n".join(expected)


@given(cleanup_input)
@settings(max_examples=200)
def test_clean_content_idempotent(text):
    once = clean_content(text)
    assert clean_content(once) == once


@given(cleanup_input)
@settings(max_examples=200)
def test_clean_content_leaves_no_trailing_counts(text):
    cleaned = clean_content(text)

    assert not re.search(r"\n[ \t]*\d{1,4}$", cleaned)
    assert "\n\n\n" not in cleaned
    assert cleaned == cleaned.strip()


@given(paragraph_texts, st.lists(st.integers(min_value=0, max_value=9999), min_size=1, max_size=5))
def test_clean_content_strips_appended_counts(text, counts):
    residue = "".join(f"\n\n{count}" for count in counts)
    assert clean_content(text + residue) == clean_content(text)
