"""Tests for feed XML parsing and dialect detection."""

import pytest

from daily_digest.core.types import FeedDialect
from daily_digest.errors import ParseError
from daily_digest.feeds.parser import parse_feed


RSS_DOC = """
<rss version="2.0">
  <channel>
    <title>Example</title>
    <item><title>First</title><link>https://example.com/1</link></item>
    <item><title>Second</title><link>https://example.com/2</link></item>
  </channel>
</rss>
"""

ATOM_DOC = """
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <entry><title>One</title><link href="https://example.com/a"/></entry>
  <entry><title>Two</title><link href="https://example.com/b"/></entry>
  <entry><title>Three</title><link href="https://example.com/c"/></entry>
</feed>
"""


def test_rss_document_yields_items_in_order():
    parsed = parse_feed(RSS_DOC)

    assert parsed.dialect is FeedDialect.RSS2
    assert len(parsed.entries) == 2
    assert all(entry.dialect is FeedDialect.RSS2 for entry in parsed.entries)
    assert parsed.entries[0].element.findtext("title") == "First"
    assert parsed.entries[1].element.findtext("title") == "Second"


def test_atom_document_yields_namespaced_entries():
    parsed = parse_feed(ATOM_DOC)

    assert parsed.dialect is FeedDialect.ATOM
    assert len(parsed.entries) == 3
    assert all(entry.dialect is FeedDialect.ATOM for entry in parsed.entries)


def test_atom_entries_without_namespace_are_not_matched():
    parsed = parse_feed("<feed><entry><title>x</title></entry></feed>")

    assert parsed.dialect is FeedDialect.ATOM
    assert parsed.entries == ()


def test_rss_channel_without_items_has_no_entries():
    parsed = parse_feed("<rss><channel><title>Empty</title></channel></rss>")

    assert parsed.dialect is FeedDialect.RSS2
    assert parsed.entries == ()


def test_unrecognized_root_yields_no_entries():
    doc = """
    <rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
             xmlns="http://purl.org/rss/1.0/">
      <channel><title>RSS 1.0</title></channel>
      <item><title>x</title><link>https://example.com</link></item>
    </rdf:RDF>
    """
    parsed = parse_feed(doc)

    assert parsed.dialect is None
    assert parsed.entries == ()


def test_html_page_yields_no_entries():
    parsed = parse_feed("<html><body><p>Not a feed</p></body></html>")

    assert parsed.dialect is None
    assert parsed.entries == ()


@pytest.mark.parametrize(
    "text",
    [
        "<rss><channel><item><title>broken</item></channel></rss>",
        "not xml at all",
        "",
    ],
)
def test_malformed_xml_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse_feed(text)


def test_bytes_input_honors_encoding_declaration():
    doc = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        "<rss><channel><item><title>生成AIの最新動向</title>"
        "<link>https://example.jp/ai</link></item></channel></rss>"
    ).encode("utf-8")

    parsed = parse_feed(doc)

    assert parsed.dialect is FeedDialect.RSS2
    assert parsed.entries[0].element.findtext("title") == "生成AIの最新動向"
