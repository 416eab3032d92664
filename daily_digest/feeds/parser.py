"""
Syndication document parser.

Parses raw feed XML and detects its dialect from the document root:

- RSS 2.0: the root has a ``<channel>`` child; entries are its ``<item>`` children
- Atom: the root element is ``<feed>``; entries are its namespaced ``<entry>`` children
- Anything else yields no entries (not an error)
"""

from __future__ import annotations

from dataclasses import dataclass
import xml.etree.ElementTree as ET

from ..core.types import FeedDialect, RawEntry
from ..errors import ParseError

ATOM_NS = "http://www.w3.org/2005/Atom"
DC_NS = "http://purl.org/dc/elements/1.1/"


@dataclass(frozen=True)
class ParsedFeed:
    """Dialect and entries of one parsed document.

    dialect is None when the root matches no known dialect; entries is then empty.
    """

    dialect: FeedDialect | None
    entries: tuple[RawEntry, ...]


def parse_feed(source: str | bytes) -> ParsedFeed:
    """Parse feed XML into dialect-tagged entries.

    Args:
        source: The document. Bytes are preferred so the XML encoding
            declaration is honored.

    Returns:
        ParsedFeed with entries in document order

    Raises:
        ParseError: If the text is not well-formed XML
    """
    try:
        root = ET.fromstring(source)
    except ET.ParseError as exc:
        raise ParseError(f"Malformed XML: {exc}") from exc

    dialect = detect_dialect(root)
    if dialect is FeedDialect.RSS2:
        channel = root.find("channel")
        nodes = channel.findall("item")
    elif dialect is FeedDialect.ATOM:
        nodes = root.findall(f"{{{ATOM_NS}}}entry")
    else:
        return ParsedFeed(dialect=None, entries=())

    return ParsedFeed(
        dialect=dialect,
        entries=tuple(RawEntry(element=node, dialect=dialect) for node in nodes),
    )


def detect_dialect(root: ET.Element) -> FeedDialect | None:
    """Return the dialect of a document root, or None if unrecognized."""
    if root.find("channel") is not None:
        return FeedDialect.RSS2
    if _local_name(root.tag) == "feed":
        return FeedDialect.ATOM
    return None


def _local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag
