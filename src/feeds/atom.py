"""Atom (RFC 4287) feed serialization."""

from lxml import etree

from src.content.corpus import Corpus
from src.feeds.items import feed_id, feed_items, rfc3339
from src.utils.exceptions import FeedError

ATOM_NS = "http://www.w3.org/2005/Atom"
ATOM_CONTENT_TYPE = "application/atom+xml; charset=utf-8"


def _tag(name: str) -> str:
    return f"{{{ATOM_NS}}}{name}"


def _text(parent: etree._Element, name: str, value: str, **attrs: str) -> etree._Element:
    """Append a child element holding ``value`` as text."""
    element = etree.SubElement(parent, _tag(name), **attrs)
    element.text = value
    return element


def render_atom_feed(
    corpus: Corpus,
    title: str,
    hostname: str,
    base_url: str,
    limit: int,
) -> bytes:
    """Serialize the newest articles as an Atom feed.

    Args:
        corpus: Built corpus
        title: Feed title
        hostname: Hostname used in the feed and entry identifiers
        base_url: Absolute base URL; the self link is ``<base_url>/feed.atom``
        limit: Maximum number of entries

    Returns:
        UTF-8 encoded XML document

    Raises:
        FeedError: If an article holds text that cannot be serialized as XML
    """
    try:
        feed = etree.Element(_tag("feed"), nsmap={None: ATOM_NS})
        _text(feed, "title", title)
        _text(feed, "id", feed_id(hostname))
        etree.SubElement(feed, _tag("link"), rel="self", href=f"{base_url}/feed.atom")
        _text(feed, "updated", rfc3339(corpus.updated))

        for item in feed_items(corpus, limit, hostname):
            entry = etree.SubElement(feed, _tag("entry"))
            _text(entry, "title", item.title)
            _text(entry, "id", item.entry_id)
            etree.SubElement(entry, _tag("link"), rel="alternate", href=item.link)
            _text(entry, "published", rfc3339(item.time))
            _text(entry, "updated", rfc3339(item.time))
            author = etree.SubElement(entry, _tag("author"))
            _text(author, "name", item.author)
            _text(entry, "summary", item.summary, type="html")
            _text(entry, "content", item.content, type="html")

        return etree.tostring(feed, xml_declaration=True, encoding="utf-8")
    except (ValueError, TypeError, etree.LxmlError) as e:
        raise FeedError(f"Failed to serialize Atom feed: {e}") from e
