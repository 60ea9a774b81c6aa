"""Atom and JSON feeds built from the corpus."""

from src.feeds.atom import ATOM_CONTENT_TYPE, render_atom_feed
from src.feeds.items import FeedItem, feed_items, rfc3339
from src.feeds.json_feed import JSON_CONTENT_TYPE, JSONP_CONTENT_TYPE, render_json_feed, wrap_jsonp

__all__ = [
    "ATOM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "JSONP_CONTENT_TYPE",
    "FeedItem",
    "feed_items",
    "render_atom_feed",
    "render_json_feed",
    "rfc3339",
    "wrap_jsonp",
]
