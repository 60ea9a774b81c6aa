"""JSON feed serialization.

The payload is a JSON array of objects with the keys ``Title``, ``Link``,
``Time``, ``Summary``, ``Content`` and ``Author``. The capitalized keys are
part of the public format and must not change.
"""

import json
import re

from src.content.corpus import Corpus
from src.feeds.items import feed_items, rfc3339
from src.utils.exceptions import FeedError

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
JSONP_CONTENT_TYPE = "application/javascript; charset=utf-8"

VALID_JSONP_CALLBACK = re.compile(r"[a-z_][a-z0-9_.]*", re.IGNORECASE | re.ASCII)

# Characters escaped so the payload is safe inside <script> and JSONP
_UNSAFE_CHARS = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_UNSAFE_RE = re.compile("[<>&\u2028\u2029]")


def render_json_feed(corpus: Corpus, limit: int) -> bytes:
    """Serialize the newest articles as a JSON array.

    Args:
        corpus: Built corpus
        limit: Maximum number of items

    Returns:
        UTF-8 encoded JSON; an empty corpus gives ``[]``

    Raises:
        FeedError: If the items cannot be serialized
    """
    items = [
        {
            "Title": item.title,
            "Link": item.link,
            "Time": rfc3339(item.time, fractional=True),
            "Summary": item.summary,
            "Content": item.content,
            "Author": item.author,
        }
        for item in feed_items(corpus, limit)
    ]

    try:
        payload = json.dumps(items, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise FeedError(f"Failed to serialize JSON feed: {e}") from e

    payload = _UNSAFE_RE.sub(lambda match: _UNSAFE_CHARS[match.group(0)], payload)
    return payload.encode("utf-8")


def wrap_jsonp(payload: bytes, callback: str | None) -> bytes | None:
    """Wrap a JSON payload in a JSONP call.

    Returns None when ``callback`` is missing or not a valid identifier
    (letters, digits, underscores and dots, not starting with a digit or dot).
    """
    if not callback or not VALID_JSONP_CALLBACK.fullmatch(callback):
        return None
    return callback.encode("ascii") + b"(" + payload + b")"
