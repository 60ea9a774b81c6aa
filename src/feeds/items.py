"""Per-article projection shared by the Atom and JSON feeds."""

from dataclasses import dataclass
from datetime import datetime

from src.content.corpus import Corpus
from src.rendering.text import authors_line, summary


@dataclass(frozen=True)
class FeedItem:
    """One article as it appears in a feed.

    Attributes:
        title: Article title
        entry_id: Feed-unique identifier (feed id + article path)
        link: Absolute permalink
        time: Publish time, used for both published and updated
        summary: First plain paragraph as inline HTML
        content: Full rendered HTML body
        author: Display string joining all author names
    """

    title: str
    entry_id: str
    link: str
    time: datetime
    summary: str
    content: str
    author: str


def feed_id(hostname: str) -> str:
    """Return the stable tag URI identifying the feed."""
    return f"tag:{hostname},2013:{hostname}"


def feed_items(corpus: Corpus, limit: int, hostname: str = "") -> list[FeedItem]:
    """Project the newest ``limit`` articles into feed items, newest first.

    Entry identifiers are only meaningful when ``hostname`` is given.
    """
    base_id = feed_id(hostname) if hostname else ""
    return [
        FeedItem(
            title=article.title,
            entry_id=base_id + article.path,
            link=article.permalink,
            time=article.time,
            summary=summary(article),
            content=article.html,
            author=authors_line(article.authors),
        )
        for article in corpus.latest(limit)
    ]


def rfc3339(moment: datetime, fractional: bool = False) -> str:
    """Format a timestamp as RFC 3339.

    UTC is written as ``Z``. With ``fractional`` set, sub-second precision is
    kept with trailing zeros removed.

    >>> rfc3339(datetime(2013, 3, 1, 11, 0, tzinfo=UTC))
    '2013-03-01T11:00:00Z'
    """
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if fractional and moment.microsecond:
        text += f".{moment.microsecond:06d}".rstrip("0")

    offset = moment.utcoffset()
    if offset is None or not offset:
        return text + "Z"

    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"
