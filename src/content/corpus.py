"""Corpus construction: ordering, tag index and cross-article links."""

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from types import MappingProxyType

import structlog

from src.content.models import ZERO_TIME, Article

logger = structlog.get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True)
class Corpus:
    """An immutable, fully cross-linked set of articles.

    Attributes:
        articles: Articles newest first; ties keep discovery order
        by_path: Article lookup keyed by path with the base path stripped
        by_tag: Articles carrying each tag, in corpus order
        tags: Distinct tags in lexical order
    """

    articles: tuple[Article, ...] = ()
    by_path: Mapping[str, Article] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )
    by_tag: Mapping[str, tuple[Article, ...]] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )
    tags: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.articles)

    def __iter__(self) -> Iterator[Article]:
        return iter(self.articles)

    @property
    def updated(self) -> datetime:
        """Publish time of the newest article, or the zero time when empty."""
        return self.articles[0].time if self.articles else ZERO_TIME

    def get(self, path: str) -> Article | None:
        """Look up an article by its path relative to the base path."""
        return self.by_path.get(path)

    def latest(self, count: int) -> tuple[Article, ...]:
        """Return the newest ``count`` articles (all of them if fewer)."""
        return self.articles[: max(count, 0)]

    def tagged(self, tag: str) -> tuple[Article, ...]:
        """Return the articles carrying ``tag``, newest first."""
        return self.by_tag.get(tag, ())

    def newer(self, article: Article) -> Article | None:
        """Return the article published right after ``article``, if any."""
        if article.newer_position is None:
            return None
        return self.articles[article.newer_position]

    def older(self, article: Article) -> Article | None:
        """Return the article published right before ``article``, if any."""
        if article.older_position is None:
            return None
        return self.articles[article.older_position]

    def related(self, article: Article) -> tuple[Article, ...]:
        """Return the other articles sharing a tag with ``article``, newest first."""
        return tuple(self.articles[position] for position in article.related_positions)


def _sort_key(indexed: tuple[int, Article]) -> tuple[int, int]:
    """Newest first, then discovery order."""
    index, article = indexed
    return (-((article.time - _EPOCH) // _MICROSECOND), index)


def build_corpus(articles: Iterable[Article], base_path: str = "") -> Corpus:
    """Order articles and derive every cross-article relationship.

    The input order is the discovery order and decides ties between articles
    published at the same instant. The returned corpus holds new Article
    instances with ``position``, ``newer_position``, ``older_position`` and
    ``related_positions`` filled in; the inputs are left untouched.

    Args:
        articles: Parsed articles in discovery order
        base_path: URL prefix stripped from article paths for lookup

    Returns:
        Fully built Corpus
    """
    ordered = [article for _, article in sorted(enumerate(articles), key=_sort_key)]
    count = len(ordered)

    tag_positions: dict[str, list[int]] = {}
    for position, article in enumerate(ordered):
        for tag in dict.fromkeys(article.tags):
            tag_positions.setdefault(tag, []).append(position)

    linked = []
    for position, article in enumerate(ordered):
        related = {
            other
            for tag in article.tags
            for other in tag_positions[tag]
            if other != position
        }
        linked.append(
            dataclasses.replace(
                article,
                position=position,
                newer_position=position - 1 if position > 0 else None,
                older_position=position + 1 if position + 1 < count else None,
                # Positions ascend as publish time descends
                related_positions=tuple(sorted(related)),
            )
        )

    by_path = {_strip_prefix(article.path, base_path): article for article in linked}
    by_tag = {
        tag: tuple(linked[position] for position in positions)
        for tag, positions in tag_positions.items()
    }

    corpus = Corpus(
        articles=tuple(linked),
        by_path=MappingProxyType(by_path),
        by_tag=MappingProxyType(by_tag),
        tags=tuple(sorted(by_tag)),
    )

    logger.info(
        "corpus_built",
        articles=count,
        tags=len(corpus.tags),
        newest=corpus.updated.isoformat() if count else None,
    )
    return corpus


def _strip_prefix(path: str, prefix: str) -> str:
    """Remove ``prefix`` from the start of ``path`` when present."""
    if prefix and path.startswith(prefix):
        return path[len(prefix) :]
    return path
