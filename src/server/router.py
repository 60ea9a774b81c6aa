"""Map request paths to the content they address."""

from dataclasses import dataclass
from enum import StrEnum

from src.content.corpus import Corpus
from src.content.models import Article

INDEX_PATH = "/index"
ATOM_PATHS = ("/feed.atom", "/feeds/posts/default")
JSON_PATH = "/.json"


class RouteKind(StrEnum):
    """What a request path resolves to."""

    HOME = "home"
    INDEX = "index"
    ARTICLE = "article"
    ATOM = "atom"
    JSON = "json"
    STATIC = "static"


@dataclass(frozen=True)
class Route:
    """A resolved request path.

    Attributes:
        kind: Route kind
        path: Request path with the base path removed
        within_base: Whether the request path started with the base path
        article: The addressed article for ARTICLE routes
    """

    kind: RouteKind
    path: str
    within_base: bool = True
    article: Article | None = None


def resolve(corpus: Corpus, base_path: str, url_path: str) -> Route:
    """Resolve a request path.

    The HTTP method plays no part. Fixed paths win over article paths, and
    anything that is neither falls through to static content. Paths outside
    the base path always resolve to STATIC with ``within_base`` unset.

    Args:
        corpus: Built corpus
        base_path: URL prefix the site is mounted under (no trailing slash)
        url_path: Decoded request path

    Returns:
        The matching Route
    """
    if base_path and not (url_path == base_path or url_path.startswith(base_path + "/")):
        return Route(RouteKind.STATIC, url_path, within_base=False)

    path = url_path[len(base_path) :]

    if path == "/":
        return Route(RouteKind.HOME, path)
    if path == INDEX_PATH:
        return Route(RouteKind.INDEX, path)
    if path in ATOM_PATHS:
        return Route(RouteKind.ATOM, path)
    if path == JSON_PATH:
        return Route(RouteKind.JSON, path)

    article = corpus.get(path)
    if article is not None:
        return Route(RouteKind.ARTICLE, path, article=article)
    return Route(RouteKind.STATIC, path)
