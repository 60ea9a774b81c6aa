"""Load phase: everything the server needs, built once before serving."""

from dataclasses import dataclass

import structlog

from src.content.corpus import Corpus, build_corpus
from src.content.loader import ContentLoader
from src.feeds.atom import render_atom_feed
from src.feeds.json_feed import render_json_feed
from src.rendering.templates import TemplateSet
from src.utils.config import Config

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Site:
    """Immutable state shared by all request handlers.

    Attributes:
        config: Server configuration
        templates: Compiled page templates
        corpus: Ordered, cross-linked articles
        atom_feed: Pre-serialized Atom feed
        json_feed: Pre-serialized JSON feed
    """

    config: Config
    templates: TemplateSet
    corpus: Corpus
    atom_feed: bytes
    json_feed: bytes


def load_site(config: Config) -> Site:
    """Parse templates, load articles, build the corpus and render the feeds.

    Runs to completion or raises; no partially built site is ever returned.

    Args:
        config: Server configuration

    Returns:
        Fully built Site

    Raises:
        RenderError: If a template is missing, invalid, or fails on an article body
        ContentLoadError: If the content directory cannot be walked or an article
            cannot be read or parsed
        FeedError: If a feed cannot be serialized
    """
    log = logger.bind(component="site")
    log.info(
        "site_loading",
        content_path=str(config.content_path),
        template_path=str(config.template_path),
        base_path=config.base_path,
    )

    templates = TemplateSet(config.template_path)
    loader = ContentLoader(
        config.content_path,
        templates,
        base_url=config.base_url,
        base_path=config.base_path,
    )
    corpus = build_corpus(loader.load_all(), base_path=config.base_path)

    atom_feed = render_atom_feed(
        corpus,
        title=config.feed_title,
        hostname=config.hostname,
        base_url=config.base_url,
        limit=config.feed_articles,
    )
    json_feed = render_json_feed(corpus, limit=config.feed_articles)

    log.info(
        "site_loaded",
        articles=len(corpus),
        tags=len(corpus.tags),
        atom_bytes=len(atom_feed),
        json_bytes=len(json_feed),
    )
    return Site(
        config=config,
        templates=templates,
        corpus=corpus,
        atom_feed=atom_feed,
        json_feed=json_feed,
    )
