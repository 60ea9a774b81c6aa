"""CLI command for content directory statistics."""

from typing import Any

import click
import structlog
from dotenv import load_dotenv

from src.cli.utils import build_config, site_options
from src.content.corpus import Corpus
from src.server.site import load_site
from src.utils.exceptions import ArticleServerError

load_dotenv()
logger = structlog.get_logger(__name__)


def _display_summary(corpus: Corpus) -> None:
    """Display article count and publish date range."""
    click.echo("-" * 80)
    click.echo("Summary")
    click.echo("-" * 80)
    click.echo(f"  Total Articles: {len(corpus):,}")
    click.echo(f"  Distinct Tags: {len(corpus.tags):,}")
    click.echo(f"  Newest: {corpus.articles[0].time.isoformat()}  {corpus.articles[0].path}")
    click.echo(f"  Oldest: {corpus.articles[-1].time.isoformat()}  {corpus.articles[-1].path}")
    click.echo()


def _display_tags(corpus: Corpus) -> None:
    """Display every tag with the number of articles carrying it."""
    click.echo("-" * 80)
    click.echo("Tags")
    click.echo("-" * 80)
    for tag in corpus.tags:
        click.echo(f"  {tag}: {len(corpus.tagged(tag)):,}")
    click.echo()


@click.command()
@site_options
def stats_content(**options: Any) -> None:
    """Display content statistics.

    Loads the site exactly as the server would, then shows the article count,
    the publish date range and every tag with its article count.
    """
    click.echo("=" * 80)
    click.echo("Article Server - Content Statistics")
    click.echo("=" * 80)
    click.echo()

    config = build_config(**options)
    click.echo(f"Content Path: {config.content_path}")
    click.echo()

    try:
        site = load_site(config)
    except ArticleServerError as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("stats_content_failed", error=str(e))
        raise click.Abort() from e

    if not len(site.corpus):
        click.echo("  No articles found", err=True)
        raise click.Abort()

    _display_summary(site.corpus)
    _display_tags(site.corpus)


if __name__ == "__main__":
    stats_content()
