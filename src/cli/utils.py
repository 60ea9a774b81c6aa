"""Shared utilities for CLI commands."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from src.utils.config import (
    DEFAULT_FEED_ARTICLES,
    DEFAULT_FEED_TITLE,
    DEFAULT_HOME_ARTICLES,
    Config,
)

# (option flags, click kwargs); every option can also come from the environment
_SITE_OPTIONS: list[tuple[tuple[str, ...], dict[str, Any]]] = [
    (
        ("--content-path",),
        {
            "envvar": "BLOG_CONTENT_PATH",
            "required": True,
            "type": click.Path(exists=True, file_okay=False, path_type=Path),
            "help": "Directory holding .article files and static content",
        },
    ),
    (
        ("--template-path",),
        {
            "envvar": "BLOG_TEMPLATE_PATH",
            "required": True,
            "type": click.Path(exists=True, file_okay=False, path_type=Path),
            "help": "Directory holding the page templates",
        },
    ),
    (
        ("--base-url",),
        {
            "envvar": "BLOG_BASE_URL",
            "required": True,
            "help": "Absolute base URL used for permalinks",
        },
    ),
    (
        ("--hostname",),
        {
            "envvar": "BLOG_HOSTNAME",
            "required": True,
            "help": "Server hostname used in feed identifiers",
        },
    ),
    (
        ("--base-path",),
        {
            "envvar": "BLOG_BASE_PATH",
            "default": "",
            "help": "URL path prefix the site is served under",
        },
    ),
    (
        ("--home-articles",),
        {
            "envvar": "BLOG_HOME_ARTICLES",
            "type": click.IntRange(min=0),
            "default": DEFAULT_HOME_ARTICLES,
            "show_default": True,
            "help": "Articles shown on the home page",
        },
    ),
    (
        ("--feed-articles",),
        {
            "envvar": "BLOG_FEED_ARTICLES",
            "type": click.IntRange(min=0),
            "default": DEFAULT_FEED_ARTICLES,
            "show_default": True,
            "help": "Articles included in the Atom and JSON feeds",
        },
    ),
    (
        ("--feed-title",),
        {
            "envvar": "BLOG_FEED_TITLE",
            "default": DEFAULT_FEED_TITLE,
            "show_default": True,
            "help": "Title of the Atom feed",
        },
    ),
    (
        ("--log-level",),
        {
            "envvar": "LOG_LEVEL",
            "default": "INFO",
            "type": click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
            "help": "Logging level",
        },
    ),
]


def site_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the site configuration options to a click command."""
    for flags, kwargs in reversed(_SITE_OPTIONS):
        command = click.option(*flags, **kwargs)(command)
    return command


def build_config(**options: Any) -> Config:
    """Create a Config from the values collected by ``site_options``."""
    return Config(
        content_path=options["content_path"],
        template_path=options["template_path"],
        base_url=options["base_url"],
        hostname=options["hostname"],
        base_path=options["base_path"],
        home_articles=options["home_articles"],
        feed_articles=options["feed_articles"],
        feed_title=options["feed_title"],
        log_level=options["log_level"].upper(),
    )
