"""FastAPI application serving articles, feeds and static content."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import Response, StreamingResponse

from src.feeds.atom import ATOM_CONTENT_TYPE
from src.feeds.json_feed import JSON_CONTENT_TYPE, JSONP_CONTENT_TYPE, wrap_jsonp
from src.server.router import Route, RouteKind, resolve
from src.server.site import Site, load_site
from src.server.static import serve_static
from src.utils.config import Config

logger = structlog.get_logger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


def _page_context(site: Site, route: Route) -> dict[str, Any]:
    """Build the template variables for a page view."""
    corpus = site.corpus
    context: dict[str, Any] = {
        "doc": None,
        "data": None,
        "base_path": site.config.base_path,
        "tags": corpus.tags,
        "newer": corpus.newer,
        "older": corpus.older,
        "related": corpus.related,
    }
    if route.kind is RouteKind.HOME:
        context["data"] = corpus.latest(site.config.home_articles)
    elif route.kind is RouteKind.INDEX:
        context["data"] = corpus.articles
    else:
        context["doc"] = route.article
    return context


def _first_query_value(request: Request, name: str) -> str | None:
    """Return the first value of a repeated query parameter."""
    values = request.query_params.getlist(name)
    return values[0] if values else None


def _serve_json(site: Site, callback: str | None) -> Response:
    wrapped = wrap_jsonp(site.json_feed, callback)
    if wrapped is not None:
        return Response(content=wrapped, media_type=JSONP_CONTENT_TYPE)
    return Response(content=site.json_feed, media_type=JSON_CONTENT_TYPE)


def create_app(config: Config | None = None, site: Site | None = None) -> FastAPI:
    """Load the site and create the app that serves it.

    Loading happens here, before the app exists, so a broken corpus or
    template stops startup instead of surfacing on a request.

    Args:
        config: Server configuration (defaults to Config.from_env())
        site: Pre-built site; when given, ``config`` is ignored

    Returns:
        FastAPI application

    Raises:
        ArticleServerError: If any part of the load fails
    """
    if site is None:
        site = load_site(config or Config.from_env())

    app = FastAPI(
        title=site.config.feed_title,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.site = site

    # Synchronous handler: each request runs on the worker thread pool and
    # only reads the immutable site.
    def serve(request: Request) -> Response:
        """Dispatch a request to a page, a feed, or static content."""
        route = resolve(site.corpus, site.config.base_path, request.url.path)

        if route.kind is RouteKind.ATOM:
            return Response(content=site.atom_feed, media_type=ATOM_CONTENT_TYPE)
        if route.kind is RouteKind.JSON:
            return _serve_json(site, _first_query_value(request, "jsonp"))
        if route.kind is RouteKind.STATIC:
            return serve_static(
                site.config.content_path,
                route.path if route.within_base else None,
            )

        return StreamingResponse(
            site.templates.stream_page(route.kind.value, _page_context(site, route)),
            media_type=HTML_CONTENT_TYPE,
        )

    # No method filter: any verb, standard or not, gets the same answer
    app.add_route("/{path:path}", serve, methods=None, include_in_schema=False)

    logger.info("app_created", base_path=site.config.base_path, articles=len(site.corpus))
    return app
