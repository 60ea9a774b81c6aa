"""CLI command for serving the site over HTTP."""

from typing import Any

import click
import structlog
import uvicorn
from dotenv import load_dotenv

from src.cli.utils import build_config, site_options
from src.server.app import create_app
from src.utils.exceptions import ArticleServerError
from src.utils.logger import configure_logging

load_dotenv()
logger = structlog.get_logger(__name__)


@click.command()
@site_options
@click.option("--host", envvar="BLOG_HOST", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", envvar="BLOG_PORT", type=int, default=8080, show_default=True, help="Bind port")
@click.option("--console-logs", is_flag=True, help="Human-readable logs instead of JSON")
def serve(host: str, port: int, console_logs: bool, **options: Any) -> None:
    """Load all articles and serve them.

    The whole site (articles, relationships and feeds) is built before the
    server starts listening; any load error aborts startup.
    """
    config = build_config(**options)
    configure_logging(config.log_level, json_output=not console_logs)

    try:
        app = create_app(config)
    except ArticleServerError as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("site_load_failed", error=str(e), error_type=type(e).__name__)
        raise click.Abort() from e

    click.echo(f"Serving {len(app.state.site.corpus)} articles on http://{host}:{port}{config.base_path}/")
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    serve()
