"""Main entry point: serve the site configured through the environment."""

import sys

import uvicorn

from src.server.app import create_app
from src.utils.config import Config
from src.utils.exceptions import ArticleServerError, ConfigurationError
from src.utils.logger import configure_logging, get_logger

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


def main() -> int:
    """Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        config = Config.from_env()
        host = Config.get_optional("BLOG_HOST", DEFAULT_HOST)
        port = Config.get_int("BLOG_PORT", DEFAULT_PORT)

        configure_logging(config.log_level)
        logger = get_logger(__name__)
        logger.info("application_starting", version="0.1.0")

        app = create_app(config)
        uvicorn.run(app, host=host, port=port, log_config=None)
        return 0

    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print(
            "Please check your .env file and ensure all BLOG_* variables are set.",
            file=sys.stderr,
        )
        return 1
    except ArticleServerError as e:
        print(f"Failed to load site: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
