"""Server configuration loaded from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from src.utils.exceptions import ConfigurationError

DEFAULT_HOME_ARTICLES = 5
DEFAULT_FEED_ARTICLES = 10
DEFAULT_FEED_TITLE = "Blog"


@dataclass(frozen=True)
class Config:
    """Article server configuration.

    Attributes:
        content_path: Directory holding the .article files and static content
        template_path: Directory holding the page templates
        base_url: Absolute base URL used for permalinks (no trailing slash)
        base_path: URL path prefix relative to the server root (no trailing slash)
        hostname: Server hostname, used to build feed identifiers
        home_articles: Number of articles shown on the home page
        feed_articles: Number of articles included in the Atom and JSON feeds
        feed_title: Title of the Atom feed
        log_level: Logging level name
    """

    content_path: Path
    template_path: Path
    base_url: str
    hostname: str
    base_path: str = ""
    home_articles: int = DEFAULT_HOME_ARTICLES
    feed_articles: int = DEFAULT_FEED_ARTICLES
    feed_title: str = DEFAULT_FEED_TITLE
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Normalize paths and URL prefixes and validate counts.

        Raises:
            ConfigurationError: If a count is negative
        """
        object.__setattr__(self, "content_path", Path(self.content_path))
        object.__setattr__(self, "template_path", Path(self.template_path))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "base_path", self.base_path.rstrip("/"))

        if self.home_articles < 0:
            raise ConfigurationError("home_articles cannot be negative")
        if self.feed_articles < 0:
            raise ConfigurationError("feed_articles cannot be negative")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from .env file and environment.

        Returns:
            Config instance

        Raises:
            ConfigurationError: If a required variable is missing or a count is invalid
        """
        env_path = Path(".env")
        if env_path.exists():
            load_dotenv(env_path)

        return cls(
            content_path=Path(cls._get_required("BLOG_CONTENT_PATH")),
            template_path=Path(cls._get_required("BLOG_TEMPLATE_PATH")),
            base_url=cls._get_required("BLOG_BASE_URL"),
            hostname=cls._get_required("BLOG_HOSTNAME"),
            base_path=os.getenv("BLOG_BASE_PATH", ""),
            home_articles=cls.get_int("BLOG_HOME_ARTICLES", DEFAULT_HOME_ARTICLES),
            feed_articles=cls.get_int("BLOG_FEED_ARTICLES", DEFAULT_FEED_ARTICLES),
            feed_title=os.getenv("BLOG_FEED_TITLE", DEFAULT_FEED_TITLE),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @staticmethod
    def _get_required(key: str) -> str:
        """Get required environment variable or raise error.

        Args:
            key: Environment variable name

        Returns:
            Environment variable value

        Raises:
            ConfigurationError: If variable is not set
        """
        value = os.getenv(key)
        if not value:
            raise ConfigurationError(f"{key} environment variable is not set")
        return value

    @staticmethod
    def get_int(key: str, default: int) -> int:
        """Parse integer from environment with validation."""
        value = os.getenv(key)
        if value is None or value.strip() == "":
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"Invalid integer value for {key}: {value}") from None

    @staticmethod
    def get_optional(key: str, default: str | None = None) -> str | None:
        """Get optional environment variable with default value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Environment variable value or default
        """
        return os.getenv(key, default)
