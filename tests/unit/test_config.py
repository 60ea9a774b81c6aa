"""Tests for configuration management."""

from pathlib import Path
from unittest.mock import patch

import pytest

from src.utils.config import Config
from src.utils.exceptions import ConfigurationError

REQUIRED_ENV = {
    "BLOG_CONTENT_PATH": "content",
    "BLOG_TEMPLATE_PATH": "templates",
    "BLOG_BASE_URL": "https://blog.example.com/",
    "BLOG_HOSTNAME": "blog.example.com",
}
OPTIONAL_ENV = (
    "BLOG_BASE_PATH",
    "BLOG_HOME_ARTICLES",
    "BLOG_FEED_ARTICLES",
    "BLOG_FEED_TITLE",
    "LOG_LEVEL",
)


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set every required variable and clear the optional ones."""
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    for key in OPTIONAL_ENV:
        monkeypatch.delenv(key, raising=False)


def test_config_missing_required_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that Config raises error when required env var is missing."""
    for key in REQUIRED_ENV:
        monkeypatch.delenv(key, raising=False)

    with patch("src.utils.config.load_dotenv"):
        with pytest.raises(ConfigurationError, match="BLOG_CONTENT_PATH"):
            Config.from_env()


def test_config_loads_required_env_vars(required_env: None) -> None:
    """Test that Config loads all required environment variables."""
    with patch("src.utils.config.load_dotenv"):
        config = Config.from_env()

    assert config.content_path == Path("content")
    assert config.template_path == Path("templates")
    assert config.hostname == "blog.example.com"


def test_config_strips_trailing_slashes(
    required_env: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that base URL and base path lose their trailing slash."""
    monkeypatch.setenv("BLOG_BASE_PATH", "/blog/")

    with patch("src.utils.config.load_dotenv"):
        config = Config.from_env()

    assert config.base_url == "https://blog.example.com"
    assert config.base_path == "/blog"


def test_config_defaults(required_env: None) -> None:
    """Test that optional settings fall back to their defaults."""
    with patch("src.utils.config.load_dotenv"):
        config = Config.from_env()

    assert config.base_path == ""
    assert config.home_articles == 5
    assert config.feed_articles == 10
    assert config.feed_title == "Blog"
    assert config.log_level == "INFO"


def test_config_custom_counts(required_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that article counts are read as integers."""
    monkeypatch.setenv("BLOG_HOME_ARTICLES", "3")
    monkeypatch.setenv("BLOG_FEED_ARTICLES", "25")

    with patch("src.utils.config.load_dotenv"):
        config = Config.from_env()

    assert config.home_articles == 3
    assert config.feed_articles == 25


def test_config_invalid_count(required_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a non-integer count is a configuration error."""
    monkeypatch.setenv("BLOG_FEED_ARTICLES", "many")

    with patch("src.utils.config.load_dotenv"):
        with pytest.raises(ConfigurationError, match="BLOG_FEED_ARTICLES"):
            Config.from_env()


def test_config_negative_count() -> None:
    """Test that negative counts are rejected."""
    with pytest.raises(ConfigurationError, match="home_articles"):
        Config(
            content_path=Path("content"),
            template_path=Path("templates"),
            base_url="https://example.com",
            hostname="example.com",
            home_articles=-1,
        )


def test_config_get_optional_with_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test get_optional returns default when env var not set."""
    monkeypatch.delenv("OPTIONAL_VAR", raising=False)

    assert Config.get_optional("OPTIONAL_VAR", "default_value") == "default_value"


def test_config_get_optional_with_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test get_optional returns value when env var is set."""
    monkeypatch.setenv("OPTIONAL_VAR", "custom_value")

    assert Config.get_optional("OPTIONAL_VAR", "default_value") == "custom_value"


def test_config_get_int_invalid(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test get_int raises ConfigurationError for non-integer values."""
    monkeypatch.setenv("BLOG_PORT", "eighty")

    with pytest.raises(ConfigurationError, match="Invalid integer value for BLOG_PORT"):
        Config.get_int("BLOG_PORT", 8080)


def test_config_get_int_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BLOG_PORT", raising=False)

    assert Config.get_int("BLOG_PORT", 8080) == 8080
