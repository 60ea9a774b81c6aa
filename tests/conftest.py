"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.content.models import Article
from src.utils.config import Config
from tests.helpers import article_source

REPO_TEMPLATES = Path(__file__).parent.parent / "templates"


@pytest.fixture
def template_dir() -> Path:
    """Return path to the shipped templates."""
    return REPO_TEMPLATES


@pytest.fixture
def make_article() -> Callable[..., Article]:
    """Factory for parsed articles without derived fields."""

    def _make(
        path: str,
        hour: int,
        tags: tuple[str, ...] = (),
        title: str | None = None,
    ) -> Article:
        return Article(
            path=path,
            title=title or path.strip("/").replace("/", " ").title(),
            time=datetime(2024, 1, 1, hour, tzinfo=UTC),
            tags=tags,
            permalink="https://example.com" + path,
        )

    return _make


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create a small content directory with three articles and a static file."""
    root = tmp_path / "content"
    (root / "2024").mkdir(parents=True)
    (root / "static").mkdir()

    (root / "2024" / "first.article").write_text(
        article_source(
            "First Post",
            "2024-01-01T10:00:00Z",
            tags=["go", "python"],
            authors=["Ann", "Bo", "Cy"],
            body="Hello *world*.\n\n## Details\n\nMore text.",
        ),
        encoding="utf-8",
    )
    (root / "2024" / "second.article").write_text(
        article_source(
            "Second Post",
            "2024-01-02T10:00:00Z",
            tags=["python", "rust"],
            authors=["Ann"],
        ),
        encoding="utf-8",
    )
    (root / "third.article").write_text(
        article_source("Third Post", "2024-01-03T10:00:00Z", tags=["go"]),
        encoding="utf-8",
    )
    (root / "static" / "style.css").write_text("body { color: black; }\n", encoding="utf-8")
    return root


@pytest.fixture
def config(content_dir: Path, template_dir: Path) -> Config:
    """Configuration pointing at the sample content and shipped templates."""
    return Config(
        content_path=content_dir,
        template_path=template_dir,
        base_url="https://example.com",
        hostname="example.com",
        home_articles=2,
        feed_articles=10,
        feed_title="Example Blog",
    )
