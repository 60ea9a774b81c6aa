"""Article loader for the content directory.

Walks the content root for .article files, parses each one and renders its
body. Any failure aborts the whole load: a server never starts with a partial
set of articles.
"""

import dataclasses
from pathlib import Path

import structlog
import yaml

from src.content.article_parser import ArticleParser
from src.content.models import Article
from src.rendering.templates import TemplateSet
from src.utils.exceptions import ContentLoadError

logger = structlog.get_logger(__name__)

ARTICLE_EXTENSION = ".article"


class ContentLoader:
    """Load every article under a content root.

    Articles are returned in discovery order: a depth-first walk with
    directory entries in lexical order.

    Example:
        >>> loader = ContentLoader(Path("content"), templates, base_url="https://example.com")
        >>> articles = loader.load_all()
    """

    def __init__(
        self,
        content_path: str | Path,
        templates: TemplateSet,
        base_url: str,
        base_path: str = "",
        parser: ArticleParser | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            content_path: Directory holding the .article files
            templates: Templates used to render article bodies
            base_url: Absolute base URL for permalinks (no trailing slash)
            base_path: URL path prefix (no trailing slash)
            parser: Article parser (defaults to a new ArticleParser)
        """
        self.content_path = Path(content_path)
        self.templates = templates
        self.base_url = base_url
        self.base_path = base_path
        self.parser = parser or ArticleParser()
        self.logger = logger.bind(component="content_loader")

    def load_all(self) -> list[Article]:
        """Load, parse and render all articles.

        Returns:
            Articles in discovery order, with html and permalink set

        Raises:
            ContentLoadError: If the root cannot be walked or any file fails to
                read or parse
            RenderError: If an article body fails to render
        """
        if not self.content_path.exists():
            raise ContentLoadError(f"Content directory not found: {self.content_path}")
        if not self.content_path.is_dir():
            raise ContentLoadError(f"Content path is not a directory: {self.content_path}")

        self.logger.info("loading_articles", content_path=str(self.content_path))

        try:
            files = sorted(self.content_path.rglob(f"*{ARTICLE_EXTENSION}"))
        except OSError as e:
            raise ContentLoadError(f"Failed to walk {self.content_path}: {e}") from e

        articles = [self.load_file(file_path) for file_path in files if file_path.is_file()]

        self.logger.info("loading_complete", total_loaded=len(articles))
        return articles

    def load_file(self, file_path: Path) -> Article:
        """Load a single article file.

        Args:
            file_path: Path to an .article file under the content root

        Returns:
            Article with html and permalink set

        Raises:
            ContentLoadError: If the file cannot be read or parsed
            RenderError: If the body fails to render
        """
        slug = self.article_slug(file_path)

        try:
            content = file_path.read_text(encoding="utf-8")
            article = self.parser.parse(content, self.base_path + slug)
        except (OSError, yaml.YAMLError, ValueError) as e:
            self.logger.error(
                "file_load_error",
                file_path=str(file_path),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ContentLoadError(f"Failed to load {file_path}: {e}") from e

        html = self.templates.render_body(article)
        self.logger.debug("article_loaded", path=article.path)
        return dataclasses.replace(article, html=html, permalink=self.base_url + slug)

    def article_slug(self, file_path: Path) -> str:
        """Return the URL path of an article relative to the base path.

        >>> loader.article_slug(Path("content/2013/go.article"))
        '/2013/go'
        """
        relative = file_path.relative_to(self.content_path).with_suffix("")
        return "/" + relative.as_posix()
