"""Page and article body rendering with Jinja2 templates."""

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import jinja2
import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from src.content.models import Article
from src.rendering.text import authors_line, inline_html, markdown_html, sectioned
from src.utils.exceptions import RenderError

logger = structlog.get_logger(__name__)

# Page views; each extends ROOT_TEMPLATE
VIEW_NAMES = ("home", "index", "article", "page")
ROOT_TEMPLATE = "root.html"
DOC_TEMPLATE = "doc.html"


class TemplateSet:
    """Parsed templates for article bodies and page views.

    All templates are loaded and compiled up front so that a missing or
    malformed template fails the server load rather than a request.

    Attributes:
        template_path: Directory the templates were loaded from
        environment: Jinja2 environment with the article helpers registered
    """

    def __init__(self, template_path: str | Path) -> None:
        """Load and compile every template.

        Args:
            template_path: Directory holding root.html, doc.html and one file per view

        Raises:
            RenderError: If the directory or a template is missing, or a
                template does not compile
        """
        self.template_path = Path(template_path)
        self.logger = logger.bind(component="templates")

        if not self.template_path.is_dir():
            raise RenderError(f"Template directory not found: {self.template_path}")

        self.environment = Environment(
            loader=FileSystemLoader(self.template_path),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.environment.filters["authors"] = authors_line
        self.environment.filters["markdown"] = markdown_html
        self.environment.filters["inline"] = lambda line: Markup(inline_html(line))
        self.environment.globals["sectioned"] = sectioned

        names = (ROOT_TEMPLATE, DOC_TEMPLATE, *(f"{view}.html" for view in VIEW_NAMES))
        self._templates: dict[str, jinja2.Template] = {}
        for name in names:
            try:
                self._templates[name] = self.environment.get_template(name)
            except jinja2.TemplateError as e:
                raise RenderError(f"Failed to load template {name}: {e}") from e

        self.logger.info("templates_loaded", template_path=str(self.template_path), count=len(names))

    def render_body(self, article: Article) -> str:
        """Render an article's sections to an HTML fragment.

        Args:
            article: Parsed article

        Returns:
            Rendered HTML body

        Raises:
            RenderError: If the doc template fails
        """
        try:
            return self._templates[DOC_TEMPLATE].render(article=article)
        except jinja2.TemplateError as e:
            raise RenderError(f"Failed to render {article.path}: {e}") from e

    def stream_page(self, view: str, context: Mapping[str, Any]) -> Iterator[str]:
        """Render a page view incrementally.

        Chunks are yielded as the template produces them. A failure part way
        through is logged and ends the stream, leaving the client with the
        output produced so far.

        Args:
            view: One of VIEW_NAMES
            context: Template variables

        Yields:
            Chunks of the rendered page
        """
        template = self._templates[f"{view}.html"]
        try:
            yield from template.generate(**context)
        except Exception as e:
            self.logger.error(
                "page_render_failed",
                view=view,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
