"""Parser for .article files.

An article file is YAML frontmatter followed by a markdown body:

    ---
    title: Go Concurrency Patterns
    time: 2013-03-01T11:00:00Z
    tags: [concurrency, talk]
    authors:
      - name: Ann Example
        email: ann@example.com
    ---

    Intro paragraph.

    ## First section

    Body text, fenced code and images.

The body is split into sections on ``## `` headings. Paragraphs become
``Text`` elements (indented paragraphs are preformatted), fenced blocks become
``Code`` elements and a paragraph holding a single image becomes an ``Image``.
"""

import re
import textwrap
from datetime import UTC, date, datetime
from typing import Any

import structlog
import yaml

from src.content.models import Article, Author, Code, Element, Image, Section, Text

logger = structlog.get_logger(__name__)

SECTION_HEADING_RE = re.compile(r"^##\s+(.+?)\s*#*\s*$")
FENCE_RE = re.compile(r"^(```+|~~~+)\s*([\w+-]*)\s*$")
IMAGE_RE = re.compile(r"^!\[([^\]]*)\]\(\s*(\S+?)\s*\)$")


class ArticleParser:
    """Parse article source text into ``Article`` objects.

    Example:
        >>> parser = ArticleParser()
        >>> article = parser.parse(text, "/2013/concurrency")
        >>> article.title
        'Go Concurrency Patterns'
    """

    REQUIRED_FIELDS = ("title", "time")

    def __init__(self) -> None:
        """Initialize the parser."""
        self.logger = logger.bind(component="article_parser")

    def parse(self, content: str, path: str) -> Article:
        """Parse a single article.

        Args:
            content: Full file content including frontmatter
            path: Article path (relative to the server root)

        Returns:
            Article with content attributes populated and no derived fields

        Raises:
            ValueError: If the frontmatter or body is invalid
            yaml.YAMLError: If the frontmatter is not valid YAML
        """
        frontmatter, body = self._parse_frontmatter(content)
        self._validate_frontmatter(frontmatter)

        article = Article(
            path=path,
            title=str(frontmatter["title"]).strip(),
            time=self._parse_time(frontmatter["time"]),
            tags=self._parse_tags(frontmatter.get("tags")),
            authors=self._parse_authors(frontmatter.get("authors")),
            sections=self._parse_sections(body),
        )
        self.logger.debug(
            "article_parsed",
            path=path,
            tags=list(article.tags),
            sections=len(article.sections),
        )
        return article

    def _parse_frontmatter(self, content: str) -> tuple[dict[str, Any], str]:
        """Split YAML frontmatter from the markdown body.

        Args:
            content: Full file content including frontmatter

        Returns:
            Tuple of (frontmatter_dict, body_without_frontmatter)

        Raises:
            ValueError: If frontmatter is missing or invalid
        """
        lines = content.split("\n")

        # Opening delimiter (CRLF tolerant)
        if not lines or lines[0].rstrip("\r") != "---":
            raise ValueError("Missing YAML frontmatter (file must start with '---')")

        closing_index = None
        for i in range(1, len(lines)):
            if lines[i].rstrip("\r") == "---":
                closing_index = i
                break

        if closing_index is None:
            raise ValueError("Invalid YAML frontmatter (missing closing '---')")

        frontmatter_str = "\n".join(line.rstrip("\r") for line in lines[1:closing_index])
        frontmatter = yaml.safe_load(frontmatter_str)

        if not isinstance(frontmatter, dict):
            raise ValueError("YAML frontmatter must be a dictionary")

        body = "\n".join(line.rstrip("\r") for line in lines[closing_index + 1 :]).strip("\n")
        return frontmatter, body

    def _validate_frontmatter(self, frontmatter: dict[str, Any]) -> None:
        """Check that required frontmatter fields are present and non-empty.

        Raises:
            ValueError: If a required field is missing or empty
        """
        for name in self.REQUIRED_FIELDS:
            if name not in frontmatter:
                raise ValueError(f"Missing frontmatter field: {name}")
            if frontmatter[name] is None or str(frontmatter[name]).strip() == "":
                raise ValueError(f"Empty frontmatter field: {name}")

    @staticmethod
    def _parse_time(value: Any) -> datetime:
        """Convert a frontmatter time value into an aware datetime.

        YAML already turns unquoted timestamps into ``datetime``/``date``
        objects; quoted values arrive as ISO 8601 strings. Naive values are
        taken to be UTC.
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip())
        else:
            raise ValueError(f"Invalid publish time: {value!r}")

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    @staticmethod
    def _parse_tags(value: Any) -> tuple[str, ...]:
        """Accept a YAML list or a comma-separated string."""
        if value is None:
            return ()
        if isinstance(value, str):
            items = value.split(",")
        elif isinstance(value, list):
            items = [str(item) for item in value]
        else:
            raise ValueError(f"Invalid tags: {value!r}")
        return tuple(tag.strip() for tag in items if tag.strip())

    @staticmethod
    def _parse_authors(value: Any) -> tuple[Author, ...]:
        """Accept a single name, a list of names, or a list of mappings."""
        if value is None:
            return ()
        if isinstance(value, str | dict):
            value = [value]
        if not isinstance(value, list):
            raise ValueError(f"Invalid authors: {value!r}")

        authors = []
        for item in value:
            if isinstance(item, str):
                authors.append(Author(name=item.strip()))
            elif isinstance(item, dict) and item.get("name"):
                authors.append(
                    Author(
                        name=str(item["name"]).strip(),
                        email=item.get("email"),
                        url=item.get("url"),
                    )
                )
            else:
                raise ValueError(f"Invalid author entry: {item!r}")
        return tuple(authors)

    def _parse_sections(self, body: str) -> tuple[Section, ...]:
        """Split the markdown body into sections of elements.

        Raises:
            ValueError: If a code fence is never closed
        """
        sections: list[Section] = []
        title = ""
        elements: list[Element] = []
        paragraph: list[str] = []
        fence_marker: str | None = None
        fence_language = ""
        fence_lines: list[str] = []

        for line in body.split("\n"):
            if fence_marker is not None:
                if line.strip() == fence_marker:
                    elements.append(Code(text="\n".join(fence_lines), language=fence_language))
                    fence_marker = None
                    fence_lines = []
                else:
                    fence_lines.append(line)
                continue

            fence = FENCE_RE.match(line)
            heading = SECTION_HEADING_RE.match(line)

            if fence:
                self._flush_paragraph(paragraph, elements)
                fence_marker, fence_language = fence.group(1), fence.group(2)
            elif heading:
                self._flush_paragraph(paragraph, elements)
                if title or elements:
                    sections.append(Section(title=title, elements=tuple(elements)))
                title = heading.group(1)
                elements = []
            elif not line.strip():
                self._flush_paragraph(paragraph, elements)
            else:
                paragraph.append(line)

        if fence_marker is not None:
            raise ValueError(f"Unterminated code fence ({fence_marker})")

        self._flush_paragraph(paragraph, elements)
        if title or elements:
            sections.append(Section(title=title, elements=tuple(elements)))

        return tuple(sections)

    @staticmethod
    def _flush_paragraph(paragraph: list[str], elements: list[Element]) -> None:
        """Turn the buffered paragraph lines into an element and clear the buffer."""
        if not paragraph:
            return

        image = IMAGE_RE.match(paragraph[0].strip()) if len(paragraph) == 1 else None
        if image:
            elements.append(Image(url=image.group(2), alt=image.group(1)))
        elif all(line.startswith(("    ", "\t")) for line in paragraph):
            dedented = textwrap.dedent("\n".join(paragraph))
            elements.append(Text(lines=tuple(dedented.split("\n")), pre=True))
        else:
            elements.append(Text(lines=tuple(paragraph)))

        paragraph.clear()
