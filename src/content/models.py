"""Data models for articles and their body content."""

from dataclasses import dataclass
from datetime import UTC, datetime

# Publish time used when a corpus is empty
ZERO_TIME = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class Text:
    """A paragraph of text.

    Attributes:
        lines: Source lines of the paragraph (inline markdown)
        pre: Whether the paragraph is preformatted (indented block)
    """

    lines: tuple[str, ...]
    pre: bool = False


@dataclass(frozen=True)
class Code:
    """A fenced code block."""

    text: str
    language: str = ""


@dataclass(frozen=True)
class Image:
    """A standalone image."""

    url: str
    alt: str = ""


Element = Text | Code | Image


@dataclass(frozen=True)
class Section:
    """A titled run of body elements.

    The first section of an article may be untitled (content before the
    first heading).
    """

    title: str
    elements: tuple[Element, ...] = ()


@dataclass(frozen=True)
class Author:
    """An article author."""

    name: str
    email: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Article:
    """A parsed article plus the fields derived while building the corpus.

    Derived links are stored as positions in the corpus order rather than
    references; resolve them through ``Corpus.newer``/``older``/``related``.

    Attributes:
        path: Path relative to the server root, including the base path
        title: Article title
        time: Publish time (timezone-aware)
        tags: Tags in source order
        authors: Authors in source order
        sections: Body sections
        html: Rendered HTML body
        permalink: Absolute canonical URL
        position: Index in the corpus order (None until the corpus is built)
        newer_position: Index of the next newer article, if any
        older_position: Index of the next older article, if any
        related_positions: Indexes of articles sharing a tag, newest first
    """

    path: str
    title: str
    time: datetime
    tags: tuple[str, ...] = ()
    authors: tuple[Author, ...] = ()
    sections: tuple[Section, ...] = ()
    html: str = ""
    permalink: str = ""
    position: int | None = None
    newer_position: int | None = None
    older_position: int | None = None
    related_positions: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Validate article data after initialization.

        Raises:
            ValueError: If any required field is invalid
        """
        if not self.path:
            raise ValueError("Path cannot be empty")
        if not self.title or not self.title.strip():
            raise ValueError("Title cannot be empty")
        if self.time.tzinfo is None:
            raise ValueError("Publish time must be timezone-aware")
