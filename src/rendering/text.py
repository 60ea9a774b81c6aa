"""Text helpers shared by templates and feeds."""

import re

import markdown
from markupsafe import Markup, escape

from src.content.models import Article, Author, Text

_PARAGRAPH_RE = re.compile(r"^<p>(.*)</p>$", re.DOTALL)
# Line starts that markdown would read as a heading, list, rule or numbered item
_BLOCK_MARKER_RE = re.compile(r"^(?:[#+-]|[*_](?=\s|[*_\s]*$))")
_ORDERED_MARKER_RE = re.compile(r"^(\d+)\.(?=\s|$)")


def markdown_html(source: str) -> Markup:
    """Render a block of markdown to HTML."""
    return Markup(markdown.markdown(source))


def inline_html(line: str) -> str:
    """Render inline markdown styling (emphasis, code, links) in a single line.

    The line is HTML-escaped first and block syntax is disabled, so the
    result is always inline HTML that can be embedded inside an existing
    element: list markers, headings and quotes stay literal text.
    """
    text = str(escape(line.strip()))
    text = _BLOCK_MARKER_RE.sub(lambda match: "\\" + match.group(0), text)
    text = _ORDERED_MARKER_RE.sub(r"\1\\.", text)

    rendered = markdown.markdown(text).strip()
    match = _PARAGRAPH_RE.match(rendered)
    return match.group(1) if match else rendered


def authors_line(authors: tuple[Author, ...] | list[Author]) -> str:
    """Join author names for display.

    >>> authors_line([Author("Ann"), Author("Bo"), Author("Cy")])
    'Ann, Bo and Cy'
    """
    names = [author.name for author in authors]
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " and " + names[-1]


def sectioned(article: Article) -> bool:
    """Report whether an article has more than one section."""
    return len(article.sections) > 1


def summary(article: Article) -> str:
    """Return the first plain paragraph of the article's first section.

    Preformatted paragraphs, code and images are skipped. Each line is
    rendered to inline HTML and terminated with a newline. Only the first
    section is searched; an article whose first section has no plain
    paragraph has an empty summary.
    """
    if not article.sections:
        return ""

    for element in article.sections[0].elements:
        if not isinstance(element, Text) or element.pre:
            continue
        return "".join(inline_html(line) + "\n" for line in element.lines)

    return ""
