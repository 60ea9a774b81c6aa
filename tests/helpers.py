"""Helpers for building article sources in tests."""


def article_source(
    title: str,
    time: str,
    tags: list[str] | None = None,
    authors: list[str] | None = None,
    body: str = "A short paragraph.",
) -> str:
    """Return the text of an .article file."""
    lines = ["---", f"title: {title}", f"time: {time}"]
    if tags is not None:
        lines.append(f"tags: [{', '.join(tags)}]")
    if authors is not None:
        lines.append("authors:")
        lines.extend(f"  - {name}" for name in authors)
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines) + "\n"
