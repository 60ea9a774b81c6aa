"""Article content: models, parsing and the cross-linked corpus."""

from src.content.article_parser import ArticleParser
from src.content.corpus import Corpus, build_corpus
from src.content.models import Article, Author, Code, Image, Section, Text

__all__ = [
    "Article",
    "ArticleParser",
    "Author",
    "Code",
    "Corpus",
    "Image",
    "Section",
    "Text",
    "build_corpus",
]
