"""Custom exception hierarchy for the application."""


class ArticleServerError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, is_retryable: bool = False) -> None:
        """Initialize exception.

        Args:
            message: Error message
            is_retryable: Whether the operation can be retried
        """
        super().__init__(message)
        self.message = message
        self.is_retryable = is_retryable


class ConfigurationError(ArticleServerError):
    """Configuration or environment setup error."""

    pass


class ContentLoadError(ArticleServerError):
    """Reading, walking or parsing the content directory failed."""

    pass


class RenderError(ArticleServerError):
    """Template parsing or article body rendering failed during load."""

    pass


class FeedError(ArticleServerError):
    """Feed serialization error."""

    pass
