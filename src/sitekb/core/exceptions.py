"""Core exceptions for the site knowledge base.

All exceptions share the ``KnowledgeBaseError`` root so callers can catch
everything raised by this package with a single clause.
"""

from typing import Optional


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge base operations.

    Attributes:
        message: Human-readable error message
        details: Optional additional context or metadata
    """

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional context or metadata
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class FetchError(KnowledgeBaseError):
    """Exception raised when a single page cannot be fetched.

    Covers transport failures and non-success HTTP statuses. The crawler
    recovers from it locally: the page is skipped and the build continues.
    """

    pass


class ParseError(KnowledgeBaseError):
    """Exception raised when a page URL or its markup cannot be processed."""

    pass


class StorageError(KnowledgeBaseError):
    """Exception raised when the key-value backend fails to read or write."""

    pass


class BuildInProgressError(KnowledgeBaseError):
    """Exception raised when a knowledge base is rebuilt while a build runs.

    Only one build may run per ``KnowledgeBase`` instance at a time.
    """

    pass


class ConfigurationError(KnowledgeBaseError):
    """Exception raised when configuration is invalid or missing."""

    pass
