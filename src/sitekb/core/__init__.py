from .config import KnowledgeBaseSettings, load_settings
from .exceptions import (
    BuildInProgressError,
    ConfigurationError,
    FetchError,
    KnowledgeBaseError,
    ParseError,
    StorageError,
)
from .schemas import (
    Client,
    CrawlOptions,
    Entry,
    ExtractedPage,
    KnowledgeBaseStats,
    PageOutcome,
    Product,
    Supplier,
)

__all__ = [
    "KnowledgeBaseSettings",
    "load_settings",
    "KnowledgeBaseError",
    "FetchError",
    "ParseError",
    "StorageError",
    "BuildInProgressError",
    "ConfigurationError",
    "CrawlOptions",
    "Entry",
    "ExtractedPage",
    "PageOutcome",
    "Product",
    "Client",
    "Supplier",
    "KnowledgeBaseStats",
]
