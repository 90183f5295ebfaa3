from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Sequence

from .exceptions import ConfigurationError

DEFAULT_BASE_URL: Final[str] = "https://example.com"
"""Site base used as crawl seed when no base URL is configured."""

DEFAULT_MAX_DEPTH: Final[int] = 3
DEFAULT_MAX_PAGES: Final[int] = 100
DEFAULT_REQUEST_DELAY_SECONDS: Final[float] = 1.0
"""Fixed politeness delay applied before every fetch."""

DEFAULT_EXCLUDE_PATTERNS: Final[Sequence[str]] = (
    r"\.pdf$",
    r"\.zip$",
    r"\.jpg$",
    r"\.png$",
    r"\.gif$",
)
"""Binary resources that are never fetched."""

DEFAULT_USER_AGENT: Final[str] = "Mozilla/5.0 (sitekb KnowledgeCrawler/1.0)"

DEFAULT_SEARCH_LIMIT: Final[int] = 5
DEFAULT_DESCRIPTION_LENGTH: Final[int] = 200
"""Number of content characters kept in a product description."""

DEFAULT_STORAGE_KEY: Final[str] = "sitekb_knowledge_base"
DEFAULT_STORAGE_DIR: Final[Path] = Path.home() / ".sitekb"


@dataclass(frozen=True)
class KnowledgeBaseSettings:
    """Runtime settings for a knowledge base instance.

    Attributes:
        base_url: Site base; crawl seed and same-domain reference.
        storage_dir: Root directory of the file-backed key-value store.
        storage_key: Key under which the entry snapshot is persisted.
    """

    base_url: str = DEFAULT_BASE_URL
    storage_dir: Path = DEFAULT_STORAGE_DIR
    storage_key: str = DEFAULT_STORAGE_KEY


def load_settings() -> KnowledgeBaseSettings:
    """Load settings from ``SITEKB_*`` environment variables.

    Raises:
        ConfigurationError: If the base URL is not an http(s) URL or the
            storage key is empty.
    """
    base_url = os.getenv("SITEKB_BASE_URL", DEFAULT_BASE_URL).strip()
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            "SITEKB_BASE_URL must be an http(s) URL", {"base_url": base_url}
        )

    storage_dir = os.getenv("SITEKB_STORAGE_DIR")
    storage_key = os.getenv("SITEKB_STORAGE_KEY", DEFAULT_STORAGE_KEY).strip()
    if not storage_key:
        raise ConfigurationError("SITEKB_STORAGE_KEY must not be empty")

    return KnowledgeBaseSettings(
        base_url=base_url,
        storage_dir=Path(storage_dir).expanduser()
        if storage_dir
        else DEFAULT_STORAGE_DIR,
        storage_key=storage_key,
    )
