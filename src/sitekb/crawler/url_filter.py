"""URL filtering for the site crawler.

Provides the include/exclude pattern gate and URL normalization.
"""

import logging
import re
from typing import Optional, Sequence
from urllib.parse import urljoin, urlparse, urlunparse

logger = logging.getLogger(__name__)


def same_domain_pattern(base_url: str) -> str:
    """Build the default include pattern for the site base domain.

    Args:
        base_url: Site base URL

    Returns:
        Regex matching http(s) URLs on the base host
    """
    host = urlparse(base_url).netloc.lower()
    return rf"^https?://{re.escape(host)}(?:[/?#:]|$)"


def normalize_url(url: str, base_url: Optional[str] = None) -> Optional[str]:
    """Normalize URL by resolving it and removing the fragment.

    Scheme and host are lower-cased and an empty path becomes ``/`` so that
    ``https://Example.com`` and ``https://example.com/#top`` are one URL.

    Args:
        url: URL to normalize
        base_url: Base URL for resolving relative URLs

    Returns:
        Normalized absolute URL, or None if invalid
    """
    try:
        if base_url:
            url = urljoin(base_url, url)
        elif not url.startswith(("http://", "https://")):
            return None

        parsed = urlparse(url)

        # Only allow http/https
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return None

        return urlunparse(
            (
                parsed.scheme.lower(),
                parsed.netloc.lower(),
                parsed.path or "/",
                parsed.params,
                parsed.query,
                "",  # Remove fragment
            )
        )

    except ValueError as e:
        logger.warning(f"Failed to normalize URL {url}: {e}")
        return None


class URLFilter:
    """Include/exclude pattern gate deciding whether a URL is fetched.

    Patterns are compiled once per build. A URL passes when it matches at
    least one include pattern and no exclude pattern.
    """

    def __init__(
        self,
        base_url: str,
        *,
        include_patterns: Optional[Sequence[str]] = None,
        exclude_patterns: Optional[Sequence[str]] = None,
    ):
        """Initialize URL filter.

        Args:
            base_url: Site base URL
            include_patterns: Regex patterns for allowed URLs; None allows
                the base domain only
            exclude_patterns: Regex patterns for excluded URLs
        """
        self.base_url = base_url
        if include_patterns is None:
            include_patterns = [same_domain_pattern(base_url)]
        self.include_patterns = [re.compile(p) for p in include_patterns]
        self.exclude_patterns = [re.compile(p) for p in (exclude_patterns or [])]

    def matches_patterns(self, url: str) -> bool:
        """Check if URL matches any include pattern.

        An empty include list matches nothing.
        """
        return any(pattern.search(url) for pattern in self.include_patterns)

    def is_excluded(self, url: str) -> bool:
        """Check if URL matches any exclusion pattern."""
        return any(pattern.search(url) for pattern in self.exclude_patterns)

    def should_crawl(self, url: str) -> bool:
        """Check if URL is in scope for fetching.

        Args:
            url: URL to check

        Returns:
            True if URL should be fetched, False otherwise
        """
        if not self.matches_patterns(url):
            logger.debug(f"Skipping {url}: does not match inclusion pattern")
            return False

        if self.is_excluded(url):
            logger.debug(f"Skipping {url}: matches exclusion pattern")
            return False

        return True
