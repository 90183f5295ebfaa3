"""Link extraction from HTML for the site crawler."""

import logging
from typing import List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from .url_filter import normalize_url

logger = logging.getLogger(__name__)

_SKIPPED_PREFIXES = ("#", "javascript:", "mailto:", "tel:")


class LinkExtractor:
    """Extract same-domain links from HTML pages."""

    def __init__(self, base_url: str):
        """Initialize link extractor.

        Args:
            base_url: Site base URL; root-relative links resolve against it
                and only links on its hostname are kept
        """
        self.base_url = base_url
        self.base_hostname = urlparse(base_url).hostname

    def extract_links(self, html: str, current_url: str) -> List[str]:
        """Extract unique same-domain links from HTML.

        Args:
            html: HTML content
            current_url: URL of the current page (for resolving relative links)

        Returns:
            Normalized absolute URLs in document order, without duplicates
        """
        links: List[str] = []
        seen = set()

        try:
            soup = BeautifulSoup(html, "html.parser")

            for anchor in soup.find_all("a", href=True):
                href = anchor["href"].strip()

                if not href or href.lower().startswith(_SKIPPED_PREFIXES):
                    continue

                absolute_url = self._make_absolute(href, current_url)
                if not absolute_url or absolute_url in seen:
                    continue

                if urlparse(absolute_url).hostname != self.base_hostname:
                    continue

                seen.add(absolute_url)
                links.append(absolute_url)

            logger.debug(f"Extracted {len(links)} links from {current_url}")
            return links

        except Exception as e:
            logger.error(f"Failed to extract links from {current_url}: {e}")
            return links

    def _make_absolute(self, href: str, current_url: str) -> Optional[str]:
        """Resolve a link target to a normalized absolute URL.

        Root-relative paths resolve against the site base, other relative
        paths against the page's own URL.

        Returns:
            Absolute URL, or None if invalid
        """
        if href.startswith(("http://", "https://")):
            return normalize_url(href)
        if href.startswith("/"):
            return normalize_url(href, self.base_url)
        try:
            return normalize_url(urljoin(current_url, href))
        except ValueError as e:
            logger.warning(f"Failed to make URL absolute: {href} - {e}")
            return None
