"""Content extraction for the site crawler.

Derives title, plain-text body, category and tags from a fetched page.
The crawler depends only on the ``PageClassifier`` interface so other
strategies (structured data, boilerplate removal models) can replace the
markup heuristics implemented by ``ContentExtractor``.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from ..core.schemas import ExtractedPage

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"

CONTENT_SELECTORS = "main, .content, .main-content, article, .post-content"
CONTENT_REMOVE_SELECTORS = "script, style, nav, footer, header, .comments, .sidebar"
FALLBACK_REMOVE_SELECTORS = "script, style, noscript"
BREADCRUMB_SELECTORS = '.breadcrumbs, .breadcrumb, nav[aria-label="breadcrumb"]'
TAG_SELECTORS = ".tags a, .tag, .category a"

_WHITESPACE_RE = re.compile(r"\s+")
_BREADCRUMB_SPLIT_RE = re.compile(r"[>/]")


class PageClassifier(ABC):
    """Interface for turning a fetched page into entry fields."""

    @abstractmethod
    def classify(self, html: str, url: str) -> ExtractedPage:
        """Extract title, content, category and tags from a page.

        Args:
            html: Raw HTML content
            url: URL the page was fetched from

        Returns:
            ExtractedPage with the derived fields
        """
        pass


class ContentExtractor(PageClassifier):
    """Markup-heuristic page classifier.

    Uses semantic content containers, breadcrumb trails and meta keywords
    to describe a page.
    """

    def __init__(self, base_url: str):
        """Initialize content extractor.

        Args:
            base_url: Site base URL, stripped from page URLs when deriving
                the category from the path
        """
        self.base_url = base_url
        self._base_path = urlparse(base_url).path.rstrip("/")

    def classify(self, html: str, url: str) -> ExtractedPage:
        soup = BeautifulSoup(html, "html.parser")

        title = self.extract_title(soup)
        category = self.extract_category(soup, url)
        tags = self.extract_tags(soup)
        # Content extraction removes elements, so it runs last.
        content = self.extract_content(soup)

        return ExtractedPage(title=title, content=content, category=category, tags=tags)

    def extract_title(self, soup: BeautifulSoup) -> str:
        """Return the trimmed text of the page ``<title>`` element."""
        title_tag = soup.find("title")
        if isinstance(title_tag, Tag):
            return title_tag.get_text().strip()
        return ""

    def extract_content(self, soup: BeautifulSoup) -> str:
        """Extract normalized plain text from the main content area.

        The first semantic container in document order wins; navigation,
        comments and other chrome inside it are dropped. Without a container
        the whole document text is used.

        Args:
            soup: Parsed page (modified in place)

        Returns:
            Text with whitespace runs collapsed to single spaces
        """
        container = soup.select_one(CONTENT_SELECTORS)
        if container is not None:
            self._remove(container, CONTENT_REMOVE_SELECTORS)
            return _collapse_whitespace(container.get_text(separator=" "))

        self._remove(soup, FALLBACK_REMOVE_SELECTORS)
        root = soup.body if soup.body is not None else soup
        return _collapse_whitespace(root.get_text(separator=" "))

    def extract_category(self, soup: BeautifulSoup, url: str) -> str:
        """Derive the page category.

        Prefers the second breadcrumb segment, then the first URL path
        segment below the site base, then ``"General"``.
        """
        breadcrumb = self._breadcrumb_category(soup)
        if breadcrumb:
            return breadcrumb

        path = urlparse(url).path
        if self._base_path and path.startswith(self._base_path):
            path = path[len(self._base_path) :]
        segments = [segment for segment in path.split("/") if segment]
        if segments:
            return segments[0]

        return DEFAULT_CATEGORY

    def extract_tags(self, soup: BeautifulSoup) -> List[str]:
        """Collect meta keywords and tag link texts, deduplicated in order."""
        tags: List[str] = []

        meta = soup.find("meta", attrs={"name": "keywords"})
        if isinstance(meta, Tag):
            keywords = meta.get("content")
            if isinstance(keywords, str):
                tags.extend(keyword.strip() for keyword in keywords.split(","))

        tags.extend(element.get_text().strip() for element in soup.select(TAG_SELECTORS))

        return list(dict.fromkeys(tag for tag in tags if tag))

    def _breadcrumb_category(self, soup: BeautifulSoup) -> Optional[str]:
        trail = soup.select_one(BREADCRUMB_SELECTORS)
        if trail is None:
            return None

        # Items without literal separators still split on the joined "/".
        text = trail.get_text(separator="/")
        parts = [part.strip() for part in _BREADCRUMB_SPLIT_RE.split(text)]
        parts = [part for part in parts if part]
        if len(parts) > 1:
            return parts[1]
        return None

    @staticmethod
    def _remove(root: Tag, selectors: str) -> None:
        for element in root.select(selectors):
            # Nested matches are already gone with their ancestor.
            if not element.decomposed:
                element.decompose()


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()
