"""Core site crawler implementation."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

import httpx

from ..core.exceptions import FetchError, ParseError
from ..core.schemas import CrawlOptions, Entry, ExtractedPage, PageOutcome
from .content_extractor import ContentExtractor, PageClassifier
from .link_extractor import LinkExtractor
from .url_filter import URLFilter, normalize_url

logger = logging.getLogger(__name__)


@dataclass
class CrawlSession:
    """Mutable state of one build, owned by a single crawler.

    A URL enters ``visited_urls`` the moment it is taken from the work-list,
    before filtering or fetching, so filtered and failed URLs count against
    the page quota too.
    """

    visited_urls: Set[str] = field(default_factory=set)
    entries: List[Entry] = field(default_factory=list)
    outcomes: Dict[str, PageOutcome] = field(default_factory=dict)
    failed_urls: Dict[str, str] = field(default_factory=dict)
    total_links_found: int = 0


class SiteCrawler:
    """Sequential depth-first crawler for a single site.

    Pages are fetched one at a time; each page's links are visited, with
    their own descendants, before the page's next sibling link. Fetch and
    parse failures only affect the page they occur on.

    Requests carry no timeout, so an unresponsive server stalls the build
    until the process is stopped.
    """

    def __init__(
        self,
        base_url: str,
        options: Optional[CrawlOptions] = None,
        *,
        classifier: Optional[PageClassifier] = None,
        session: Optional[CrawlSession] = None,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ):
        """Initialize site crawler.

        Args:
            base_url: Site base URL, used as the crawl seed
            options: Crawl options (defaults apply when omitted)
            classifier: Page classifier (defaults to ContentExtractor)
            session: Session receiving the crawl state (a fresh one if omitted)
            progress_callback: Optional callback for progress updates
                Args: (message, visited, max_pages)
        """
        self.base_url = base_url
        self.options = options or CrawlOptions()
        self.progress_callback = progress_callback

        # Initialize components
        self.url_filter = URLFilter(
            base_url,
            include_patterns=self.options.include_patterns,
            exclude_patterns=self.options.exclude_patterns,
        )
        self.classifier = classifier or ContentExtractor(base_url)
        self.link_extractor = LinkExtractor(base_url)

        self.session = session if session is not None else CrawlSession()
        self.start_time: Optional[float] = None

    async def crawl(self) -> CrawlSession:
        """Crawl the site starting from the base URL.

        Returns:
            The populated crawl session
        """
        self.start_time = time.time()

        seed = normalize_url(self.base_url)
        if not seed:
            logger.error(f"Cannot crawl invalid base URL {self.base_url}")
            return self.session

        logger.info(f"Starting crawl from {seed}")

        # Work-list of (url, depth); the top of the stack is visited next.
        stack: List[Tuple[str, int]] = [(seed, 0)]

        headers = {"User-Agent": self.options.user_agent}
        async with httpx.AsyncClient(
            headers=headers,
            timeout=None,
            follow_redirects=True,
        ) as client:
            while stack:
                if len(self.session.visited_urls) >= self.options.max_pages:
                    logger.info(f"Page quota of {self.options.max_pages} reached")
                    break

                url, depth = stack.pop()
                links = await self._visit(client, url, depth)
                stack.extend((link, depth + 1) for link in reversed(links))

        elapsed = time.time() - self.start_time
        logger.info(
            f"Crawl completed: {len(self.session.visited_urls)} visited, "
            f"{len(self.session.entries)} entries, "
            f"{len(self.session.failed_urls)} failed, {elapsed:.2f}s"
        )

        return self.session

    async def _visit(self, client: httpx.AsyncClient, url: str, depth: int) -> List[str]:
        """Visit a single URL.

        Args:
            client: HTTP client
            url: URL to visit
            depth: Link depth of the URL

        Returns:
            Links to visit next, in document order
        """
        session = self.session
        if url in session.visited_urls:
            return []
        if depth > self.options.max_depth:
            logger.debug(f"Skipping {url}: exceeds max depth {self.options.max_depth}")
            return []
        if len(session.visited_urls) >= self.options.max_pages:
            return []

        session.visited_urls.add(url)

        try:
            if not self.url_filter.should_crawl(url):
                session.outcomes[url] = PageOutcome.FILTERED
                return []

            await asyncio.sleep(self.options.request_delay)

            try:
                html = await self._fetch(client, url)
                page = self._classify(html, url)
            except (FetchError, ParseError) as e:
                logger.error(f"Failed to crawl {url}: {e.message}")
                session.failed_urls[url] = e.message
                session.outcomes[url] = PageOutcome.FETCH_FAILED
                return []

            session.outcomes[url] = PageOutcome.EXTRACTED
            if page.title and page.content:
                session.entries.append(
                    Entry(
                        url=url,
                        title=page.title,
                        content=page.content,
                        category=page.category,
                        tags=page.tags,
                    )
                )
                logger.info(
                    f"Extracted {url} ({len(page.content)} chars, "
                    f"category {page.category!r})"
                )
            else:
                logger.debug(f"No entry for {url}: empty title or content")

            if depth >= self.options.max_depth:
                return []

            links = self.link_extractor.extract_links(html, url)
            session.total_links_found += len(links)
            return links

        finally:
            if self.progress_callback:
                self.progress_callback(
                    f"Visited {len(session.visited_urls)} pages",
                    len(session.visited_urls),
                    self.options.max_pages,
                )

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> str:
        """Fetch raw markup for a URL.

        Raises:
            FetchError: On transport failure or non-success status
            ParseError: If the URL cannot be turned into a request
        """
        logger.debug(f"Fetching {url}")
        try:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"HTTP {e.response.status_code}", {"url": url}
            ) from e
        except httpx.RequestError as e:
            raise FetchError(f"Request error: {e}", {"url": url}) from e
        except httpx.InvalidURL as e:
            raise ParseError(f"Invalid URL: {e}", {"url": url}) from e

    def _classify(self, html: str, url: str) -> ExtractedPage:
        """Run the page classifier.

        Raises:
            ParseError: If the classifier cannot process the markup
        """
        try:
            return self.classifier.classify(html, url)
        except Exception as e:
            raise ParseError(f"Failed to parse page: {e}", {"url": url}) from e

    def get_statistics(self) -> dict:
        """Get crawl statistics.

        Returns:
            Dictionary with statistics
        """
        outcomes = list(self.session.outcomes.values())
        return {
            "total_links_found": self.session.total_links_found,
            "visited_urls": len(self.session.visited_urls),
            "entries": len(self.session.entries),
            "failed_pages": len(self.session.failed_urls),
            "filtered_pages": outcomes.count(PageOutcome.FILTERED),
        }
