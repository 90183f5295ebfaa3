"""Knowledge store for a single organization's website.

``KnowledgeBase`` owns the crawled entries, rebuilds them through the site
crawler, answers keyword queries and projects category views. Snapshots
persist the full entry list under one key and are never merged with a
live build.
"""

import json
import logging
from typing import Callable, List, Optional, TypeVar

from pydantic import ValidationError

from ..core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_DESCRIPTION_LENGTH,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_STORAGE_KEY,
)
from ..core.exceptions import BuildInProgressError, StorageError
from ..core.schemas import (
    Client,
    CrawlOptions,
    Entry,
    KnowledgeBaseStats,
    Product,
    Supplier,
)
from ..crawler.content_extractor import PageClassifier
from ..crawler.crawler import CrawlSession, SiteCrawler
from ..retrieval.search_engine import search_entries
from .storage import InMemoryKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCTS_CATEGORY = "products"
CLIENTS_CATEGORY = "clients"
SUPPLIERS_CATEGORY = "suppliers"


class KnowledgeBase:
    """Searchable knowledge base built by crawling one website.

    At most one build runs per instance; a second concurrent ``build`` raises
    ``BuildInProgressError``. Reads are safe with each other but observe a
    partially built store while a build is running.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        storage: Optional[KeyValueStore] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        classifier: Optional[PageClassifier] = None,
    ) -> None:
        """Initialize knowledge base.

        Args:
            base_url: Site base URL; crawl seed and same-domain reference
            storage: Snapshot backend (in-memory when omitted)
            storage_key: Key under which snapshots are stored
            classifier: Page classifier passed to the crawler
        """
        self.base_url = base_url
        self.storage = storage if storage is not None else InMemoryKeyValueStore()
        self.storage_key = storage_key
        self.classifier = classifier

        self._session = CrawlSession()
        self._entries: List[Entry] = self._session.entries
        self._building = False

    @property
    def is_building(self) -> bool:
        return self._building

    @property
    def last_session(self) -> CrawlSession:
        """State of the most recent build or snapshot load.

        A loaded snapshot carries entries only; visited URLs and outcomes
        stay empty.
        """
        return self._session

    async def build(
        self,
        options: Optional[CrawlOptions] = None,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> None:
        """Rebuild the knowledge base by crawling the site.

        Existing entries and the visited set are discarded first.

        Args:
            options: Crawl options (defaults apply when omitted)
            progress_callback: Optional callback (message, visited, max_pages)

        Raises:
            BuildInProgressError: If a build is already running
        """
        if self._building:
            raise BuildInProgressError(
                "A knowledge base build is already running",
                {"base_url": self.base_url},
            )

        self._building = True
        try:
            session = CrawlSession()
            self._session = session
            self._entries = session.entries

            crawler = SiteCrawler(
                self.base_url,
                options,
                classifier=self.classifier,
                session=session,
                progress_callback=progress_callback,
            )
            await crawler.crawl()
        finally:
            self._building = False

        logger.info(f"Knowledge base built with {len(self._entries)} entries")

    def get_entries(self) -> List[Entry]:
        """Return all entries in crawl order."""
        return list(self._entries)

    def get_products(self) -> List[Product]:
        return self._project(
            PRODUCTS_CATEGORY,
            lambda entry: Product(
                id=entry.id,
                name=entry.title,
                category=entry.category,
                description=entry.content[:DEFAULT_DESCRIPTION_LENGTH],
            ),
        )

    def get_clients(self) -> List[Client]:
        return self._project(
            CLIENTS_CATEGORY,
            lambda entry: Client(
                id=entry.id,
                name=entry.title,
                industry=entry.tags[0] if entry.tags else None,
            ),
        )

    def get_suppliers(self) -> List[Supplier]:
        return self._project(
            SUPPLIERS_CATEGORY,
            lambda entry: Supplier(
                id=entry.id,
                name=entry.title,
                category=entry.tags[0] if entry.tags else None,
            ),
        )

    def get_stats(self) -> KnowledgeBaseStats:
        return KnowledgeBaseStats(
            total_entries=len(self._entries),
            product_count=len(self.get_products()),
            client_count=len(self.get_clients()),
            supplier_count=len(self.get_suppliers()),
        )

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Entry]:
        """Rank stored entries against a free-text query.

        Returns an empty list for a blank query or an empty store.
        """
        return search_entries(self._entries, query, limit)

    def save_to_storage(self) -> bool:
        """Persist all entries as one JSON snapshot.

        Returns:
            True on success, False if the backend failed
        """
        data = json.dumps(
            [entry.model_dump(mode="json") for entry in self._entries],
            ensure_ascii=False,
        )
        try:
            self.storage.set(self.storage_key, data)
        except StorageError as e:
            logger.error(f"Error saving knowledge base to storage: {e}")
            return False

        logger.info(f"Knowledge base saved to storage ({len(self._entries)} entries)")
        return True

    def load_from_storage(self) -> bool:
        """Replace the entries with the stored snapshot.

        A missing snapshot and an unreadable or corrupt one both return False
        and leave the current entries untouched.

        Raises:
            BuildInProgressError: If a build is running
        """
        if self._building:
            raise BuildInProgressError(
                "Cannot load a snapshot while a build is running",
                {"base_url": self.base_url},
            )

        try:
            data = self.storage.get(self.storage_key)
            if data is None:
                logger.info(f"No stored snapshot under {self.storage_key!r}")
                return False
            raw_entries = json.loads(data)
            if not isinstance(raw_entries, list):
                raise ValueError("snapshot is not a JSON array")
            entries = [Entry.model_validate(item) for item in raw_entries]
        except (StorageError, ValidationError, ValueError) as e:
            logger.error(f"Error loading knowledge base from storage: {e}")
            return False

        self._session = CrawlSession(entries=entries)
        self._entries = self._session.entries
        logger.info(f"Loaded {len(entries)} entries from storage")
        return True

    def _project(self, category: str, project: Callable[[Entry], T]) -> List[T]:
        return [
            project(entry)
            for entry in self._entries
            if entry.category.lower() == category
        ]
