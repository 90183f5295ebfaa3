import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from sitekb.core.schemas import Entry
from sitekb.knowledge.storage import InMemoryKeyValueStore
from sitekb.knowledge.store import KnowledgeBase

BASE_URL = "https://example.com"
SEED_URL = "https://example.com/"

# ==========================================
# HTTP FIXTURES
# ==========================================


def _mock_response(body):
    response = MagicMock()
    if isinstance(body, int):
        response.status_code = body
        response.text = ""
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {body}", request=MagicMock(), response=response
        )
    else:
        response.status_code = 200
        response.text = body
        response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def make_page():
    """Build a small HTML page with a title, body text and links."""

    def _make(title="", body="", links=(), head_extra=""):
        anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
        title_tag = f"<title>{title}</title>" if title else ""
        return (
            f"<html><head>{title_tag}{head_extra}</head>"
            f"<body><main><p>{body}</p></main>{anchors}</body></html>"
        )

    return _make


@pytest.fixture
def mock_site():
    """Create a mock httpx.AsyncClient serving a dict of url -> page.

    Values are HTML strings, HTTP status codes (served as errors) or
    exceptions (raised by ``get``). Unknown URLs answer 404.
    """

    def _build(pages):
        def get(url, **kwargs):
            body = pages.get(url, 404)
            if isinstance(body, Exception):
                raise body
            return _mock_response(body)

        client = AsyncMock()
        client.get = AsyncMock(side_effect=get)
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        return client

    return _build


def fetched_urls(client):
    return [call.args[0] for call in client.get.call_args_list]


@pytest.fixture
def fetched():
    """Return the URLs a mock client fetched, in order."""
    return fetched_urls


# ==========================================
# KNOWLEDGE BASE FIXTURES
# ==========================================


@pytest.fixture
def make_entry():
    """Build an Entry with sensible defaults."""

    def _make(title="Page", content="Some content", category="General", tags=(), url=None):
        return Entry(
            url=url or f"{BASE_URL}/{title.lower().replace(' ', '-')}",
            title=title,
            content=content,
            category=category,
            tags=list(tags),
        )

    return _make


@pytest.fixture
def knowledge_base_with():
    """Create a KnowledgeBase preloaded with entries via a stored snapshot."""

    def _build(entries):
        storage = InMemoryKeyValueStore()
        knowledge_base = KnowledgeBase(BASE_URL, storage=storage)
        storage.set(
            knowledge_base.storage_key,
            json.dumps([entry.model_dump(mode="json") for entry in entries]),
        )
        assert knowledge_base.load_from_storage() is True
        return knowledge_base

    return _build
