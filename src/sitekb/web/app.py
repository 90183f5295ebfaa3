"""FastAPI application serving the site knowledge base."""

import logging
from typing import Optional

from fastapi import FastAPI

from sitekb.core.config import KnowledgeBaseSettings, load_settings
from sitekb.knowledge.storage import FileKeyValueStore
from sitekb.knowledge.store import KnowledgeBase

from .api.knowledge import KnowledgeBaseRouter

logger = logging.getLogger(__name__)


def create_knowledge_base(settings: KnowledgeBaseSettings) -> KnowledgeBase:
    """Create the shared knowledge base and warm it from the last snapshot."""
    knowledge_base = KnowledgeBase(
        settings.base_url,
        storage=FileKeyValueStore(settings.storage_dir),
        storage_key=settings.storage_key,
    )
    if knowledge_base.load_from_storage():
        logger.info(f"Serving {len(knowledge_base.get_entries())} cached entries")
    else:
        logger.info("No usable snapshot; knowledge base starts empty")
    return knowledge_base


def create_app(
    settings: Optional[KnowledgeBaseSettings] = None,
    knowledge_base: Optional[KnowledgeBase] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Runtime settings (loaded from the environment if omitted)
        knowledge_base: Knowledge base to serve (created from settings if omitted)
    """
    if knowledge_base is None:
        knowledge_base = create_knowledge_base(settings or load_settings())

    app = FastAPI(title="sitekb", description="Website knowledge base service")
    app.state.knowledge_base = knowledge_base

    knowledge_router = KnowledgeBaseRouter(lambda: app.state.knowledge_base)
    app.include_router(knowledge_router.router)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app
