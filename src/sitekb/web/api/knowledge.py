from __future__ import annotations

import logging
from typing import Callable, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from sitekb.core.config import DEFAULT_SEARCH_LIMIT
from sitekb.core.exceptions import BuildInProgressError
from sitekb.core.schemas import (
    Client,
    CrawlOptions,
    Entry,
    KnowledgeBaseStats,
    Product,
    Supplier,
)
from sitekb.knowledge.store import KnowledgeBase

logger = logging.getLogger(__name__)


class BuildRequest(BaseModel):
    options: Optional[CrawlOptions] = Field(
        None, description="Crawl options; defaults apply when omitted"
    )


class BuildResponse(BaseModel):
    success: bool
    stats: KnowledgeBaseStats


class SearchRequest(BaseModel):
    query: str = Field("", description="Free-text query")
    limit: int = Field(
        DEFAULT_SEARCH_LIMIT, ge=1, le=100, description="Maximum results to return"
    )


class SearchResponse(BaseModel):
    success: bool
    results: List[Entry]


class StorageResponse(BaseModel):
    success: bool


class KnowledgeBaseRouter:
    def __init__(self, knowledge_base_provider: Callable[[], KnowledgeBase]) -> None:
        """
        Initialize knowledge base router.

        Args:
            knowledge_base_provider: Function returning the shared knowledge base.
        """
        self.get_knowledge_base = knowledge_base_provider
        self.router = APIRouter(prefix="/api/knowledge", tags=["knowledge"])
        self._setup_routes()

    def _setup_routes(self) -> None:
        @self.router.post("/build", response_model=BuildResponse)
        async def build_knowledge_base(request: BuildRequest) -> BuildResponse:
            knowledge_base = self.get_knowledge_base()
            try:
                await knowledge_base.build(request.options)
            except BuildInProgressError as e:
                raise HTTPException(status_code=409, detail=e.message)
            except Exception as e:
                logger.error(f"Knowledge base building error: {e}")
                raise HTTPException(
                    status_code=500,
                    detail=f"Knowledge base building failed: {e}",
                )
            return BuildResponse(success=True, stats=knowledge_base.get_stats())

        @self.router.post("/search", response_model=SearchResponse)
        async def search_knowledge_base(request: SearchRequest) -> SearchResponse:
            if not request.query.strip():
                raise HTTPException(
                    status_code=400, detail="Query parameter is required"
                )

            knowledge_base = self.get_knowledge_base()
            if not knowledge_base.get_entries():
                raise HTTPException(
                    status_code=400,
                    detail="Knowledge base is not built. Call build first.",
                )

            results = knowledge_base.search(request.query, request.limit)
            return SearchResponse(success=True, results=results)

        @self.router.get("/entries", response_model=List[Entry])
        async def list_entries() -> List[Entry]:
            return self.get_knowledge_base().get_entries()

        @self.router.get("/products", response_model=List[Product])
        async def list_products() -> List[Product]:
            return self.get_knowledge_base().get_products()

        @self.router.get("/clients", response_model=List[Client])
        async def list_clients() -> List[Client]:
            return self.get_knowledge_base().get_clients()

        @self.router.get("/suppliers", response_model=List[Supplier])
        async def list_suppliers() -> List[Supplier]:
            return self.get_knowledge_base().get_suppliers()

        @self.router.get("/stats", response_model=KnowledgeBaseStats)
        async def get_stats() -> KnowledgeBaseStats:
            return self.get_knowledge_base().get_stats()

        @self.router.post("/save", response_model=StorageResponse)
        async def save_snapshot() -> StorageResponse:
            return StorageResponse(success=self.get_knowledge_base().save_to_storage())

        @self.router.post("/load", response_model=StorageResponse)
        async def load_snapshot() -> StorageResponse:
            try:
                loaded = self.get_knowledge_base().load_from_storage()
            except BuildInProgressError as e:
                raise HTTPException(status_code=409, detail=e.message)
            return StorageResponse(success=loaded)
