"""Core data models for the site knowledge base.

This module defines Pydantic models for crawl configuration, crawled
entries and the category projections derived from them.

All models use Pydantic v2 ConfigDict.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_PAGES,
    DEFAULT_REQUEST_DELAY_SECONDS,
    DEFAULT_USER_AGENT,
)

# ------------------------- Enums -------------------------


class PageOutcome(Enum):
    """Terminal outcome of visiting a URL within one build."""

    FILTERED = "filtered"
    FETCH_FAILED = "fetch_failed"
    EXTRACTED = "extracted"


# ------------------------- Crawl models -------------------------


class CrawlOptions(BaseModel):
    """Options controlling a knowledge base build.

    Every field is optional; unset fields take the documented defaults.
    """

    model_config = ConfigDict(frozen=True)

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=0,
        description="Maximum link depth from the seed URL (seed is depth 0)",
    )
    request_delay: float = Field(
        default=DEFAULT_REQUEST_DELAY_SECONDS,
        ge=0,
        description="Politeness delay before each fetch, in seconds",
    )
    include_patterns: Optional[List[str]] = Field(
        default=None,
        description="Regex patterns a URL must match at least one of; "
        "None means the site base domain",
    )
    exclude_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
        description="Regex patterns of URLs that are never fetched",
    )
    max_pages: int = Field(
        default=DEFAULT_MAX_PAGES,
        ge=1,
        description="Maximum number of URLs visited in one build",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("include_patterns", "exclude_patterns")
    @classmethod
    def _validate_patterns(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern {pattern!r}: {e}") from e
        return value


class ExtractedPage(BaseModel):
    """Fields a page classifier derives from one fetched page."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Trimmed page title")
    content: str = Field(default="", description="Whitespace-collapsed text")
    category: str = Field(default="General", description="Derived category")
    tags: List[str] = Field(default_factory=list, description="Unique tags")


class Entry(BaseModel):
    """One crawled page stored in the knowledge base."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=lambda: uuid4().hex, description="Opaque unique ID"
    )
    url: str = Field(..., description="URL the entry was extracted from")
    title: str = Field(..., min_length=1, description="Page title")
    content: str = Field(..., min_length=1, description="Normalized plain text")
    category: str = Field(..., description="Page category")
    tags: List[str] = Field(default_factory=list, description="Page tags")
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None),
        description="When the page was extracted",
    )


# ------------------------- Projections -------------------------


class Product(BaseModel):
    """Product view of an entry in the ``products`` category."""

    id: str
    name: str
    category: str
    price: Optional[float] = None
    description: Optional[str] = None


class Client(BaseModel):
    """Client view of an entry in the ``clients`` category."""

    id: str
    name: str
    contact: Optional[str] = None
    email: Optional[str] = None
    industry: Optional[str] = None


class Supplier(BaseModel):
    """Supplier view of an entry in the ``suppliers`` category."""

    id: str
    name: str
    contact: Optional[str] = None
    category: Optional[str] = None
    reliability: Optional[float] = None


class KnowledgeBaseStats(BaseModel):
    """Aggregate counts reported after a build."""

    total_entries: int = Field(..., ge=0)
    product_count: int = Field(..., ge=0)
    client_count: int = Field(..., ge=0)
    supplier_count: int = Field(..., ge=0)
