"""Searchable knowledge base built by crawling one organization's website."""

from .core.schemas import CrawlOptions, Entry
from .knowledge.store import KnowledgeBase

__all__ = ["KnowledgeBase", "CrawlOptions", "Entry"]
