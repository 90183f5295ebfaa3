"""Site crawler for knowledge base builds.

This module provides the crawl controller and the extraction heuristics
used to turn a single organization's website into knowledge base entries.
"""

from .content_extractor import ContentExtractor, PageClassifier
from .crawler import CrawlSession, SiteCrawler
from .link_extractor import LinkExtractor
from .url_filter import URLFilter, normalize_url

__all__ = [
    "SiteCrawler",
    "CrawlSession",
    "ContentExtractor",
    "PageClassifier",
    "LinkExtractor",
    "URLFilter",
    "normalize_url",
]
