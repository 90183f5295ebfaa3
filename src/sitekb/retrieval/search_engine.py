"""
Keyword search over knowledge base entries.

Search is a linear scan. Each query term adds a fixed weight per field it
occurs in as a substring: 10 for the title, 5 for any tag and 1 for the
content. Repeated query terms are counted once per occurrence.
"""

import logging
from typing import List, Sequence

from ..core.config import DEFAULT_SEARCH_LIMIT
from ..core.schemas import Entry

logger = logging.getLogger(__name__)

TITLE_WEIGHT = 10
TAG_WEIGHT = 5
CONTENT_WEIGHT = 1


def tokenize_query(query: str) -> List[str]:
    """Split a query on whitespace into lower-cased terms."""
    return query.lower().split()


def score_entry(entry: Entry, terms: Sequence[str]) -> int:
    """
    Score one entry against tokenized query terms.

    Args:
        entry: Entry to score
        terms: Lower-cased query terms, duplicates included

    Returns:
        Relevance score; 0 means no term matched
    """
    title = entry.title.lower()
    content = entry.content.lower()
    tags = [tag.lower() for tag in entry.tags]

    score = 0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if any(term in tag for tag in tags):
            score += TAG_WEIGHT
        if term in content:
            score += CONTENT_WEIGHT
    return score


def search_entries(
    entries: Sequence[Entry], query: str, limit: int = DEFAULT_SEARCH_LIMIT
) -> List[Entry]:
    """
    Rank entries against a free-text query.

    Args:
        entries: Entries in store order
        query: Free-text query
        limit: Maximum number of results

    Returns:
        Matching entries by descending score; equal scores keep store order
    """
    if not query or not query.strip() or not entries or limit < 1:
        return []

    terms = tokenize_query(query)
    scored = [(score_entry(entry, terms), entry) for entry in entries]
    matches = [(score, entry) for score, entry in scored if score > 0]

    # sorted() is stable, so ties stay in crawl order
    matches = sorted(matches, key=lambda item: item[0], reverse=True)

    logger.debug(f"Query {query!r} matched {len(matches)} of {len(entries)} entries")
    return [entry for _, entry in matches[:limit]]
