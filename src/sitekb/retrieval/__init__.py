from .search_engine import score_entry, search_entries, tokenize_query

__all__ = ["score_entry", "search_entries", "tokenize_query"]
