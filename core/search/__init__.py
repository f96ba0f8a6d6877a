"""
Profile search: filter normalisation, pagination and the store query engine.

Usage:
    from core.search import ProfileSearchEngine, SearchFilters, PageRequest

    page = ProfileSearchEngine(session).search(
        SearchFilters.build(skills=["Python"]), PageRequest.validated(1, 20)
    )
"""

from .engine import ProfileSearchEngine, build_conditions
from .filters import Page, PageRequest, SearchFilters
from .text import contains_ci, escape_like, relevance_score, text_match, tokenize

__all__ = [
    "ProfileSearchEngine",
    "build_conditions",
    "Page",
    "PageRequest",
    "SearchFilters",
    "contains_ci",
    "escape_like",
    "relevance_score",
    "text_match",
    "tokenize",
]
