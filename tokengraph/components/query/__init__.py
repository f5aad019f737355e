"""
Query component - Free-text, category and type filtering over a registry.
"""

from ._impl import category_stats, distinct_resolved_types, matches, query
from .component import run_query
from .models import ALL, CategoryStats, QueryOutput, TokenQuery

__all__ = [
    # Entry points
    "run_query",
    # Functional core
    "query",
    "matches",
    "distinct_resolved_types",
    "category_stats",
    # Models
    "TokenQuery",
    "QueryOutput",
    "CategoryStats",
    "ALL",
]
