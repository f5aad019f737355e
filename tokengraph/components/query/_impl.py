"""
Query engine - Filter a registry by name, category and type.

Functional Core - pure business logic.
"""

from __future__ import annotations

from tokengraph.components.tokens.models import Token, TokenRegistry
from tokengraph.domain.entities import COLLECTION_CATEGORIES

from .models import ALL, CategoryStats, TokenQuery


def matches(token: Token, token_query: TokenQuery) -> bool:
    """Conjunction of the search, category and type predicates."""
    if token_query.search_term and token_query.search_term.lower() not in token.name.lower():
        return False
    if token_query.category != ALL and token.collection_category != token_query.category:
        return False
    if token_query.resolved_type != ALL and token.resolved_type != token_query.resolved_type:
        return False
    return True


def query(registry: TokenRegistry, token_query: TokenQuery) -> tuple[Token, ...]:
    """Tokens matching every filter, in registry order."""
    return tuple(token for token in registry.tokens if matches(token, token_query))


def distinct_resolved_types(registry: TokenRegistry) -> list[str]:
    """Resolved types present in the registry, sorted ascending."""
    return sorted({token.resolved_type for token in registry.tokens})


def category_stats(registry: TokenRegistry) -> CategoryStats:
    counts = dict.fromkeys(COLLECTION_CATEGORIES, 0)
    for token in registry.tokens:
        counts[token.collection_category] += 1
    return CategoryStats(**counts, total=len(registry.tokens))
