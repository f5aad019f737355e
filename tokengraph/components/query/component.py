"""
Query component - Filtering entry points.

Shell Layer - packages query results for the presentation layer.
"""

from __future__ import annotations

from tokengraph.components.tokens.models import TokenRegistry

from ._impl import query
from .models import QueryOutput, TokenQuery


def run_query(token_query: TokenQuery, registry: TokenRegistry) -> QueryOutput:
    """Filter the registry."""
    tokens = query(registry, token_query)
    return QueryOutput(tokens=tokens, total=len(tokens))
