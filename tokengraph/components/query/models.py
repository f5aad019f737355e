"""
Query component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokengraph.components.tokens.models import Token

ALL = "all"
"""Wildcard accepted by the category and resolved-type filters."""


# --- Input Models ---


@dataclass(frozen=True)
class TokenQuery:
    """Filter parameters; all predicates must hold."""

    search_term: str = ""
    category: str = ALL
    resolved_type: str = ALL


# --- Output Models ---


@dataclass(frozen=True)
class QueryOutput:
    """Output from a registry query."""

    tokens: tuple[Token, ...]
    total: int


@dataclass(frozen=True)
class CategoryStats:
    """Token counts per collection category."""

    raw: int = 0
    foundation: int = 0
    component: int = 0
    total: int = 0
