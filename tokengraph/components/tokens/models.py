"""
Tokens component - Data models.

Token records, the registry container, ingestion inputs/outputs and the
package error types.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from tokengraph.domain.entities import CollectionCategory
from tokengraph.domain.values import AliasValue, ModeValue

# --- Records ---


@dataclass(frozen=True)
class Token:
    """A single named design value, normalized from one raw variable."""

    name: str
    resolved_type: str
    collection_name: str
    collection_category: CollectionCategory
    values_by_mode: dict[str, Any] = field(compare=False)
    value: ModeValue
    alias_target: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Collection-scoped identity (names alone may collide)."""
        return (self.collection_name, self.name)

    @property
    def is_alias(self) -> bool:
        return isinstance(self.value, AliasValue)


@dataclass(frozen=True)
class CollectionInfo:
    name: str
    category: CollectionCategory
    token_count: int


@dataclass(frozen=True)
class TokenRegistry:
    """
    Immutable, ordered registry of tokens for one dataset snapshot.

    Re-ingestion builds a new registry; this one is never mutated.
    """

    tokens: tuple[Token, ...] = ()
    collections: tuple[CollectionInfo, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def find(self, name: str) -> Token | None:
        """First token with this name, in registry order."""
        return next((token for token in self.tokens if token.name == name), None)


# --- Input Models ---


@dataclass(frozen=True)
class ClassificationRules:
    """Collection-name table used to derive a token's category."""

    foundation_collections: frozenset[str] = frozenset({"Typography", "Color"})
    component_collections: frozenset[str] = frozenset({"Components"})


@dataclass(frozen=True)
class IngestInput:
    """Input for ingesting a raw dataset."""

    raw_dataset: Any
    classification: ClassificationRules = field(default_factory=ClassificationRules)


# --- Output Models ---


@dataclass(frozen=True)
class IngestOutput:
    """Output from ingestion."""

    registry: TokenRegistry
    alias_count: int


# --- Error Types ---


class TokenGraphError(Exception):
    """Base error for the token graph engine."""

    pass


class DataFormatError(TokenGraphError, ValueError):
    """Raw dataset lacks required structure."""

    def __init__(self, reason: str, location: str = "$") -> None:
        self.reason = reason
        self.location = location
        super().__init__(f"Malformed dataset at {location}: {reason}")
