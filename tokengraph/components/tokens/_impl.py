"""
Token ingestion - Normalize a raw dataset into a TokenRegistry.

Functional Core - pure business logic.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from tokengraph.domain.entities import CollectionCategory, RawDataset, RawVariable
from tokengraph.domain.values import AliasValue, MissingValue, ModeValue, parse_mode_value

from .models import (
    ClassificationRules,
    CollectionInfo,
    DataFormatError,
    Token,
    TokenRegistry,
)

DEFAULT_CLASSIFICATION = ClassificationRules()

# --- Classification ---


def classify_collection(
    collection_name: str,
    rules: ClassificationRules = DEFAULT_CLASSIFICATION,
) -> CollectionCategory:
    """Derive the category of a collection from its name."""
    if collection_name in rules.foundation_collections:
        return "foundation"
    if collection_name in rules.component_collections:
        return "component"
    return "raw"


# --- Alias Resolution ---


def first_mode_value(values_by_mode: dict[str, Any]) -> ModeValue:
    """Parse the value of the first mode in iteration order."""
    for mode_value in values_by_mode.values():
        return parse_mode_value(mode_value)
    return MissingValue()


def resolve_alias(values_by_mode: dict[str, Any]) -> str | None:
    """Alias target named by the first mode, if it is a reference."""
    value = first_mode_value(values_by_mode)
    return value.target if isinstance(value, AliasValue) else None


# --- Ingestion ---


def _location(loc: tuple[int | str, ...]) -> str:
    path = "$"
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def parse_dataset(raw_dataset: Any) -> RawDataset:
    """
    Validate the raw dataset shape.

    Raises:
        DataFormatError: If required structure is missing.
    """
    if not isinstance(raw_dataset, dict):
        raise DataFormatError("dataset must be an object")
    if "collections" not in raw_dataset:
        raise DataFormatError("missing 'collections'")

    try:
        return RawDataset.model_validate(raw_dataset)
    except ValidationError as e:
        first = e.errors()[0]
        raise DataFormatError(first["msg"], _location(tuple(first["loc"]))) from e


def build_token(
    variable: RawVariable,
    collection_name: str,
    category: CollectionCategory,
) -> Token:
    value = first_mode_value(variable.values_by_mode)
    return Token(
        name=variable.name,
        resolved_type=variable.resolved_type,
        collection_name=collection_name,
        collection_category=category,
        values_by_mode=dict(variable.values_by_mode),
        value=value,
        alias_target=value.target if isinstance(value, AliasValue) else None,
    )


def ingest(
    raw_dataset: Any,
    rules: ClassificationRules = DEFAULT_CLASSIFICATION,
) -> TokenRegistry:
    """
    Ingest a raw dataset into a flat registry.

    Tokens keep source order: collection order, then variable order.
    Nothing is returned on failure, so a caller never sees a partial registry.

    Raises:
        DataFormatError: If the dataset is malformed.
    """
    dataset = parse_dataset(raw_dataset)

    tokens: list[Token] = []
    collections: list[CollectionInfo] = []

    for collection in dataset.collections:
        category = classify_collection(collection.name, rules)
        for variable in collection.variables:
            tokens.append(build_token(variable, collection.name, category))
        collections.append(
            CollectionInfo(
                name=collection.name,
                category=category,
                token_count=len(collection.variables),
            )
        )

    return TokenRegistry(tokens=tuple(tokens), collections=tuple(collections))
