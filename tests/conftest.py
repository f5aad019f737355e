from pathlib import Path
from typing import Any

import pytest

from tokengraph.adapters.dataset_memory import InMemoryDatasetSource
from tokengraph.components.catalog import CatalogSnapshot, TokenCatalog
from tokengraph.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


def make_variable(
    name: str,
    resolved_type: str,
    value: Any = None,
    alias_of: str | None = None,
) -> dict[str, Any]:
    mode_value = {"aliasOf": alias_of} if alias_of else {"value": value}
    return {"name": name, "resolvedType": resolved_type, "valuesByMode": {"1:0": mode_value}}


@pytest.fixture
def design_dataset() -> dict[str, Any]:
    """
    Small design system: primitives, foundations and components, with one
    dangling alias.
    """
    return {
        "collections": [
            {
                "name": "Primitives",
                "variables": [
                    make_variable("palette/red", "COLOR", {"r": 1, "g": 0, "b": 0, "a": 1}),
                    make_variable("palette/white", "COLOR", {"r": 1, "g": 1, "b": 1, "a": 0.5}),
                    make_variable("scale/4", "FLOAT", 4),
                    make_variable("font/sans", "STRING", "Inter"),
                ],
            },
            {
                "name": "Color",
                "variables": [
                    make_variable("color/brand/primary", "COLOR", alias_of="palette/red"),
                    make_variable("color/surface", "COLOR", alias_of="palette/white"),
                ],
            },
            {
                "name": "Typography",
                "variables": [
                    make_variable("type/body", "STRING", alias_of="font/sans"),
                ],
            },
            {
                "name": "Components",
                "variables": [
                    make_variable("button/bg", "COLOR", alias_of="color/brand/primary"),
                    make_variable("button/radius", "FLOAT", alias_of="scale/4"),
                    make_variable("button/caps", "BOOLEAN", True),
                    make_variable("badge/bg", "COLOR", alias_of="color/legacy"),
                ],
            },
        ]
    }


@pytest.fixture
def chain_dataset() -> dict[str, Any]:
    """A (literal 4) <- B <- C."""
    return {
        "collections": [
            {
                "name": "Primitives",
                "variables": [
                    make_variable("A", "FLOAT", 4),
                    make_variable("B", "FLOAT", alias_of="A"),
                    make_variable("C", "FLOAT", alias_of="B"),
                ],
            }
        ]
    }


@pytest.fixture
def design_source(design_dataset: dict[str, Any]) -> InMemoryDatasetSource:
    return InMemoryDatasetSource(data=design_dataset)


@pytest.fixture
def design_catalog(design_source: InMemoryDatasetSource) -> TokenCatalog:
    catalog = TokenCatalog(source=design_source)
    catalog.load()
    return catalog


@pytest.fixture
def design_snapshot(design_catalog: TokenCatalog) -> CatalogSnapshot:
    return design_catalog.snapshot


@pytest.fixture
def default_rules() -> Rules:
    return Rules()
