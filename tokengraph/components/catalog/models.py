"""
Catalog component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tokengraph.components.graph import DependencyIndex, GraphDiagnostics
from tokengraph.components.tokens import TokenRegistry


@dataclass(frozen=True)
class CatalogSnapshot:
    """Registry, index and diagnostics for one dataset load."""

    registry: TokenRegistry
    index: DependencyIndex
    diagnostics: GraphDiagnostics = field(default_factory=GraphDiagnostics)
    loaded_at: datetime | None = None
    source: str | None = None

    @classmethod
    def empty(cls) -> CatalogSnapshot:
        registry = TokenRegistry()
        return cls(registry=registry, index=DependencyIndex(registry))

    @property
    def is_empty(self) -> bool:
        return len(self.registry) == 0


@dataclass(frozen=True)
class ReloadOutput:
    """Output from a catalog reload."""

    snapshot: CatalogSnapshot
    success: bool
    error: str | None = None
