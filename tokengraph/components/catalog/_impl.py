"""
TokenCatalog - Holds the current token snapshot and rebuilds it on load.

The only stateful seam around the engine. Each load builds a complete new
snapshot and swaps it in with one assignment; a failed load leaves the
previous snapshot in place.
"""

from __future__ import annotations

import logging

from tokengraph.components.graph import DependencyIndex, diagnose
from tokengraph.components.tokens import (
    ClassificationRules,
    DatasetSourcePort,
    TokenRegistry,
    ingest,
)

from .models import CatalogSnapshot
from .ports import ClockPort

logger = logging.getLogger(__name__)


def build_snapshot(
    registry: TokenRegistry,
    clock: ClockPort | None = None,
    source: str | None = None,
) -> CatalogSnapshot:
    """Index a registry and collect its diagnostics."""
    index = DependencyIndex(registry)
    return CatalogSnapshot(
        registry=registry,
        index=index,
        diagnostics=diagnose(registry, index),
        loaded_at=clock.now() if clock else None,
        source=source,
    )


class TokenCatalog:
    """
    Token catalog.

    Loads a dataset through a source port and serves immutable snapshots.
    """

    def __init__(
        self,
        source: DatasetSourcePort,
        classification: ClassificationRules | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        """Initialize catalog with an empty snapshot."""
        self._source = source
        self._classification = classification or ClassificationRules()
        self._clock = clock
        self._snapshot = CatalogSnapshot.empty()
        self.last_error: str | None = None

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def load(self) -> CatalogSnapshot:
        """
        Fetch, ingest and index the dataset, then swap the snapshot in.

        Raises:
            DataFormatError: If the dataset is malformed.
            DatasetFetchError: If an HTTP source fails.
            FileNotFoundError: If a file source is missing.
        """
        location = self._source.describe()
        try:
            registry = ingest(self._source.fetch(), self._classification)
        except Exception as e:
            self.last_error = str(e)
            logger.error("Dataset load from %s failed: %s", location, e)
            raise

        snapshot = build_snapshot(registry, clock=self._clock, source=location)
        self._snapshot = snapshot
        self.last_error = None

        logger.info(
            "Loaded %d tokens in %d collections from %s",
            len(registry),
            len(registry.collections),
            location,
        )
        diagnostics = snapshot.diagnostics
        if diagnostics.dangling_count:
            logger.warning("%d aliases point at unknown tokens", diagnostics.dangling_count)
        if diagnostics.name_collisions:
            logger.warning(
                "%d token names appear more than once; lookups use the first",
                len(diagnostics.name_collisions),
            )
        if diagnostics.cycles:
            logger.warning("%d alias cycles detected", len(diagnostics.cycles))

        return snapshot
