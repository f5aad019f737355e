"""
Catalog component - Reload entry point.

Shell Layer - converts load failures to outputs.
"""

from __future__ import annotations

from tokengraph.components.tokens import DataFormatError, DatasetFetchError

from ._impl import TokenCatalog
from .models import ReloadOutput


def run_reload(catalog: TokenCatalog) -> ReloadOutput:
    """Reload the catalog, keeping the previous snapshot on failure."""
    try:
        snapshot = catalog.load()
    except (DataFormatError, DatasetFetchError, FileNotFoundError) as e:
        return ReloadOutput(snapshot=catalog.snapshot, success=False, error=str(e))

    return ReloadOutput(snapshot=snapshot, success=True)
