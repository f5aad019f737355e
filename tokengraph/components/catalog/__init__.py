"""
Catalog component - Current token snapshot and reloads.
"""

from ._impl import TokenCatalog, build_snapshot
from .component import run_reload
from .models import CatalogSnapshot, ReloadOutput
from .ports import ClockPort

__all__ = [
    # Entry points
    "run_reload",
    # Service
    "TokenCatalog",
    "build_snapshot",
    # Models
    "CatalogSnapshot",
    "ReloadOutput",
    # Ports
    "ClockPort",
]
