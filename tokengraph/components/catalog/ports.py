"""
Catalog component - Port interfaces.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    """Time source used to stamp snapshots."""

    def now(self) -> datetime:
        """Current time, timezone-aware UTC."""
        ...
