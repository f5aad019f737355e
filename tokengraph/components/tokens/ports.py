"""
Tokens component - Port interfaces.
"""

from __future__ import annotations

from typing import Any, Protocol

from .models import TokenGraphError


class DatasetSourcePort(Protocol):
    """Source of a raw token dataset (file, HTTP, in-memory)."""

    def fetch(self) -> dict[str, Any]:
        """Return the raw dataset as parsed JSON."""
        ...

    def describe(self) -> str:
        """Human-readable location of the dataset, for logs."""
        ...


class DatasetFetchError(TokenGraphError):
    """Dataset could not be acquired from its source."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to fetch dataset from {source}: {reason}")
