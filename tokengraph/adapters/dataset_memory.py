"""
In-memory dataset source for tests and embedding callers.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class InMemoryDatasetSource:
    """Implements DatasetSourcePort over a dict held in memory."""

    data: Any = field(default_factory=lambda: {"collections": []})
    fetch_count: int = 0

    def describe(self) -> str:
        return "memory"

    def fetch(self) -> Any:
        self.fetch_count += 1
        # Callers must not be able to mutate the held dataset
        return copy.deepcopy(self.data)
