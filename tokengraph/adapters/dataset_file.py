"""
JSON file dataset source.

Reads a variables export saved to disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tokengraph.components.tokens import DataFormatError

logger = logging.getLogger(__name__)


class JsonFileDatasetSource:
    """Implements DatasetSourcePort over a local JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def describe(self) -> str:
        return str(self.path)

    def fetch(self) -> dict[str, Any]:
        """
        Read and parse the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            DataFormatError: If the file is not UTF-8 encoded JSON.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Dataset file not found at: {self.path}")

        logger.debug("Reading dataset from %s", self.path)
        try:
            data: dict[str, Any] = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataFormatError(f"invalid JSON: {e.msg} (line {e.lineno})") from e
        except UnicodeDecodeError as e:
            raise DataFormatError(f"not UTF-8 text: {e.reason} at byte {e.start}") from e
        return data
