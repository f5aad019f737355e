"""
HTTP dataset source.

Fetches a published variables export over HTTP with httpx. Timeouts and
retries live here; the engine never sees transport concerns.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from tokengraph.components.tokens import DataFormatError, DatasetFetchError

logger = logging.getLogger(__name__)


class HttpDatasetSource:
    """Implements DatasetSourcePort over HTTP GET."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        retries: int = 2,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.retries = retries
        self._transport = transport

    def describe(self) -> str:
        return self.url

    def fetch(self) -> dict[str, Any]:
        """
        GET the dataset and parse the JSON body.

        Transport errors are retried up to ``retries`` times; HTTP error
        statuses are not.

        Raises:
            DatasetFetchError: If the request fails or returns non-2xx.
            DataFormatError: If the body is not valid JSON.
        """
        attempts = self.retries + 1
        last_error: httpx.RequestError | None = None

        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = client.get(self.url)
                except httpx.RequestError as e:
                    last_error = e
                    logger.warning(
                        "Dataset fetch attempt %d/%d failed: %s", attempt, attempts, e
                    )
                    continue

                if response.is_error:
                    raise DatasetFetchError(self.url, f"HTTP {response.status_code}")

                try:
                    data: dict[str, Any] = response.json()
                except ValueError as e:
                    raise DataFormatError(f"response is not valid JSON: {e}") from e
                return data

        raise DatasetFetchError(self.url, str(last_error)) from last_error
