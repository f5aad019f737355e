"""
Tokens component - Dataset ingestion entry points.

Shell Layer - wires sources to the functional core.
"""

from __future__ import annotations

from ._impl import ingest
from .models import ClassificationRules, IngestInput, IngestOutput
from .ports import DatasetSourcePort


def run_ingest(input_data: IngestInput) -> IngestOutput:
    """
    Ingest a raw dataset into a registry.

    Raises:
        DataFormatError: If the dataset is malformed.
    """
    registry = ingest(input_data.raw_dataset, input_data.classification)
    return IngestOutput(
        registry=registry,
        alias_count=sum(1 for token in registry.tokens if token.alias_target is not None),
    )


def run_load(
    source: DatasetSourcePort,
    classification: ClassificationRules | None = None,
) -> IngestOutput:
    """Fetch a dataset through a source port and ingest it."""
    return run_ingest(
        IngestInput(
            raw_dataset=source.fetch(),
            classification=classification or ClassificationRules(),
        )
    )
