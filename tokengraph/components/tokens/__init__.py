"""
Tokens component - Token registry and dataset ingestion.

Normalizes a hierarchical collections/variables export into a flat,
ordered registry of tokens, resolving each token's alias target from its
first mode.
"""

from ._impl import (
    classify_collection,
    first_mode_value,
    ingest,
    resolve_alias,
)
from .component import run_ingest, run_load
from .models import (
    ClassificationRules,
    CollectionInfo,
    DataFormatError,
    IngestInput,
    IngestOutput,
    Token,
    TokenGraphError,
    TokenRegistry,
)
from .ports import DatasetFetchError, DatasetSourcePort

__all__ = [
    # Entry points
    "run_ingest",
    "run_load",
    # Functional core
    "ingest",
    "classify_collection",
    "first_mode_value",
    "resolve_alias",
    # Models
    "Token",
    "TokenRegistry",
    "CollectionInfo",
    "ClassificationRules",
    "IngestInput",
    "IngestOutput",
    # Errors
    "TokenGraphError",
    "DataFormatError",
    "DatasetFetchError",
    # Ports
    "DatasetSourcePort",
]
