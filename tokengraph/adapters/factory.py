"""
Dataset source selection from rules and overrides.
"""

from __future__ import annotations

from pathlib import Path

from tokengraph.adapters.dataset_file import JsonFileDatasetSource
from tokengraph.adapters.dataset_http import HttpDatasetSource
from tokengraph.components.tokens import DatasetSourcePort
from tokengraph.rules.models import Rules, SourceSection


def create_dataset_source(
    location: str,
    timeout: float = 10.0,
    retries: int = 2,
    base_dir: Path | None = None,
) -> DatasetSourcePort:
    """HTTP source for http(s) URLs, file source for anything else."""
    if location.startswith(("http://", "https://")):
        return HttpDatasetSource(location, timeout=timeout, retries=retries)

    path = Path(location)
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return JsonFileDatasetSource(path)


def source_from_rules(
    rules: Rules,
    base_dir: Path,
    override: str | None = None,
) -> DatasetSourcePort:
    """
    Build the configured dataset source.

    A relative ``source.path`` is resolved against ``base_dir``, the
    directory holding the rules file. ``override`` (a path or URL) replaces
    the configured location and is taken as given, relative to the working
    directory.

    Raises:
        ValueError: If no location is configured.
    """
    section: SourceSection = rules.source
    if override:
        return create_dataset_source(
            override, timeout=section.timeout_seconds, retries=section.retries
        )

    location = section.url if section.kind == "http" else section.path
    if not location:
        raise ValueError("No dataset location configured (set source.path or source.url)")

    return create_dataset_source(
        location,
        timeout=section.timeout_seconds,
        retries=section.retries,
        base_dir=base_dir,
    )
