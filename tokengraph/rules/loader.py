"""
Rules file loading.

The rules file is plain YAML, or a markdown document whose first ```yaml
block holds the YAML.
"""

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tokengraph.rules.models import Rules

_YAML_FENCE = re.compile(r"^\s*```ya?ml\s*$(.*?)^\s*```", re.MULTILINE | re.DOTALL)


def extract_yaml(content: str) -> str:
    """Body of the first fenced yaml block, or the content unchanged."""
    match = _YAML_FENCE.search(content)
    return match.group(1) if match else content


def parse_rules(content: str, origin: str = "<string>") -> Rules:
    """
    Parse and validate rules text.

    Raises:
        ValueError: If the YAML or the schema is invalid.
    """
    try:
        data: Any = yaml.safe_load(extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file {origin}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Rules validation failed: {origin} must hold a mapping")

    try:
        return Rules.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Rules validation failed for {origin}:\n{e}") from e


def load_rules(path: Path | str) -> Rules:
    """
    Load the rules file. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file is missing.
        ValueError: If the YAML or the schema is invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Rules file not found at: {path}")
    return parse_rules(path.read_text(encoding="utf-8"), origin=str(path))
