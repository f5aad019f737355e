"""
Mode-value variants.

A token's first-mode value is parsed once at ingestion into one of these
variants so downstream code can dispatch on a closed set of kinds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ALIAS_MARKER = "aliasOf"
FIGMA_ALIAS_TYPE = "VARIABLE_ALIAS"


@dataclass(frozen=True)
class ColorValue:
    """RGBA color with channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class NumberValue:
    value: int | float


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class AliasValue:
    """Reference to another token by name."""

    target: str


@dataclass(frozen=True)
class RawValue:
    """Literal of a shape the engine does not model (kept verbatim)."""

    value: Any


@dataclass(frozen=True)
class MissingValue:
    """First mode carries neither a literal nor a reference."""


ModeValue = (
    ColorValue | NumberValue | StringValue | BooleanValue | AliasValue | RawValue | MissingValue
)

_COLOR_CHANNELS = ("r", "g", "b")


def _is_color_record(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    return all(
        isinstance(value.get(ch), int | float) and not isinstance(value.get(ch), bool)
        for ch in _COLOR_CHANNELS
    )


def _alias_from_literal(value: Any) -> str | None:
    # Figma exports references inline as {"type": "VARIABLE_ALIAS", "id": ...}
    if isinstance(value, dict) and value.get("type") == FIGMA_ALIAS_TYPE:
        target = value.get("name") or value.get("id")
        if isinstance(target, str) and target:
            return target
    return None


def parse_mode_value(mode_value: Any) -> ModeValue:
    """
    Parse a raw mode-value record into a variant.

    A record with an ``aliasOf`` marker is a reference; otherwise the
    ``value`` literal is classified by its shape.
    """
    if not isinstance(mode_value, dict):
        # Some exports inline the literal without the {"value": ...} wrapper
        mode_value = {"value": mode_value}

    alias = mode_value.get(ALIAS_MARKER)
    if alias:
        return AliasValue(target=str(alias))

    if "value" not in mode_value or mode_value["value"] is None:
        return MissingValue()

    literal = mode_value["value"]

    figma_alias = _alias_from_literal(literal)
    if figma_alias is not None:
        return AliasValue(target=figma_alias)

    if isinstance(literal, bool):
        return BooleanValue(value=literal)
    if isinstance(literal, int | float):
        return NumberValue(value=literal)
    if isinstance(literal, str):
        return StringValue(value=literal)
    if _is_color_record(literal):
        alpha = literal.get("a", 1.0)
        return ColorValue(
            r=literal["r"],
            g=literal["g"],
            b=literal["b"],
            a=alpha if isinstance(alpha, int | float) else 1.0,
        )
    return RawValue(value=literal)
