"""
Value Formatter Functional Core: Pure display formatting for tokens.

No I/O operations - all functions are pure and deterministic.
Renders a token's first-mode value to the string shown in token lists,
tooltips and the dependency map.
"""

from __future__ import annotations

import dataclasses
import json
import math
from typing import Any

from tokengraph.components.tokens.models import Token
from tokengraph.domain.values import (
    BooleanValue,
    ColorValue,
    MissingValue,
    ModeValue,
    NumberValue,
    RawValue,
    StringValue,
)

ALIAS_PREFIX = "→ "
"""Reference indicator placed before an alias target name."""

COLOR_TYPE = "COLOR"


# ═══════════════════════════════════════════════════════════════════════════
# PRIMITIVES
# ═══════════════════════════════════════════════════════════════════════════


def format_number(value: int | float) -> str:
    """
    Decimal representation of a number.

    Integral floats drop the trailing ``.0`` (``4.0`` renders as ``4``).
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def _round_channel(channel: float) -> int:
    # Half-up rounding: 0.5 * 255 = 127.5 -> 128
    return math.floor(channel * 255 + 0.5)


def rgba(color: ColorValue) -> str:
    """
    CSS ``rgba()`` string for a color with channels in [0, 1].

    RGB channels are scaled to 0-255 and rounded; alpha is kept as-is.
    """
    r = _round_channel(color.r)
    g = _round_channel(color.g)
    b = _round_channel(color.b)
    return f"rgba({r}, {g}, {b}, {format_number(color.a)})"


def _serialize(value: ModeValue) -> str:
    literal: Any
    if isinstance(value, MissingValue):
        literal = None
    elif isinstance(value, RawValue):
        literal = value.value
    else:
        literal = dataclasses.asdict(value)
    return json.dumps(literal, separators=(",", ":"), ensure_ascii=False, default=str)


# ═══════════════════════════════════════════════════════════════════════════
# TOKEN FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


def format_value(token: Token, alias_prefix: str = ALIAS_PREFIX) -> str:
    """
    Display string for a token's first-mode value.

    Aliases render as the prefix followed by the target name whatever
    their type. Unknown shapes fall back to compact JSON; this never raises.
    """
    if token.alias_target is not None:
        return alias_prefix + token.alias_target

    value = token.value
    if isinstance(value, ColorValue):
        if token.resolved_type == COLOR_TYPE:
            return rgba(value)
        return _serialize(value)
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return format_number(value.value)
    if isinstance(value, StringValue):
        return value.value
    return _serialize(value)


def color_preview(token: Token) -> str | None:
    """Swatch color for literal COLOR tokens, None for anything else."""
    if token.resolved_type != COLOR_TYPE or token.alias_target is not None:
        return None
    if not isinstance(token.value, ColorValue):
        return None
    return rgba(token.value)
