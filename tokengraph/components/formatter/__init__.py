"""
Value Formatter: display strings and swatch colors for tokens.
"""

from tokengraph.components.formatter.fc import (
    ALIAS_PREFIX,
    color_preview,
    format_number,
    format_value,
    rgba,
)

__all__ = [
    "format_value",
    "color_preview",
    "format_number",
    "rgba",
    "ALIAS_PREFIX",
]
