"""Design token graph engine: registry, alias index, queries and trees."""

__version__ = "0.1.0"
