"""
Formatting utilities: shared constants and dimension conversion.
"""

from .constants import (
    BLOCK_TYPES,
    REQUIRED_CATEGORIES,
    BLOCK_CATEGORIES,
    BASE_FORMATTING_RULES,
)
from .units import (
    Dimension,
    is_dimension,
    parse_dimension,
    to_points,
    to_renderer_units,
    format_points,
)

__all__ = [
    "BLOCK_TYPES",
    "REQUIRED_CATEGORIES",
    "BLOCK_CATEGORIES",
    "BASE_FORMATTING_RULES",
    "Dimension",
    "is_dimension",
    "parse_dimension",
    "to_points",
    "to_renderer_units",
    "format_points",
]
