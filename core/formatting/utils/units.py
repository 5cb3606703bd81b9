#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit conversion helpers for template dimensions.

Template authors write dimensions as "<number><unit>" with unit in
{in, em, pt}. Renderers work in points; the paginated renderer's page box
uses whole points (truncated toward zero).
"""

import re
from dataclasses import dataclass

from config.constants import DEFAULT_BASE_FONT_PT, POINTS_PER_INCH
from .constants import DIMENSION_UNITS

_DIMENSION_RE = re.compile(r"^(?P<number>\d+(?:\.\d+)?|\.\d+)(?P<unit>in|em|pt)$")


@dataclass(frozen=True)
class Dimension:
    """Parsed dimension value."""
    value: float
    unit: str

    def to_points(self, base_font_pt: float = DEFAULT_BASE_FONT_PT) -> float:
        """Convert to typographic points; em is relative to base_font_pt."""
        if self.unit == "in":
            return self.value * POINTS_PER_INCH
        if self.unit == "em":
            return self.value * base_font_pt
        return self.value


def is_dimension(value: str) -> bool:
    """Check whether value matches the dimension grammar."""
    if not isinstance(value, str):
        return False
    return value.strip() == "0" or bool(_DIMENSION_RE.match(value.strip()))


def parse_dimension(value: str) -> Dimension:
    """
    Parse a dimension string.

    A bare "0" is accepted as zero points.

    Raises:
        ValueError: If value does not match "<number><unit>"
    """
    if not isinstance(value, str):
        raise ValueError(f"Dimension must be a string, got {type(value).__name__}")

    text = value.strip()
    if text == "0":
        return Dimension(0.0, "pt")

    match = _DIMENSION_RE.match(text)
    if not match:
        raise ValueError(
            f"Invalid dimension '{value}': expected <number><unit> "
            f"with unit in {DIMENSION_UNITS}"
        )
    return Dimension(float(match.group("number")), match.group("unit"))


def to_points(value: str, base_font_pt: float = DEFAULT_BASE_FONT_PT) -> float:
    """Convert a dimension string to points."""
    return parse_dimension(value).to_points(base_font_pt)


def to_renderer_units(value: str, base_font_pt: float = DEFAULT_BASE_FONT_PT) -> int:
    """
    Convert a dimension string to whole renderer units (points).

    Truncates toward zero: "1in" -> 72, "0.75in" -> 54, "6in" -> 432.
    """
    return int(to_points(value, base_font_pt))


def format_points(points: float) -> str:
    """Render a point value as a compact CSS length, e.g. 13.5 -> '13.5pt'."""
    return f"{round(points, 3):g}pt"
