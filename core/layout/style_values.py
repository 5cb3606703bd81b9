#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Typed accessors over resolved styles.

Both renderers read attributes through these helpers so that the DOCX and
the PDF agree on sizes, spacing and pagination flags.
"""

from typing import Mapping, Optional

from config.constants import (
    DEFAULT_BASE_FONT_PT,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_ORPHANS,
    DEFAULT_WIDOWS,
)
from core.formatting.utils.units import to_points


def font_size_pt(style: Mapping[str, str]) -> float:
    """Font size in points; em sizes are relative to the base font."""
    value = style.get("fontSize")
    if not value:
        return DEFAULT_BASE_FONT_PT
    return to_points(value, DEFAULT_BASE_FONT_PT)


def length_pt(style: Mapping[str, str], name: str, default: float = 0.0) -> float:
    """A dimension attribute in points; em is relative to the block's font size."""
    value = style.get(name)
    if not value:
        return default
    return to_points(value, font_size_pt(style))


def line_height(style: Mapping[str, str]) -> float:
    """Leading multiplier."""
    value = style.get("lineHeight")
    return float(value) if value else DEFAULT_LINE_HEIGHT


def is_bold(style: Mapping[str, str]) -> bool:
    return style.get("fontWeight") == "bold"


def alignment(style: Mapping[str, str]) -> str:
    return style.get("textAlign", "left")


def page_break_before(style: Mapping[str, str]) -> bool:
    return style.get("pageBreakBefore") == "always"


def widows(style: Mapping[str, str]) -> int:
    return _min_lines(style.get("widows"), DEFAULT_WIDOWS)


def orphans(style: Mapping[str, str]) -> int:
    return _min_lines(style.get("orphans"), DEFAULT_ORPHANS)


def color_hex(style: Mapping[str, str]) -> Optional[str]:
    """Colour as RRGGBB without '#', or None."""
    value = style.get("color")
    return value.lstrip("#").upper() if value else None


def _min_lines(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)
