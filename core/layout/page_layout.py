#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Page Layout - Page box in author units and in renderer units.

Templates state the trim size and margins in author-facing units
("6in", "0.75in"). The paginated renderer converts them once into whole
points (72 per inch, truncated toward zero) before handing them to the
layout engine.
"""

from dataclasses import dataclass
from typing import Dict, Mapping

from core.formatting.utils.constants import PAGE_MARGIN_SIDES, PAGE_SIZE_AXES
from core.formatting.utils.units import to_renderer_units


# =============================================================================
# AUTHOR UNITS
# =============================================================================

@dataclass(frozen=True)
class PageSize:
    """Trim size as dimension strings."""
    width: str
    height: str

    @classmethod
    def from_rules(cls, rules: Mapping[str, str]) -> "PageSize":
        missing = [axis for axis in PAGE_SIZE_AXES if axis not in rules]
        if missing:
            raise ValueError(f"page.size is missing {missing}")
        return cls(width=rules["width"], height=rules["height"])

    def to_dict(self) -> Dict[str, str]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Margins:
    """Page margins as dimension strings."""
    top: str
    right: str
    bottom: str
    left: str

    @classmethod
    def from_rules(cls, rules: Mapping[str, str]) -> "Margins":
        missing = [side for side in PAGE_MARGIN_SIDES if side not in rules]
        if missing:
            raise ValueError(f"page.margin is missing {missing}")
        return cls(top=rules["top"], right=rules["right"],
                   bottom=rules["bottom"], left=rules["left"])

    def to_dict(self) -> Dict[str, str]:
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


# =============================================================================
# RENDERER UNITS
# =============================================================================

@dataclass(frozen=True)
class PageConstraints:
    """Page box in whole points, as consumed by layout engines."""
    width: int
    height: int
    margin_top: int
    margin_right: int
    margin_bottom: int
    margin_left: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Page size must be positive, got {self.width}x{self.height}pt")
        if self.content_width <= 0 or self.content_height <= 0:
            raise ValueError("Margins leave no room for content")

    @classmethod
    def from_dimensions(cls, page_size: PageSize, margins: Margins) -> "PageConstraints":
        """
        Convert author units to points.

        "6in" x "9in" with "0.75in" margins -> 432 x 648 with 54 on every side.
        """
        return cls(
            width=to_renderer_units(page_size.width),
            height=to_renderer_units(page_size.height),
            margin_top=to_renderer_units(margins.top),
            margin_right=to_renderer_units(margins.right),
            margin_bottom=to_renderer_units(margins.bottom),
            margin_left=to_renderer_units(margins.left),
        )

    @property
    def content_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom

    def to_dict(self) -> Dict[str, int]:
        return {
            "width": self.width,
            "height": self.height,
            "margin_top": self.margin_top,
            "margin_right": self.margin_right,
            "margin_bottom": self.margin_bottom,
            "margin_left": self.margin_left,
        }
