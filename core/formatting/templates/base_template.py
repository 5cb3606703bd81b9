#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Template - Rule model and abstract base class for book templates.

A template is a base rule set plus a named override. Rules are keyed by a
closed set of categories ("chapter.title", "text", "page.size", ...);
each category maps attribute names to string values.

Merging is explicit and category-by-category: categories missing from the
override keep the base values, and inside an overridden category the
override's attributes replace the base's while absent ones are inherited.
"""

import re
from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping

from ..utils.constants import (
    BASE_FORMATTING_RULES,
    COLOR_ATTRIBUTES,
    DIMENSION_ATTRIBUTES,
    INTEGER_ATTRIBUTES,
    NUMBER_ATTRIBUTES,
    PAGE_MARGIN,
    PAGE_MARGIN_SIDES,
    PAGE_SIZE,
    PAGE_SIZE_AXES,
    REQUIRED_CATEGORIES,
    TEXT_ATTRIBUTES,
    TOKEN_ATTRIBUTES,
)
from ..utils.units import is_dimension, to_renderer_units

RuleSet = Dict[str, Dict[str, str]]

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")


# =============================================================================
# RULE OPERATIONS
# =============================================================================

def merge_rules(base: Mapping[str, Mapping[str, str]],
                override: Mapping[str, Mapping[str, str]]) -> RuleSet:
    """
    Deep-merge an override into a base rule set.

    Args:
        base: Base rule set
        override: Categories/attributes to replace

    Returns:
        New rule set; neither input is modified

    Raises:
        ValueError: If the override names a category outside the closed set
    """
    unknown = sorted(set(override) - set(REQUIRED_CATEGORIES))
    if unknown:
        raise ValueError(f"Unknown style categories in override: {unknown}")

    merged: RuleSet = {category: dict(attrs) for category, attrs in base.items()}
    for category, attrs in override.items():
        merged.setdefault(category, {}).update(attrs)
    return merged


def _validate_attribute(category: str, name: str, value) -> List[str]:
    where = f"{category}.{name}"
    if not isinstance(value, str):
        return [f"{where}: value must be a string, got {type(value).__name__}"]

    if name in DIMENSION_ATTRIBUTES:
        if not is_dimension(value):
            return [f"{where}: invalid dimension '{value}'"]
    elif name in NUMBER_ATTRIBUTES:
        if not _NUMBER_RE.match(value):
            return [f"{where}: expected a number, got '{value}'"]
    elif name in INTEGER_ATTRIBUTES:
        if not value.isdigit():
            return [f"{where}: expected a whole number, got '{value}'"]
    elif name in TOKEN_ATTRIBUTES:
        if value not in TOKEN_ATTRIBUTES[name]:
            return [f"{where}: '{value}' not in {TOKEN_ATTRIBUTES[name]}"]
    elif name in COLOR_ATTRIBUTES:
        if not _COLOR_RE.match(value):
            return [f"{where}: expected #RRGGBB colour, got '{value}'"]
    elif name in TEXT_ATTRIBUTES:
        if not value.strip():
            return [f"{where}: must not be empty"]
    return []


def _content_area_errors(rules: Mapping[str, Mapping[str, str]]) -> List[str]:
    size = rules.get(PAGE_SIZE, {})
    margin = rules.get(PAGE_MARGIN, {})
    values = [size.get(axis) for axis in PAGE_SIZE_AXES] + [margin.get(side) for side in PAGE_MARGIN_SIDES]
    if not all(is_dimension(value) for value in values):
        return []  # reported above

    points = {side: to_renderer_units(margin[side]) for side in PAGE_MARGIN_SIDES}
    width = to_renderer_units(size["width"]) - points["left"] - points["right"]
    height = to_renderer_units(size["height"]) - points["top"] - points["bottom"]

    errors = []
    if width <= 0:
        errors.append(f"{PAGE_MARGIN}: left/right margins leave no content width ({width}pt)")
    if height <= 0:
        errors.append(f"{PAGE_MARGIN}: top/bottom margins leave no content height ({height}pt)")
    return errors


def validate_rules(rules: Mapping[str, Mapping[str, str]]) -> List[str]:
    """
    Validate a merged rule set.

    Checks:
    - Every required category is present
    - Page size/margin categories carry all their axes/sides
    - Attribute values follow their type (dimension, number, token, colour)
    - Page margins leave a content area on both axes

    Returns:
        List of error messages (empty when valid)
    """
    errors = []

    for category in REQUIRED_CATEGORIES:
        if category not in rules:
            errors.append(f"missing category '{category}'")

    for category in sorted(set(rules) - set(REQUIRED_CATEGORIES)):
        errors.append(f"unknown category '{category}'")

    for category, required in ((PAGE_SIZE, PAGE_SIZE_AXES), (PAGE_MARGIN, PAGE_MARGIN_SIDES)):
        attrs = rules.get(category, {})
        for key in required:
            if category in rules and key not in attrs:
                errors.append(f"{category}: missing '{key}'")

    for category in REQUIRED_CATEGORIES:
        for name, value in rules.get(category, {}).items():
            errors.extend(_validate_attribute(category, name, value))

    errors.extend(_content_area_errors(rules))

    return errors


# =============================================================================
# TEMPLATE
# =============================================================================

@dataclass(frozen=True)
class Template:
    """
    Registered template: identity plus its merged rule set.

    rules is exposed read-only; use rules_dict() for a mutable copy.
    """
    id: str
    display_name: str
    description: str
    rules: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = MappingProxyType({
            category: MappingProxyType(dict(attrs))
            for category, attrs in self.rules.items()
        })
        object.__setattr__(self, "rules", frozen)

    def category(self, name: str) -> Mapping[str, str]:
        """Attributes for one category (KeyError when absent)."""
        return self.rules[name]

    def rules_dict(self) -> RuleSet:
        """Plain-dict deep copy of the rule set."""
        return {category: dict(attrs) for category, attrs in self.rules.items()}

    def info(self) -> Dict[str, str]:
        """Listing entry without styles."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "description": self.description,
        }


class BaseTemplate(ABC):
    """
    Abstract base class for book templates.

    Subclasses name themselves and provide their override; build() merges
    it over base_rules() into a Template.

    Usage:
        class PoetryTemplate(BaseTemplate):
            @property
            def template_id(self) -> str:
                return "poetry"
            ...
    """

    @property
    @abstractmethod
    def template_id(self) -> str:
        """Unique template identifier."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Brief description of the template's purpose and style."""
        pass

    @abstractmethod
    def overrides(self) -> RuleSet:
        """Categories/attributes this template changes."""
        pass

    def base_rules(self) -> RuleSet:
        """Rule set the override is merged into."""
        return deepcopy(BASE_FORMATTING_RULES)

    def build(self) -> Template:
        """Merge the override into the base rules."""
        return Template(
            id=self.template_id,
            display_name=self.display_name,
            description=self.description,
            rules=merge_rules(self.base_rules(), self.overrides()),
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(template_id='{self.template_id}')>"
