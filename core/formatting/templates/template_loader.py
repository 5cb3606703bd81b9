#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Template Loader - Templates defined as static JSON configuration.

File format:

    {
      "poetry": {
        "displayName": "Poetry",
        "description": "Centered verse, generous leading",
        "overrides": {
          "chapter.paragraph": {"textAlign": "center", "textIndent": "0"}
        }
      }
    }

Each entry's overrides are merged over the base rule set exactly like the
built-in templates.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from config.logging_config import get_logger
from .base_template import BaseTemplate, RuleSet

logger = get_logger(__name__)


class ConfiguredTemplate(BaseTemplate):
    """Template whose identity and override come from configuration."""

    def __init__(self, template_id: str, display_name: str,
                 description: str, overrides: RuleSet):
        self._template_id = template_id
        self._display_name = display_name
        self._description = description
        self._overrides = {cat: dict(attrs) for cat, attrs in overrides.items()}

    @property
    def template_id(self) -> str:
        return self._template_id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def description(self) -> str:
        return self._description

    def overrides(self) -> RuleSet:
        return {cat: dict(attrs) for cat, attrs in self._overrides.items()}


def templates_from_mapping(data: Mapping[str, Any]) -> List[ConfiguredTemplate]:
    """
    Build template definitions from a parsed configuration mapping.

    Raises:
        ValueError: If an entry is not shaped like a template definition
    """
    templates = []
    for template_id, entry in data.items():
        if not isinstance(entry, Mapping):
            raise ValueError(f"Template '{template_id}': definition must be an object")

        overrides = entry.get("overrides", {})
        if not isinstance(overrides, Mapping) or not all(
            isinstance(attrs, Mapping) for attrs in overrides.values()
        ):
            raise ValueError(
                f"Template '{template_id}': overrides must map categories to attribute objects"
            )

        templates.append(ConfiguredTemplate(
            template_id=template_id,
            display_name=entry.get("displayName", template_id),
            description=entry.get("description", ""),
            overrides={cat: dict(attrs) for cat, attrs in overrides.items()},
        ))
    return templates


def load_templates(path: Union[str, Path]) -> List[ConfiguredTemplate]:
    """
    Load template definitions from a JSON file.

    Args:
        path: JSON file path

    Returns:
        List of template definitions (not yet registered)
    """
    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        data: Dict[str, Any] = json.load(handle)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be an object of templates")

    templates = templates_from_mapping(data)
    logger.info(f"Loaded {len(templates)} template definition(s) from {path}")
    return templates
