#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Book Templates Module.

Named, validated rule sets for book formatting.

Templates:
- FictionTemplate ("fiction"): novels and narrative fiction
- NonFictionTemplate ("nonFiction"): academic and non-fiction books

Usage:
    from core.formatting.templates import TemplateRegistry

    registry = TemplateRegistry.with_defaults()
    template = registry.get("fiction")
    rules = template.rules["chapter.title"]
"""

from .base_template import (
    BaseTemplate,
    RuleSet,
    Template,
    merge_rules,
    validate_rules,
)
from .fiction_template import FictionTemplate
from .nonfiction_template import NonFictionTemplate
from .template_loader import ConfiguredTemplate, load_templates, templates_from_mapping
from .template_registry import TemplateRegistry

__all__ = [
    # Rule model
    "BaseTemplate",
    "RuleSet",
    "Template",
    "merge_rules",
    "validate_rules",
    # Template implementations
    "FictionTemplate",
    "NonFictionTemplate",
    "ConfiguredTemplate",
    # Loading & registry
    "load_templates",
    "templates_from_mapping",
    "TemplateRegistry",
]
