#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Template Registry - Registration, validation and lookup of templates.

Templates are registered once at startup and looked up per request.
Registration validates the merged rule set, so a template that reaches
the style engine is complete. Lookups never fall back silently: an unknown
id raises TemplateNotFound and the caller decides what to do.
"""

import threading
from typing import Dict, Iterable, List, Optional, Union

from config.logging_config import get_logger
from ..errors import TemplateNotFound, TemplateValidationError
from .base_template import BaseTemplate, Template, validate_rules
from .fiction_template import FictionTemplate
from .nonfiction_template import NonFictionTemplate

logger = get_logger(__name__)


class TemplateRegistry:
    """
    Registry of validated templates.

    Reads are safe from concurrent requests; writes take a lock and swap
    in a new mapping.

    Usage:
        registry = TemplateRegistry.with_defaults()
        template = registry.get("fiction")
        for info in registry.list_templates():
            print(info["id"], info["display_name"])
    """

    def __init__(self, templates: Optional[Iterable[Union[Template, BaseTemplate]]] = None):
        self._templates: Dict[str, Template] = {}
        self._lock = threading.Lock()
        for template in templates or ():
            self.register(template)

    @classmethod
    def default_templates(cls) -> List[BaseTemplate]:
        """Built-in template definitions."""
        return [FictionTemplate(), NonFictionTemplate()]

    @classmethod
    def with_defaults(cls) -> "TemplateRegistry":
        """Registry preloaded with the built-in templates."""
        return cls(cls.default_templates())

    def register(self, template: Union[Template, BaseTemplate]) -> Template:
        """
        Validate and register a template.

        Args:
            template: Built Template or a BaseTemplate definition

        Returns:
            The registered Template

        Raises:
            TemplateValidationError: If the merged rule set is invalid
        """
        if isinstance(template, BaseTemplate):
            try:
                template = template.build()
            except ValueError as exc:
                raise TemplateValidationError(template.template_id, [str(exc)]) from exc

        errors = validate_rules(template.rules)
        if errors:
            raise TemplateValidationError(template.id, errors)

        with self._lock:
            if template.id in self._templates:
                logger.warning(f"Replacing registered template '{template.id}'")
            templates = dict(self._templates)
            templates[template.id] = template
            self._templates = templates

        logger.debug(f"Registered template '{template.id}'")
        return template

    def unregister(self, template_id: str) -> None:
        """Remove a template; unknown ids are ignored."""
        with self._lock:
            if template_id in self._templates:
                templates = dict(self._templates)
                del templates[template_id]
                self._templates = templates

    def get(self, template_id: str) -> Template:
        """
        Get template by id.

        Raises:
            TemplateNotFound: If no template has this id
        """
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateNotFound(template_id, self.template_ids()) from None

    def template_ids(self) -> List[str]:
        """Registered ids in registration order."""
        return list(self._templates)

    def list_templates(self) -> List[Dict[str, str]]:
        """
        Describe registered templates.

        Returns:
            List of {id, display_name, description}; styles omitted
        """
        return [template.info() for template in self._templates.values()]

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)
