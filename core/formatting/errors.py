#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting Errors

Error taxonomy shared by the decoders, the template registry, the style
engine, the renderers and the pipeline. Every error carries enough context
(block index, category, template id, engine) to diagnose without going
back to the manuscript.
"""

from typing import List, Optional


class FormattingError(Exception):
    """Base error for the formatting pipeline"""
    pass


class DecodeError(FormattingError):
    """Raised when a manuscript cannot be decoded into a Document"""

    def __init__(self, message: str, source_name: Optional[str] = None):
        self.source_name = source_name
        if source_name:
            message = f"{source_name}: {message}"
        super().__init__(message)


class TemplateNotFound(FormattingError, KeyError):
    """Raised when a template id is not registered"""

    def __init__(self, template_id: str, available: Optional[List[str]] = None):
        self.template_id = template_id
        self.available = list(available or [])
        super().__init__(
            f"Unknown template: '{template_id}'. "
            f"Available templates: {self.available}"
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class TemplateValidationError(FormattingError):
    """Raised when a template's merged rule set is incomplete or malformed"""

    def __init__(self, template_id: str, errors: List[str]):
        self.template_id = template_id
        self.errors = errors
        super().__init__(f"Template '{template_id}' is invalid: {errors}")


class MissingCategory(FormattingError):
    """Raised when a block needs a style category the template lacks"""

    def __init__(self, category: str, template_id: str, block_index: Optional[int] = None):
        self.category = category
        self.template_id = template_id
        self.block_index = block_index
        location = f" (block {block_index})" if block_index is not None else ""
        super().__init__(
            f"Template '{template_id}' has no '{category}' category{location}"
        )


class RenderError(FormattingError):
    """Base error for renderer failures"""

    def __init__(self, message: str, renderer: Optional[str] = None):
        self.renderer = renderer
        super().__init__(message)


class EngineError(RenderError):
    """Raised when the external layout engine fails or returns nothing"""
    pass


class RenderTimeout(RenderError):
    """Raised when the external layout engine exceeds its time limit"""

    def __init__(self, timeout: float, renderer: Optional[str] = None):
        self.timeout = timeout
        super().__init__(f"Layout engine timed out after {timeout:g}s", renderer)
