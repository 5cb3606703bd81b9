#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Renderer Interface

Defines common interface for all renderers.
"""

from abc import ABC
from typing import List


class BaseRenderer(ABC):
    """
    Abstract base class for document renderers.

    Renderers take a StyledDocument and return artifact bytes. The reflow
    renderer is synchronous; the paginated renderer is a coroutine because
    it drives an external layout engine.

    All renderers must implement:
    - render(): Main rendering method
    - get_supported_formats(): Output formats
    """

    name: str = "base"

    @classmethod
    def supports_format(cls, format_name: str) -> bool:
        """Check if renderer supports a format"""
        return format_name.lower() in cls.get_supported_formats()

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        """Get list of supported formats"""
        return []
