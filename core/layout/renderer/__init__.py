#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Renderer Module

Reflowable (DOCX) and paginated (PDF) renderers over a StyledDocument.
"""

from .base_renderer import BaseRenderer
from .docx_renderer import DocxRenderer
from .pdf_renderer import PdfRenderer

__all__ = [
    "BaseRenderer",
    "DocxRenderer",
    "PdfRenderer",
]
