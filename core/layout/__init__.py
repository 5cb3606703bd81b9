#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Core Module

Turns a StyledDocument into publishable artifacts.

Components:
- PageSize / Margins / PageConstraints: page box in author and renderer units
- build_markup: styled markup consumed by layout engines
- LayoutEngine: ReportLab (in-process) or LibreOffice (external process)
- DocxRenderer / PdfRenderer: reflowable and paginated output

Usage:
    from core.layout import DocxRenderer, PdfRenderer

    docx_bytes = DocxRenderer().render(styled_doc)
    pdf_bytes = await PdfRenderer(timeout=60).render(styled_doc)
"""

from .engines import (
    LayoutEngine,
    LayoutSession,
    ReportLabLayoutEngine,
    SofficeLayoutEngine,
    get_layout_engine,
)
from .markup import build_markup
from .page_layout import Margins, PageConstraints, PageSize
from .renderer import BaseRenderer, DocxRenderer, PdfRenderer

__all__ = [
    "LayoutEngine",
    "LayoutSession",
    "ReportLabLayoutEngine",
    "SofficeLayoutEngine",
    "get_layout_engine",
    "build_markup",
    "Margins",
    "PageConstraints",
    "PageSize",
    "BaseRenderer",
    "DocxRenderer",
    "PdfRenderer",
]

__version__ = "1.0.0"
