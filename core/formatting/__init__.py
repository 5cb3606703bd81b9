#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Book Formatting Engine v1.0

Template-driven formatting of manuscripts into print-ready books.

Stages:
1. Decoding - DOCX / plain text manuscript -> Document
2. Templates - validated rule sets (fiction, nonFiction, JSON-defined)
3. Style Application - StyleEngine attaches resolved styles to blocks
4. Rendering - reflowable DOCX and paginated PDF, side by side

The pipeline lives in core.formatting.pipeline (it depends on core.layout,
which itself imports from this package).
"""

__version__ = "1.0.0"

from .errors import (
    DecodeError,
    EngineError,
    FormattingError,
    MissingCategory,
    RenderError,
    RenderTimeout,
    TemplateNotFound,
    TemplateValidationError,
)

# Stage 1: Document model and decoders
from .document_model import (
    Block,
    ChapterHeading,
    Document,
    Paragraph,
    SectionHeading,
    TitleBlock,
    annotate_chapters,
)
from .decoders import DocxSourceDecoder, SourceDecoder, TextSourceDecoder, get_decoder

# Stage 2: Templates
from .templates import (
    BaseTemplate,
    FictionTemplate,
    NonFictionTemplate,
    Template,
    TemplateRegistry,
    load_templates,
    merge_rules,
    validate_rules,
)

# Stage 3: Style engine
from .style_engine import ResolvedStyle, StyledBlock, StyledDocument, StyleEngine

__all__ = [
    # Errors
    "FormattingError",
    "DecodeError",
    "TemplateNotFound",
    "TemplateValidationError",
    "MissingCategory",
    "RenderError",
    "EngineError",
    "RenderTimeout",
    # Document model
    "Block",
    "TitleBlock",
    "ChapterHeading",
    "SectionHeading",
    "Paragraph",
    "Document",
    "annotate_chapters",
    # Decoders
    "SourceDecoder",
    "DocxSourceDecoder",
    "TextSourceDecoder",
    "get_decoder",
    # Templates
    "BaseTemplate",
    "Template",
    "FictionTemplate",
    "NonFictionTemplate",
    "TemplateRegistry",
    "load_templates",
    "merge_rules",
    "validate_rules",
    # Styling
    "StyleEngine",
    "StyledDocument",
    "StyledBlock",
    "ResolvedStyle",
]
