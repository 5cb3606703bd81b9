#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DOCX Renderer - Reflowable output.

Writes a StyledDocument to a Word document with python-docx:
- section page size and margins from page.size / page.margin
- Title/Subtitle styles on the title page, Heading 1 for chapters and
  Heading 2 for sections (navigation pane / TOC keep working)
- every formatting attribute set directly on the paragraph and run, so
  the result does not depend on the built-in style defaults

Pagination is left to the reader; only page-break-before and widow
control are carried over as hints.
"""

import io
from typing import List, Optional

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from config.logging_config import get_logger
from core.formatting.document_model import TitleBlock
from core.formatting.errors import RenderError
from core.formatting.style_engine import ResolvedStyle, StyledDocument
from core.formatting.utils.constants import (
    CHAPTER_FIRST_PARAGRAPH,
    CHAPTER_PARAGRAPH,
    CHAPTER_TITLE,
    SECTION_TITLE,
    TITLE_PAGE_AUTHOR,
    TITLE_PAGE_TITLE,
)
from core.formatting.utils.units import to_points
from .. import style_values
from .base_renderer import BaseRenderer

logger = get_logger(__name__)

# Built-in Word style per category
WORD_STYLES = {
    TITLE_PAGE_TITLE: "Title",
    TITLE_PAGE_AUTHOR: "Subtitle",
    CHAPTER_TITLE: "Heading 1",
    SECTION_TITLE: "Heading 2",
    CHAPTER_FIRST_PARAGRAPH: "Normal",
    CHAPTER_PARAGRAPH: "Normal",
}

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}

HEADING_CATEGORIES = (TITLE_PAGE_TITLE, CHAPTER_TITLE, SECTION_TITLE)


class DocxRenderer(BaseRenderer):
    """
    Reflow renderer.

    Usage:
        renderer = DocxRenderer()
        docx_bytes = renderer.render(styled_doc)
    """

    name = "docx"

    def render(self, styled_doc: StyledDocument) -> bytes:
        """
        Render to DOCX bytes.

        Args:
            styled_doc: Styled document

        Returns:
            DOCX package bytes

        Raises:
            RenderError: If python-docx fails to build the package
        """
        try:
            doc = DocxDocument()
            self._setup_page(doc, styled_doc)

            for block in styled_doc.blocks:
                self._add_paragraph(doc, block.text, block.style)
                if isinstance(block.block, TitleBlock) and block.block.author_text and block.author_style:
                    self._add_paragraph(doc, block.block.author_text, block.author_style)

            self._set_properties(doc, styled_doc)

            buffer = io.BytesIO()
            doc.save(buffer)
        except (KeyError, ValueError) as exc:
            raise RenderError(f"DOCX rendering failed: {exc}", renderer=self.name) from exc

        data = buffer.getvalue()
        logger.info(f"DOCX rendered: {len(styled_doc)} blocks, {len(data)} bytes")
        return data

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["docx"]

    # -------------------------------------------------------------------------

    def _setup_page(self, doc, styled_doc: StyledDocument) -> None:
        """Trim size and margins on every section."""
        size = styled_doc.page_size
        margin = styled_doc.page_margin
        for section in doc.sections:
            section.page_width = Pt(to_points(size["width"]))
            section.page_height = Pt(to_points(size["height"]))
            section.top_margin = Pt(to_points(margin["top"]))
            section.bottom_margin = Pt(to_points(margin["bottom"]))
            section.left_margin = Pt(to_points(margin["left"]))
            section.right_margin = Pt(to_points(margin["right"]))

    def _add_paragraph(self, doc, text: str, style: ResolvedStyle):
        para = doc.add_paragraph(style=WORD_STYLES.get(style.category, "Normal"))
        run = para.add_run(text)
        self._apply_run_formatting(run, style)
        self._apply_paragraph_formatting(para, style)
        return para

    def _apply_run_formatting(self, run, style: ResolvedStyle) -> None:
        """Apply character formatting to a run."""
        family = style.get("fontFamily")
        if family:
            run.font.name = family
            # East Asian fallback slot, otherwise Word keeps the theme font
            run._element.get_or_add_rPr().get_or_add_rFonts().set(qn("w:eastAsia"), family)
        run.font.size = Pt(style_values.font_size_pt(style))
        run.font.bold = style_values.is_bold(style)

        color = style_values.color_hex(style)
        if color:
            run.font.color.rgb = RGBColor.from_string(color)

    def _apply_paragraph_formatting(self, para, style: ResolvedStyle) -> None:
        """Apply paragraph formatting."""
        pf = para.paragraph_format

        # Spacing
        pf.space_before = Pt(style_values.length_pt(style, "marginTop"))
        pf.space_after = Pt(style_values.length_pt(style, "marginBottom"))
        pf.line_spacing = style_values.line_height(style)

        # Indentation
        pf.first_line_indent = Pt(style_values.length_pt(style, "textIndent"))

        # Alignment
        para.alignment = ALIGNMENTS.get(style_values.alignment(style), WD_ALIGN_PARAGRAPH.LEFT)

        # Page control
        pf.page_break_before = style_values.page_break_before(style)
        pf.keep_with_next = style.category in HEADING_CATEGORIES
        pf.widow_control = min(style_values.widows(style), style_values.orphans(style)) >= 2

    def _set_properties(self, doc, styled_doc: StyledDocument) -> None:
        title: Optional[TitleBlock] = styled_doc.title.block if styled_doc.title else None
        props = doc.core_properties
        props.title = title.text if title else ""
        props.author = title.author_text if title else ""
        props.category = styled_doc.template_id
