#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReportLab Layout Engine

In-process layout engine built on ReportLab platypus. Reads the markup
produced by build_markup() and paints it onto fixed pages:
- page size and margins from PageConstraints
- font family/size/weight, colour, alignment, indent, spacing, leading
- page-break-before: always -> new page (except at document start)
- orphans/widows: at least N lines kept on each side of a page break
- margin-top on a block that opens a page -> explicit Spacer, since
  frames drop spaceBefore at the top of a page
- headings kept with the following block

Documents are built with invariant=1, so identical input gives
byte-identical PDFs. Layout runs in a worker thread to keep the event
loop free for the caller's timeout.
"""

import asyncio
import io
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Tuple
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

from config.constants import DEFAULT_BASE_FONT_PT, DEFAULT_LINE_HEIGHT
from config.logging_config import get_logger
from core.formatting.errors import EngineError
from core.formatting.utils.constants import DEFAULT_PDF_FONTS, PDF_BASE_FONTS
from ..page_layout import PageConstraints
from .base import LayoutEngine, LayoutSession

logger = get_logger(__name__)

ALIGNMENTS = {
    "left": TA_LEFT,
    "center": TA_CENTER,
    "right": TA_RIGHT,
    "justify": TA_JUSTIFY,
}

HEADING_TAGS = ("h1", "h2", "h3")

_POINTS_RE = re.compile(r"^(-?\d+(?:\.\d+)?)pt$")


def parse_style_attribute(value: str) -> Dict[str, str]:
    """'font-size: 12pt; text-align: center' -> {'font-size': '12pt', ...}"""
    declarations: Dict[str, str] = {}
    for part in value.split(";"):
        if ":" not in part:
            continue
        prop, _, val = part.partition(":")
        declarations[prop.strip().lower()] = val.strip()
    return declarations


def _points(value: str, default: float = 0.0) -> float:
    match = _POINTS_RE.match(value.strip()) if value else None
    return float(match.group(1)) if match else default


def _font_names(family: str) -> Tuple[str, str]:
    key = family.strip().strip("'\"").lower()
    return PDF_BASE_FONTS.get(key, DEFAULT_PDF_FONTS)


def paragraph_style(name: str, css: Dict[str, str], keep_with_next: bool = False) -> ParagraphStyle:
    """Map inline CSS onto a ReportLab ParagraphStyle."""
    regular, bold = _font_names(css.get("font-family", ""))
    font_size = _points(css.get("font-size", ""), DEFAULT_BASE_FONT_PT)
    try:
        leading = float(css.get("line-height", DEFAULT_LINE_HEIGHT))
    except ValueError:
        leading = DEFAULT_LINE_HEIGHT
    orphans = int(css.get("orphans", "1"))
    widows = int(css.get("widows", "1"))

    options: Dict[str, Any] = {
        "fontName": bold if css.get("font-weight") == "bold" else regular,
        "fontSize": font_size,
        "leading": font_size * leading,
        "alignment": ALIGNMENTS.get(css.get("text-align", "left"), TA_LEFT),
        "firstLineIndent": _points(css.get("text-indent", "")),
        "spaceBefore": _points(css.get("margin-top", "")),
        "spaceAfter": _points(css.get("margin-bottom", "")),
        "keepWithNext": 1 if keep_with_next else 0,
        "allowOrphans": 0 if orphans >= 2 else 1,
        "allowWidows": 0 if widows >= 2 else 1,
    }
    if css.get("color"):
        options["textColor"] = HexColor(css["color"])

    style = ParagraphStyle(name, **options)
    style.minOrphans = orphans
    style.minWidows = widows
    return style


class KeepLinesParagraph(Paragraph):
    """
    Paragraph that keeps at least style.minOrphans lines before a page
    break and style.minWidows lines after it.

    ReportLab's own allowOrphans/allowWidows flags only guard a single
    stranded line; larger minimums are enforced here by choosing the
    split point before handing off to Paragraph.split().
    """

    def split(self, availWidth, availHeight):
        orphans = getattr(self.style, "minOrphans", 1)
        widows = getattr(self.style, "minWidows", 1)
        if orphans <= 2 and widows <= 2:
            return super().split(availWidth, availHeight)

        if not hasattr(self, "blPara"):
            self.wrap(availWidth, availHeight)
        leading = self.style.leading
        total = len(self.blPara.lines)
        fits = int(availHeight / leading)
        if total <= fits:
            return super().split(availWidth, availHeight)

        keep = min(fits, total - widows)
        if keep < orphans:
            return []
        # half a line of slack so the parent lands on exactly `keep` lines
        return super().split(availWidth, (keep + 0.5) * leading)


def build_story(markup: str) -> Tuple[List[Any], str]:
    """
    Parse markup into platypus flowables.

    Returns:
        (story, document title)

    Raises:
        EngineError: If the markup is not well-formed
    """
    try:
        root = ET.fromstring(markup)
    except ET.ParseError as exc:
        raise EngineError(f"Malformed layout markup: {exc}", renderer="reportlab") from exc

    title = (root.findtext("head/title") or "").strip()
    body = root.find("body")
    story: List[Any] = []
    if body is None:
        return story, title

    for position, element in enumerate(body):
        css = parse_style_attribute(element.get("style", ""))
        opens_page = not story
        if css.get("page-break-before") == "always" and story:
            story.append(PageBreak())
            opens_page = True

        text = "".join(element.itertext()).strip()
        style = paragraph_style(
            f"{element.get('class', element.tag)}-{position}",
            css,
            keep_with_next=element.tag in HEADING_TAGS,
        )
        space_before = style.spaceBefore
        if opens_page and space_before > 0:
            # frames drop spaceBefore for the first flowable on a page
            story.append(Spacer(0, space_before))
            style.spaceBefore = 0
        story.append(KeepLinesParagraph(escape(text), style))

    return story, title


def render_pdf(markup: str, constraints: PageConstraints) -> bytes:
    """Lay out the markup on fixed pages and return the PDF bytes."""
    story, title = build_story(markup)
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=(constraints.width, constraints.height),
        topMargin=constraints.margin_top,
        bottomMargin=constraints.margin_bottom,
        leftMargin=constraints.margin_left,
        rightMargin=constraints.margin_right,
        title=title,
        invariant=1,
    )
    doc.build(story)
    logger.debug(f"ReportLab laid out {len(story)} flowables on {doc.page} page(s)")
    return buffer.getvalue()


class ReportLabLayoutSession(LayoutSession):
    """Session over the in-process ReportLab engine."""

    engine_name = "reportlab"

    async def render(self, markup: str, constraints: PageConstraints) -> bytes:
        try:
            return await asyncio.to_thread(render_pdf, markup, constraints)
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(f"ReportLab layout failed: {exc}", renderer=self.engine_name) from exc


class ReportLabLayoutEngine(LayoutEngine):
    """
    Default layout engine.

    Usage:
        engine = ReportLabLayoutEngine()
        async with engine.session() as session:
            pdf = await session.render(markup, constraints)
    """

    name = "reportlab"

    async def open_session(self) -> LayoutSession:
        return ReportLabLayoutSession()
