#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PDF Renderer - Fixed-layout output.

Converts the template's page box to whole points, builds the styled
markup and hands both to a layout engine session. The whole acquire +
render step runs under a time limit; the session is released on every
exit path, including the timeout.
"""

import asyncio
from typing import List, Optional

from config.constants import RENDER_TIMEOUT_SECONDS
from config.logging_config import get_logger
from core.formatting.errors import EngineError, RenderError, RenderTimeout
from core.formatting.style_engine import StyledDocument
from ..engines import LayoutEngine, ReportLabLayoutEngine
from ..markup import build_markup
from ..page_layout import Margins, PageConstraints, PageSize
from .base_renderer import BaseRenderer

logger = get_logger(__name__)


class PdfRenderer(BaseRenderer):
    """
    Paginated renderer.

    Usage:
        renderer = PdfRenderer(engine=ReportLabLayoutEngine(), timeout=60)
        pdf_bytes = await renderer.render(styled_doc)
    """

    name = "pdf"

    def __init__(self, engine: Optional[LayoutEngine] = None,
                 timeout: float = RENDER_TIMEOUT_SECONDS):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.engine = engine or ReportLabLayoutEngine()
        self.timeout = timeout

    async def render(
        self,
        styled_doc: StyledDocument,
        page_size: Optional[PageSize] = None,
        margins: Optional[Margins] = None,
    ) -> bytes:
        """
        Render to PDF bytes.

        Args:
            styled_doc: Styled document
            page_size: Trim size override (defaults to the template's page.size)
            margins: Margin override (defaults to the template's page.margin)

        Returns:
            PDF bytes

        Raises:
            RenderError: If the page size and margins do not describe a usable page
            RenderTimeout: If the engine does not finish within the time limit
            EngineError: If the engine fails or returns an empty artifact
        """
        try:
            constraints = PageConstraints.from_dimensions(
                page_size or PageSize.from_rules(styled_doc.page_size),
                margins or Margins.from_rules(styled_doc.page_margin),
            )
        except ValueError as exc:
            raise RenderError(f"Invalid page box: {exc}", renderer=self.name) from exc

        markup = build_markup(styled_doc, constraints)

        logger.debug(
            f"PDF render via {self.engine.name}: "
            f"{constraints.width}x{constraints.height}pt, timeout {self.timeout:g}s"
        )

        try:
            data = await asyncio.wait_for(self._layout(markup, constraints), self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"{self.engine.name} layout timed out after {self.timeout:g}s")
            raise RenderTimeout(self.timeout, renderer=self.engine.name) from None
        except RenderError:
            raise
        except Exception as exc:
            raise EngineError(f"Layout engine failed: {exc}", renderer=self.engine.name) from exc

        if not data:
            raise EngineError("Layout engine returned an empty document", renderer=self.engine.name)

        logger.info(f"PDF rendered: {len(styled_doc)} blocks, {len(data)} bytes")
        return data

    async def _layout(self, markup: str, constraints: PageConstraints) -> bytes:
        async with self.engine.session() as session:
            return await session.render(markup, constraints)

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["pdf"]
