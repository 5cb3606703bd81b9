#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting Pipeline - Manuscript in, print-ready artifacts out.

Stages:
1. Decode      - manuscript bytes -> Document
2. Template    - resolve the requested template (documented fallback)
3. Style       - StyleEngine.apply(document, template)
4. Render      - DOCX and PDF renderers run concurrently

A request either produces both artifacts or raises; partial results are
never returned.
"""

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from config.constants import DEFAULT_TEMPLATE_ID, RENDER_TIMEOUT_SECONDS
from config.logging_config import get_logger
from core.layout.engines import LayoutEngine, get_layout_engine
from core.layout.renderer import DocxRenderer, PdfRenderer
from .decoders import DocxSourceDecoder, SourceDecoder, get_decoder
from .document_model import Document
from .style_engine import StyleEngine, StyledDocument
from .templates import Template, TemplateRegistry, load_templates

logger = get_logger(__name__)


@dataclass(frozen=True)
class FormattingResult:
    """Both artifacts of one formatting request."""
    docx: bytes
    pdf: bytes
    template_id: str     # template actually applied
    fell_back: bool = False  # requested id was unknown

    def summary(self) -> Dict[str, object]:
        return {
            "template_id": self.template_id,
            "fell_back": self.fell_back,
            "docx_bytes": len(self.docx),
            "pdf_bytes": len(self.pdf),
        }


class FormattingPipeline:
    """
    Template-driven book formatter.

    Usage:
        pipeline = FormattingPipeline()
        result = await pipeline.format(manuscript_bytes, "fiction")
        Path("book.docx").write_bytes(result.docx)
        Path("book.pdf").write_bytes(result.pdf)
    """

    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        decoder: Optional[SourceDecoder] = None,
        engine: Optional[LayoutEngine] = None,
        default_template_id: str = DEFAULT_TEMPLATE_ID,
        render_timeout: float = RENDER_TIMEOUT_SECONDS,
    ):
        self.registry = registry or TemplateRegistry.with_defaults()
        self.decoder = decoder or DocxSourceDecoder()
        self.default_template_id = default_template_id
        self.style_engine = StyleEngine()
        self.docx_renderer = DocxRenderer()
        self.pdf_renderer = PdfRenderer(engine=engine, timeout=render_timeout)

    @classmethod
    def from_settings(cls, settings=None) -> "FormattingPipeline":
        """
        Build a pipeline from application settings.

        Extra templates from settings.templates_file are registered on top
        of the built-in ones.
        """
        if settings is None:
            from config.settings import settings

        registry = TemplateRegistry.with_defaults()
        if settings.templates_file:
            for template in load_templates(settings.templates_file):
                registry.register(template)

        engine = get_layout_engine(
            settings.layout_engine,
            soffice_path=settings.soffice_path,
            temp_dir=settings.temp_dir,
        )
        return cls(
            registry=registry,
            engine=engine,
            default_template_id=settings.default_template,
            render_timeout=settings.render_timeout_seconds,
        )

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def resolve_template(self, template_id: Optional[str]) -> Tuple[Template, bool]:
        """
        Resolve a requested template id.

        Unknown (or missing) ids fall back to the default template with a
        warning. The default itself must be registered.

        Returns:
            (template, fell_back)

        Raises:
            TemplateNotFound: If the default template is not registered
        """
        if template_id and template_id in self.registry:
            return self.registry.get(template_id), False

        logger.warning(
            f"Template '{template_id}' not found, "
            f"falling back to '{self.default_template_id}'"
        )
        return self.registry.get(self.default_template_id), True

    def available_templates(self) -> List[Dict[str, str]]:
        """Registered templates as {id, display_name, description}."""
        return self.registry.list_templates()

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    async def format(
        self,
        source: bytes,
        template_id: Optional[str] = None,
        source_name: str = "",
        decoder: Optional[SourceDecoder] = None,
    ) -> FormattingResult:
        """
        Format a manuscript.

        Args:
            source: Manuscript bytes
            template_id: Requested template (unknown ids fall back)
            source_name: File name used in error messages
            decoder: Decoder override for this request

        Returns:
            FormattingResult with both artifacts

        Raises:
            DecodeError: If the manuscript cannot be decoded
            TemplateNotFound: If the default template is not registered
            MissingCategory: If a block needs a category the template lacks
            RenderError: If either renderer fails (RenderTimeout on timeout)
        """
        document = (decoder or self.decoder).decode(source, source_name=source_name)
        return await self.format_document(document, template_id)

    async def format_document(
        self,
        document: Document,
        template_id: Optional[str] = None,
    ) -> FormattingResult:
        """Format an already decoded Document."""
        start_time = time.time()

        template, fell_back = self.resolve_template(template_id)
        styled_doc = self.style_engine.apply(document, template)

        docx, pdf = await self._render(styled_doc)

        logger.info(
            f"Formatted {len(document)} blocks with '{template.id}' "
            f"in {time.time() - start_time:.2f}s"
        )
        return FormattingResult(docx=docx, pdf=pdf, template_id=template.id, fell_back=fell_back)

    async def format_file(
        self,
        path: Union[str, Path],
        template_id: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> Dict[str, Path]:
        """
        Format a manuscript file and write <stem>.docx and <stem>.pdf.

        Args:
            path: Manuscript path (.docx, .txt, .md)
            template_id: Requested template
            output_dir: Target directory (defaults to the manuscript's directory)

        Returns:
            {"docx": path, "pdf": path}
        """
        path = Path(path)
        decoder = get_decoder(path)
        result = await self.format(
            path.read_bytes(), template_id, source_name=path.name, decoder=decoder,
        )

        out_dir = Path(output_dir) if output_dir else path.parent
        out_dir.mkdir(parents=True, exist_ok=True)
        outputs = {
            "docx": out_dir / f"{path.stem}.docx",
            "pdf": out_dir / f"{path.stem}.pdf",
        }
        outputs["docx"].write_bytes(result.docx)
        outputs["pdf"].write_bytes(result.pdf)

        logger.info(f"Wrote {outputs['docx']} and {outputs['pdf']}")
        return outputs

    async def _render(self, styled_doc: StyledDocument) -> Tuple[bytes, bytes]:
        """Run both renderers concurrently; any failure fails the request."""
        results = await asyncio.gather(
            asyncio.to_thread(self.docx_renderer.render, styled_doc),
            self.pdf_renderer.render(styled_doc),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            for error in errors[1:]:
                logger.error(f"Additional render failure: {error}")
            raise errors[0]

        docx, pdf = results
        return docx, pdf
