#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DOCX Decoder

Reads Word manuscripts with python-docx and maps paragraph styles to
blocks:
- "Title"                    -> TitleBlock (author from a following
                                "Subtitle"/"Author" paragraph, else the
                                document's core properties)
- "Heading 1"                -> ChapterHeading
- "Heading 2" .. "Heading 9" -> SectionHeading
- anything else, non-empty   -> Paragraph

Runs, fonts and direct formatting are dropped.
"""

import io
import re
import zipfile
from typing import List, Optional

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from config.logging_config import get_logger
from ..document_model import (
    Block,
    ChapterHeading,
    Document,
    Paragraph,
    SectionHeading,
    TitleBlock,
)
from ..errors import DecodeError
from .base import SourceDecoder

logger = get_logger(__name__)

_HEADING_RE = re.compile(r'^heading\s+(\d)$', re.IGNORECASE)
_AUTHOR_STYLES = {"subtitle", "author"}


class DocxSourceDecoder(SourceDecoder):
    """Decode .docx manuscripts."""

    name = "docx"

    @classmethod
    def supports_format(cls, suffix: str) -> bool:
        return suffix.lower() in cls.get_supported_formats()

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return [".docx"]

    def decode(self, data: bytes, source_name: str = "") -> Document:
        try:
            docx = DocxDocument(io.BytesIO(data))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
            raise DecodeError(f"not a readable DOCX package ({exc})", source_name) from exc

        blocks: List[Block] = []
        title_index: Optional[int] = None

        for para in docx.paragraphs:
            text = para.text.strip()
            if not text:
                continue

            style_name = (para.style.name if para.style is not None else "") or ""
            style_key = style_name.strip().lower()

            if style_key == "title" and title_index is None:
                title_index = len(blocks)
                blocks.append(TitleBlock(text=text))
                continue

            if style_key in _AUTHOR_STYLES and title_index == len(blocks) - 1:
                title = blocks[title_index]
                blocks[title_index] = TitleBlock(text=title.text, author_text=text)
                continue

            heading = _HEADING_RE.match(style_key)
            if heading:
                level = int(heading.group(1))
                blocks.append(ChapterHeading(text=text) if level == 1 else SectionHeading(text=text))
                continue

            blocks.append(Paragraph(text=text))

        if title_index is not None and not blocks[title_index].author_text:
            author = (docx.core_properties.author or "").strip()
            if author:
                blocks[title_index] = TitleBlock(text=blocks[title_index].text, author_text=author)

        logger.debug(f"Decoded {len(blocks)} blocks from {source_name or 'docx source'}")
        return Document.from_blocks(blocks, source=source_name, format="docx")
