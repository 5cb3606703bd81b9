#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plain Text / Markdown Decoder

Recognises:
- "Title: ..." and "Author: ..." header lines before any content
- "# Heading" and chapter markers ("Chapter 1: ...", "CHAPTER 2") as chapters
- "## Heading" (and deeper) as sections
- Paragraphs separated by blank lines; wrapped lines are joined
"""

import re
from typing import List, Optional

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


class TextSourceDecoder(SourceDecoder):
    """Decode UTF-8 plain text or Markdown-style manuscripts."""

    name = "text"

    # Chapter detection patterns
    CHAPTER_PATTERNS = [
        r'^Chapter\s+(\d+|[IVXLC]+)\b.*$',          # Chapter 1: Title, CHAPTER IV
        r'^(Prologue|Epilogue|Preface|Foreword|Afterword)\s*$',
    ]
    MAX_MARKER_LENGTH = 80
    HEADER_PATTERN = re.compile(r'^(title|author)\s*:\s*(.+)$', re.IGNORECASE)
    MARKDOWN_HEADING = re.compile(r'^(#{1,6})\s+(.+?)\s*#*\s*$')

    def __init__(self):
        self.chapter_regex = [re.compile(pattern, re.IGNORECASE) for pattern in self.CHAPTER_PATTERNS]

    @classmethod
    def supports_format(cls, suffix: str) -> bool:
        return suffix.lower() in cls.get_supported_formats()

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return [".txt", ".md", ".markdown"]

    def decode(self, data: bytes, source_name: str = "") -> Document:
        try:
            content = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"not valid UTF-8 text ({exc.reason} at byte {exc.start})",
                              source_name) from exc

        if "\x00" in content:
            raise DecodeError("binary content in text manuscript", source_name)

        lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        title, author, body_start = self._read_header(lines)

        blocks: List[Block] = []
        if title:
            blocks.append(TitleBlock(text=title, author_text=author or ""))

        pending: List[str] = []

        def flush():
            if not pending:
                return
            if len(pending) == 1 and self._is_chapter_marker(pending[0]):
                blocks.append(ChapterHeading(text=pending[0]))
            else:
                blocks.append(Paragraph(text=" ".join(pending)))
            pending.clear()

        for raw in lines[body_start:]:
            line = raw.strip()
            if not line:
                flush()
                continue

            heading = self.MARKDOWN_HEADING.match(line)
            if heading:
                flush()
                text = heading.group(2).strip()
                if len(heading.group(1)) == 1:
                    blocks.append(ChapterHeading(text=text))
                else:
                    blocks.append(SectionHeading(text=text))
                continue

            pending.append(line)

        flush()

        logger.debug(f"Decoded {len(blocks)} blocks from {source_name or 'text source'}")
        return Document.from_blocks(blocks, source=source_name, format="text")

    def _is_chapter_marker(self, line: str) -> bool:
        # A marker stands alone as a short one-line paragraph
        if len(line) > self.MAX_MARKER_LENGTH:
            return False
        return any(regex.match(line) for regex in self.chapter_regex)

    def _read_header(self, lines: List[str]):
        """Leading Title:/Author: lines (blank lines allowed between)."""
        fields = {}
        index = 0
        for index, raw in enumerate(lines):
            line = raw.strip()
            if not line:
                continue
            match = self.HEADER_PATTERN.match(line)
            if not match:
                break
            fields[match.group(1).lower()] = match.group(2).strip()
        else:
            index = len(lines)

        title: Optional[str] = fields.get("title")
        if not fields:
            return None, None, 0
        return title, fields.get("author"), index
