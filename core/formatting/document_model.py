#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document Model - Structural representation of a manuscript.

A Document is an ordered, immutable sequence of typed blocks produced by a
source decoder:
- TitleBlock: book title and author line
- ChapterHeading: opens a new chapter segment
- SectionHeading: heading inside a chapter
- Paragraph: body text

Styling never touches a Document; the style engine builds a parallel
StyledDocument instead.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .utils.constants import BLOCK_TYPES


# =============================================================================
# BLOCKS
# =============================================================================

@dataclass(frozen=True)
class TitleBlock:
    """Title page: book title plus author line."""
    text: str
    author_text: str = ""

    @property
    def block_type(self) -> str:
        return BLOCK_TYPES["TITLE"]


@dataclass(frozen=True)
class ChapterHeading:
    """Chapter title. Starts a new chapter segment."""
    text: str

    @property
    def block_type(self) -> str:
        return BLOCK_TYPES["CHAPTER"]


@dataclass(frozen=True)
class SectionHeading:
    """Section title within a chapter."""
    text: str

    @property
    def block_type(self) -> str:
        return BLOCK_TYPES["SECTION"]


@dataclass(frozen=True)
class Paragraph:
    """
    Body paragraph.

    is_first_in_chapter is None when the decoder did not annotate the
    paragraph; annotate_chapters() and the style engine fill it in.
    """
    text: str
    is_first_in_chapter: Optional[bool] = None

    @property
    def block_type(self) -> str:
        return BLOCK_TYPES["PARAGRAPH"]


Block = Union[TitleBlock, ChapterHeading, SectionHeading, Paragraph]


# =============================================================================
# DOCUMENT
# =============================================================================

@dataclass(frozen=True)
class Document:
    """Ordered, immutable sequence of blocks."""

    blocks: Tuple[Block, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # Accept any iterable (lists from decoders) but store a tuple
        if not isinstance(self.blocks, tuple):
            object.__setattr__(self, "blocks", tuple(self.blocks))

    @classmethod
    def from_blocks(cls, blocks: Iterable[Block], **metadata) -> "Document":
        return cls(blocks=tuple(blocks), metadata=dict(metadata))

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def __getitem__(self, index: int) -> Block:
        return self.blocks[index]

    @property
    def title(self) -> Optional[TitleBlock]:
        """First title block, if the manuscript has one."""
        return next((b for b in self.blocks if isinstance(b, TitleBlock)), None)

    def chapters(self) -> List[Tuple[Optional[ChapterHeading], List[Block]]]:
        """
        Split the document into chapter segments.

        Blocks before the first ChapterHeading form a leading segment whose
        heading is None (omitted when empty).

        Returns:
            List of (heading, body_blocks) pairs in document order
        """
        segments: List[Tuple[Optional[ChapterHeading], List[Block]]] = []
        heading: Optional[ChapterHeading] = None
        body: List[Block] = []

        for block in self.blocks:
            if isinstance(block, ChapterHeading):
                if heading is not None or body:
                    segments.append((heading, body))
                heading, body = block, []
            else:
                body.append(block)

        if heading is not None or body:
            segments.append((heading, body))
        return segments

    def stats(self) -> Dict[str, int]:
        """Block and word counts."""
        counts = {name: 0 for name in BLOCK_TYPES.values()}
        words = 0
        for block in self.blocks:
            counts[block.block_type] += 1
            words += len(block.text.split())
            if isinstance(block, TitleBlock):
                words += len(block.author_text.split())
        counts["words"] = words
        return counts


def annotate_chapters(document: Document) -> Document:
    """
    Return a copy of the document with explicit first-paragraph flags.

    Exactly the first Paragraph after each ChapterHeading (or after the
    document start when no heading precedes it) is flagged; every other
    paragraph gets False. Decoder-provided flags are recomputed.

    Args:
        document: Source document (left untouched)

    Returns:
        New Document with annotated paragraphs
    """
    annotated: List[Block] = []
    paragraphs_in_chapter = 0

    for block in document.blocks:
        if isinstance(block, ChapterHeading):
            paragraphs_in_chapter = 0
        elif isinstance(block, Paragraph):
            block = replace(block, is_first_in_chapter=(paragraphs_in_chapter == 0))
            paragraphs_in_chapter += 1
        annotated.append(block)

    return Document(blocks=tuple(annotated), metadata=dict(document.metadata))
