#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Style Engine - Attach template styles to manuscript blocks.

Classifies every block of a Document in context and pairs it with the
flattened attributes of the matching template category:

    TitleBlock                     -> titlePage.title (+ titlePage.author)
    ChapterHeading                 -> chapter.title
    SectionHeading                 -> section.title
    Paragraph, first in chapter    -> chapter.firstParagraph
    Paragraph                      -> chapter.paragraph

Each resolved style is the global "text" category overlaid by the block's
own category. apply() is a pure function of (document, template): it reads
both, mutates neither, and returns equal StyledDocuments for equal inputs.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from config.logging_config import get_logger
from .document_model import (
    Block,
    ChapterHeading,
    Document,
    Paragraph,
    SectionHeading,
    TitleBlock,
)
from .errors import MissingCategory
from .templates.base_template import Template
from .utils.constants import (
    CHAPTER_FIRST_PARAGRAPH,
    CHAPTER_PARAGRAPH,
    CHAPTER_TITLE,
    PAGE_MARGIN,
    PAGE_SIZE,
    SECTION_TITLE,
    TEXT,
    TITLE_PAGE_AUTHOR,
    TITLE_PAGE_TITLE,
)

logger = get_logger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class ResolvedStyle:
    """Flattened, read-only attribute mapping for one block."""

    category: str
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResolvedStyle):
            return NotImplemented
        return self.category == other.category and dict(self.attributes) == dict(other.attributes)

    def __hash__(self) -> int:
        return hash((self.category, tuple(sorted(self.attributes.items()))))

    def __getitem__(self, name: str) -> str:
        return self.attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.attributes)


@dataclass(frozen=True)
class StyledBlock:
    """A block paired with its resolved style."""

    index: int
    block: Block
    style: ResolvedStyle
    author_style: Optional[ResolvedStyle] = None  # TitleBlock only

    @property
    def category(self) -> str:
        return self.style.category

    @property
    def text(self) -> str:
        return self.block.text


@dataclass(frozen=True)
class StyledDocument:
    """Document with every block styled under one template."""

    template_id: str
    blocks: Tuple[StyledBlock, ...] = ()
    page_size: Mapping[str, str] = field(default_factory=dict)
    page_margin: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(self.blocks))
        object.__setattr__(self, "page_size", MappingProxyType(dict(self.page_size)))
        object.__setattr__(self, "page_margin", MappingProxyType(dict(self.page_margin)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, StyledDocument):
            return NotImplemented
        return (
            self.template_id == other.template_id
            and self.blocks == other.blocks
            and dict(self.page_size) == dict(other.page_size)
            and dict(self.page_margin) == dict(other.page_margin)
        )

    __hash__ = None

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[StyledBlock]:
        return iter(self.blocks)

    def by_category(self, category: str) -> List[StyledBlock]:
        return [b for b in self.blocks if b.category == category]

    @property
    def title(self) -> Optional[StyledBlock]:
        return next((b for b in self.blocks if isinstance(b.block, TitleBlock)), None)


# =============================================================================
# STYLE ENGINE
# =============================================================================

class StyleEngine:
    """
    Apply a template's rules to a document.

    Usage:
        registry = TemplateRegistry.with_defaults()
        engine = StyleEngine()
        styled_doc = engine.apply(document, registry.get("fiction"))
    """

    def apply(self, document: Document, template: Template) -> StyledDocument:
        """
        Style every block of the document.

        Single forward pass; the only state is the number of paragraphs
        seen since the last chapter heading. Paragraphs annotated by the
        decoder keep their flag, unannotated ones get it computed here.

        Args:
            document: Manuscript structure
            template: Registered template

        Returns:
            New StyledDocument in block order

        Raises:
            MissingCategory: If the template lacks a category a block needs
        """
        styled: List[StyledBlock] = []
        paragraphs_in_chapter = 0

        for index, block in enumerate(document.blocks):
            first = False
            author_style = None

            if isinstance(block, ChapterHeading):
                paragraphs_in_chapter = 0
            elif isinstance(block, Paragraph):
                first = block.is_first_in_chapter
                if first is None:
                    first = paragraphs_in_chapter == 0
                paragraphs_in_chapter += 1

            text_defaults = self._category(template, TEXT, index)
            style = self._resolve(template, self.classify(block, first), text_defaults, index)

            if isinstance(block, TitleBlock):
                author_style = self._resolve(template, TITLE_PAGE_AUTHOR, text_defaults, index)

            styled.append(StyledBlock(
                index=index,
                block=block,
                style=style,
                author_style=author_style,
            ))

        logger.debug(f"Styled {len(styled)} blocks with template '{template.id}'")

        return StyledDocument(
            template_id=template.id,
            blocks=tuple(styled),
            page_size=self._category(template, PAGE_SIZE),
            page_margin=self._category(template, PAGE_MARGIN),
        )

    @staticmethod
    def classify(block: Block, is_first_in_chapter: bool = False) -> str:
        """
        Style category for a block.

        Args:
            block: Block to classify
            is_first_in_chapter: Resolved first-paragraph flag (paragraphs only)

        Returns:
            Category name
        """
        if isinstance(block, TitleBlock):
            return TITLE_PAGE_TITLE
        if isinstance(block, ChapterHeading):
            return CHAPTER_TITLE
        if isinstance(block, SectionHeading):
            return SECTION_TITLE
        if isinstance(block, Paragraph):
            return CHAPTER_FIRST_PARAGRAPH if is_first_in_chapter else CHAPTER_PARAGRAPH
        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def _resolve(self, template: Template, category: str,
                 text_defaults: Mapping[str, str], index: int) -> ResolvedStyle:
        attributes = dict(text_defaults)
        attributes.update(self._category(template, category, index))
        return ResolvedStyle(category=category, attributes=attributes)

    @staticmethod
    def _category(template: Template, category: str,
                  index: Optional[int] = None) -> Mapping[str, str]:
        try:
            return template.rules[category]
        except KeyError:
            raise MissingCategory(category, template.id, index) from None
