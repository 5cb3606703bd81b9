#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Markup Builder - StyledDocument to layout-engine input.

Produces a well-formed XHTML document:
- an @page rule carrying the page box in points
- one element per block (title, author line, headings, paragraphs)
- every element fully styled inline, lengths converted to points
- page-break-before on chapter titles, orphans/widows on paragraphs

The output depends only on its inputs, so repeated builds are identical.
"""

from html import escape
from typing import Dict, List

from core.formatting.document_model import TitleBlock
from core.formatting.style_engine import ResolvedStyle, StyledBlock, StyledDocument
from core.formatting.utils.constants import (
    CHAPTER_FIRST_PARAGRAPH,
    CHAPTER_PARAGRAPH,
    CSS_PROPERTIES,
    DIMENSION_ATTRIBUTES,
    MARKUP_ELEMENTS,
)
from core.formatting.utils.units import format_points
from . import style_values
from .page_layout import PageConstraints

PARAGRAPH_CATEGORIES = (CHAPTER_FIRST_PARAGRAPH, CHAPTER_PARAGRAPH)


def css_declarations(style: ResolvedStyle) -> Dict[str, str]:
    """
    CSS properties for one resolved style.

    Lengths become points (em resolved against the block's font size);
    paragraphs always carry orphans/widows, defaulting to 2.
    """
    font_pt = style_values.font_size_pt(style)
    css: Dict[str, str] = {}

    for name, value in style.attributes.items():
        prop = CSS_PROPERTIES.get(name)
        if prop is None:
            continue
        if name == "fontSize":
            css[prop] = format_points(font_pt)
        elif name in DIMENSION_ATTRIBUTES:
            css[prop] = format_points(style_values.length_pt(style, name))
        elif name == "fontFamily":
            css[prop] = f"'{value}'" if " " in value else value
        else:
            css[prop] = value

    if style.category in PARAGRAPH_CATEGORIES:
        css["orphans"] = str(style_values.orphans(style))
        css["widows"] = str(style_values.widows(style))

    return css


def _style_attr(style: ResolvedStyle) -> str:
    css = css_declarations(style)
    return "; ".join(f"{prop}: {css[prop]}" for prop in sorted(css))


def _element(block: StyledBlock, style: ResolvedStyle, text: str) -> str:
    tag, css_class = MARKUP_ELEMENTS[style.category]
    return (
        f'<{tag} class="{css_class}" data-category="{style.category}" '
        f'data-index="{block.index}" style="{escape(_style_attr(style))}">'
        f'{escape(text, quote=False)}</{tag}>'
    )


def page_rule(constraints: PageConstraints) -> str:
    return (
        f"@page {{ size: {constraints.width}pt {constraints.height}pt; "
        f"margin: {constraints.margin_top}pt {constraints.margin_right}pt "
        f"{constraints.margin_bottom}pt {constraints.margin_left}pt; }}"
    )


def build_markup(styled_doc: StyledDocument, constraints: PageConstraints) -> str:
    """
    Build the engine input for a styled document.

    Args:
        styled_doc: Styled document
        constraints: Page box in points

    Returns:
        XHTML string
    """
    body: List[str] = []

    for block in styled_doc.blocks:
        body.append(_element(block, block.style, block.text))
        if isinstance(block.block, TitleBlock) and block.block.author_text and block.author_style:
            body.append(_element(block, block.author_style, block.block.author_text))

    title = styled_doc.title.text if styled_doc.title else styled_doc.template_id
    content = "\n".join(f"    {line}" for line in body)

    return f"""<html>
  <head>
    <meta charset="utf-8" />
    <title>{escape(title, quote=False)}</title>
    <style>
      {page_rule(constraints)}
      body {{ margin: 0; padding: 0; }}
    </style>
  </head>
  <body data-template="{escape(styled_doc.template_id)}">
{content}
  </body>
</html>
"""
