#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting Constants - Print-on-demand book styling standards.

Based on KDP paperback guidelines:
- 6" x 9" trim size
- 0.75" margins on every side
- New chapters on a new page
- Unindented first paragraph after a chapter heading
"""

# =============================================================================
# BLOCK TYPES
# =============================================================================

BLOCK_TYPES = {
    "TITLE": "title",
    "CHAPTER": "chapter",
    "SECTION": "section",
    "PARAGRAPH": "paragraph",
}


# =============================================================================
# STYLE CATEGORIES
# =============================================================================

TITLE_PAGE_TITLE = "titlePage.title"
TITLE_PAGE_AUTHOR = "titlePage.author"
CHAPTER_TITLE = "chapter.title"
CHAPTER_FIRST_PARAGRAPH = "chapter.firstParagraph"
CHAPTER_PARAGRAPH = "chapter.paragraph"
SECTION_TITLE = "section.title"
TEXT = "text"  # global defaults
PAGE_MARGIN = "page.margin"
PAGE_SIZE = "page.size"

# Closed set: every template must define all of these after merging
REQUIRED_CATEGORIES = (
    TITLE_PAGE_TITLE,
    TITLE_PAGE_AUTHOR,
    CHAPTER_TITLE,
    CHAPTER_FIRST_PARAGRAPH,
    CHAPTER_PARAGRAPH,
    SECTION_TITLE,
    TEXT,
    PAGE_MARGIN,
    PAGE_SIZE,
)

# Categories that style blocks (page.* only feed the page box)
BLOCK_CATEGORIES = REQUIRED_CATEGORIES[:7]


# =============================================================================
# ATTRIBUTE TYPES
# =============================================================================

DIMENSION_UNITS = ("in", "em", "pt")

DIMENSION_ATTRIBUTES = frozenset({
    "fontSize",
    "marginTop",
    "marginBottom",
    "textIndent",
    "top",
    "right",
    "bottom",
    "left",
    "width",
    "height",
})

NUMBER_ATTRIBUTES = frozenset({"lineHeight"})

INTEGER_ATTRIBUTES = frozenset({"orphans", "widows"})

TOKEN_ATTRIBUTES = {
    "textAlign": ("left", "center", "right", "justify"),
    "fontWeight": ("normal", "bold"),
    "pageBreakBefore": ("always", "auto", "avoid"),
}

COLOR_ATTRIBUTES = frozenset({"color"})

TEXT_ATTRIBUTES = frozenset({"fontFamily"})

# Attributes every page category must carry
PAGE_MARGIN_SIDES = ("top", "right", "bottom", "left")
PAGE_SIZE_AXES = ("width", "height")


# =============================================================================
# BASE RULE SET
# =============================================================================

BASE_FORMATTING_RULES = {
    # Front matter
    TITLE_PAGE_TITLE: {
        "fontSize": "24pt",
        "fontWeight": "bold",
        "textAlign": "center",
        "marginTop": "2in",
        "marginBottom": "1in",
    },
    TITLE_PAGE_AUTHOR: {
        "fontSize": "16pt",
        "textAlign": "center",
        "marginBottom": "2in",
    },

    # Chapters
    CHAPTER_TITLE: {
        "fontSize": "16pt",
        "fontWeight": "bold",
        "textAlign": "center",
        "marginTop": "1in",
        "marginBottom": "0.5in",
        "pageBreakBefore": "always",
    },
    CHAPTER_FIRST_PARAGRAPH: {
        "textIndent": "0",
        "marginTop": "0.5in",
    },
    CHAPTER_PARAGRAPH: {
        "textIndent": "0.25in",
        "lineHeight": "1.15",
        "marginBottom": "0.5em",
        "orphans": "2",
        "widows": "2",
    },

    # Sections
    SECTION_TITLE: {
        "fontSize": "14pt",
        "fontWeight": "bold",
        "marginTop": "0.5in",
        "marginBottom": "0.25in",
    },

    # Global text defaults
    TEXT: {
        "fontFamily": "Times New Roman",
        "fontSize": "12pt",
        "color": "#000000",
    },

    # Page layout
    PAGE_MARGIN: {
        "top": "0.75in",
        "bottom": "0.75in",
        "left": "0.75in",
        "right": "0.75in",
    },
    PAGE_SIZE: {
        "width": "6in",
        "height": "9in",
    },
}


# =============================================================================
# CSS / RENDERER MAPPINGS
# =============================================================================

# camelCase rule attribute -> CSS property
CSS_PROPERTIES = {
    "fontFamily": "font-family",
    "fontSize": "font-size",
    "fontWeight": "font-weight",
    "color": "color",
    "textAlign": "text-align",
    "textIndent": "text-indent",
    "lineHeight": "line-height",
    "marginTop": "margin-top",
    "marginBottom": "margin-bottom",
    "pageBreakBefore": "page-break-before",
    "orphans": "orphans",
    "widows": "widows",
}

# Markup element + class per style category
MARKUP_ELEMENTS = {
    TITLE_PAGE_TITLE: ("h1", "title-page-title"),
    TITLE_PAGE_AUTHOR: ("p", "title-page-author"),
    CHAPTER_TITLE: ("h1", "chapter-title"),
    SECTION_TITLE: ("h2", "section-title"),
    CHAPTER_FIRST_PARAGRAPH: ("p", "chapter-first-paragraph"),
    CHAPTER_PARAGRAPH: ("p", "chapter-paragraph"),
}

# Font family -> PDF base-14 fonts (regular, bold)
PDF_BASE_FONTS = {
    "times new roman": ("Times-Roman", "Times-Bold"),
    "times": ("Times-Roman", "Times-Bold"),
    "georgia": ("Times-Roman", "Times-Bold"),
    "garamond": ("Times-Roman", "Times-Bold"),
    "serif": ("Times-Roman", "Times-Bold"),
    "helvetica": ("Helvetica", "Helvetica-Bold"),
    "arial": ("Helvetica", "Helvetica-Bold"),
    "sans-serif": ("Helvetica", "Helvetica-Bold"),
    "courier": ("Courier", "Courier-Bold"),
    "courier new": ("Courier", "Courier-Bold"),
    "monospace": ("Courier", "Courier-Bold"),
}
DEFAULT_PDF_FONTS = ("Times-Roman", "Times-Bold")
