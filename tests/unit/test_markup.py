"""
Unit tests for page layout conversion and the layout-engine markup.
"""

import xml.etree.ElementTree as ET

import pytest

from core.layout import style_values
from core.layout.markup import build_markup, css_declarations, page_rule
from core.layout.page_layout import Margins, PageConstraints, PageSize
from core.formatting.style_engine import ResolvedStyle


@pytest.fixture
def constraints(styled_book):
    return PageConstraints.from_dimensions(
        PageSize.from_rules(styled_book.page_size),
        Margins.from_rules(styled_book.page_margin),
    )


class TestPageConstraints:

    def test_six_by_nine(self, constraints):
        assert constraints.to_dict() == {
            "width": 432,
            "height": 648,
            "margin_top": 54,
            "margin_right": 54,
            "margin_bottom": 54,
            "margin_left": 54,
        }
        assert constraints.content_width == 324
        assert constraints.content_height == 540

    def test_truncation(self):
        constraints = PageConstraints.from_dimensions(
            PageSize("5.06in", "7.81in"),
            Margins("0.3in", "0.3in", "0.3in", "0.3in"),
        )
        assert (constraints.width, constraints.height) == (364, 562)
        assert constraints.margin_top == 21

    def test_margins_too_large(self):
        with pytest.raises(ValueError):
            PageConstraints.from_dimensions(
                PageSize("2in", "2in"),
                Margins("1in", "1in", "1in", "1in"),
            )

    def test_missing_side(self):
        with pytest.raises(ValueError):
            Margins.from_rules({"top": "1in", "bottom": "1in"})
        with pytest.raises(ValueError):
            PageSize.from_rules({"width": "6in"})


class TestStyleValues:

    def test_em_relative_to_block_font(self):
        style = ResolvedStyle("chapter.paragraph", {"fontSize": "16pt", "marginBottom": "0.5em"})
        assert style_values.length_pt(style, "marginBottom") == 8.0

    def test_defaults(self):
        style = ResolvedStyle("chapter.paragraph", {})
        assert style_values.font_size_pt(style) == 12.0
        assert style_values.widows(style) == 2
        assert style_values.orphans(style) == 2
        assert style_values.alignment(style) == "left"
        assert style_values.color_hex(style) is None
        assert not style_values.page_break_before(style)

    def test_color(self):
        assert style_values.color_hex(ResolvedStyle("text", {"color": "#1a2b3c"})) == "1A2B3C"


class TestMarkup:

    def test_well_formed(self, styled_book, constraints):
        root = ET.fromstring(build_markup(styled_book, constraints))
        assert root.tag == "html"
        assert root.findtext("head/title") == "The Lighthouse Keeper"
        assert root.find("body").get("data-template") == "fiction"

    def test_block_order_and_author_line(self, styled_book, constraints):
        body = ET.fromstring(build_markup(styled_book, constraints)).find("body")
        classes = [el.get("class") for el in body]

        assert classes == [
            "title-page-title",
            "title-page-author",
            "chapter-title",
            "chapter-first-paragraph",
            "chapter-paragraph",
            "section-title",
            "chapter-paragraph",
            "chapter-title",
            "chapter-first-paragraph",
        ]
        assert body[1].text == "Mara Lind"
        assert body[2].tag == "h1"

    def test_page_rule(self, constraints):
        assert page_rule(constraints) == (
            "@page { size: 432pt 648pt; margin: 54pt 54pt 54pt 54pt; }"
        )

    def test_chapter_title_breaks_page(self, styled_book, constraints):
        body = ET.fromstring(build_markup(styled_book, constraints)).find("body")
        for element in body.findall("h1[@class='chapter-title']"):
            assert "page-break-before: always" in element.get("style")

    def test_lengths_in_points(self, styled_book):
        chapter = styled_book.by_category("chapter.title")[0]
        css = css_declarations(chapter.style)
        assert css["font-size"] == "18pt"
        assert css["margin-top"] == "108pt"  # 1.5in
        assert css["font-family"] == "'Times New Roman'"

    def test_paragraphs_carry_orphans_widows(self, styled_book):
        first = styled_book.by_category("chapter.firstParagraph")[0]
        body = styled_book.by_category("chapter.paragraph")[0]

        # firstParagraph defines neither; the default minimum applies
        assert css_declarations(first.style)["orphans"] == "2"
        assert css_declarations(first.style)["widows"] == "2"
        assert css_declarations(body.style)["margin-bottom"] == "6pt"  # 0.5em of 12pt
        assert css_declarations(body.style)["text-indent"] == "18pt"

    def test_headings_have_no_widow_rules(self, styled_book):
        chapter = styled_book.by_category("chapter.title")[0]
        assert "orphans" not in css_declarations(chapter.style)

    def test_text_escaped(self, fiction_template, constraints):
        from core.formatting.document_model import Document, Paragraph
        from core.formatting.style_engine import StyleEngine

        styled = StyleEngine().apply(
            Document.from_blocks([Paragraph("Salt & <pepper>")]), fiction_template
        )
        root = ET.fromstring(build_markup(styled, constraints))
        assert root.find("body")[0].text == "Salt & <pepper>"

    def test_deterministic(self, styled_book, constraints):
        assert build_markup(styled_book, constraints) == build_markup(styled_book, constraints)
