"""
Unit tests for the paginated renderer and its layout engines.
"""

import asyncio
import io
import os
import stat
import sys

import pytest

from core.formatting.document_model import ChapterHeading, Document, Paragraph
from core.formatting.errors import EngineError, RenderError, RenderTimeout
from core.formatting.style_engine import StyleEngine
from core.formatting.templates import ConfiguredTemplate
from core.layout.engines import (
    ReportLabLayoutEngine,
    SofficeLayoutEngine,
    find_soffice,
    get_layout_engine,
)
from core.layout.engines.reportlab_engine import (
    KeepLinesParagraph,
    build_story,
    parse_style_attribute,
    paragraph_style,
)
from core.layout.engines.soffice_engine import SofficeLayoutSession
from core.layout.markup import build_markup
from core.layout.page_layout import Margins, PageConstraints, PageSize
from core.layout.renderer import PdfRenderer

SIX_LINES = "one<br/>two<br/>three<br/>four<br/>five<br/>six"
LINE_CSS = {"font-size": "10pt", "line-height": "1", "orphans": "3", "widows": "3"}


def _laid_out_positions(story, constraints):
    """Lay out a story and return {paragraph text: (page, bottom y)}."""
    from reportlab.platypus import Paragraph as Flowing, SimpleDocTemplate

    positions = {}

    class PositionRecordingDoc(SimpleDocTemplate):
        def afterFlowable(self, flowable):
            if isinstance(flowable, Flowing):
                positions.setdefault(flowable.getPlainText(), (self.page, self.frame._y))

    PositionRecordingDoc(
        io.BytesIO(),
        pagesize=(constraints.width, constraints.height),
        topMargin=constraints.margin_top,
        bottomMargin=constraints.margin_bottom,
        leftMargin=constraints.margin_left,
        rightMargin=constraints.margin_right,
        invariant=1,
    ).build(story)
    return positions


class TestPdfRendererWithEngineDouble:
    """Contract between the renderer and any layout engine"""

    @pytest.mark.asyncio
    async def test_passes_markup_and_points(self, styled_book, recording_engine):
        data = await PdfRenderer(engine=recording_engine).render(styled_book)

        assert data == recording_engine.result
        markup, constraints = recording_engine.calls[0]
        assert (constraints.width, constraints.height) == (432, 648)
        assert constraints.margin_left == 54
        assert "@page { size: 432pt 648pt;" in markup
        assert recording_engine.acquired == recording_engine.released == 1

    @pytest.mark.asyncio
    async def test_page_overrides(self, styled_book, recording_engine):
        await PdfRenderer(engine=recording_engine).render(
            styled_book,
            page_size=PageSize("5in", "8in"),
            margins=Margins("1in", "0.5in", "1in", "0.5in"),
        )
        _, constraints = recording_engine.calls[0]
        assert (constraints.width, constraints.height) == (360, 576)
        assert (constraints.margin_top, constraints.margin_right) == (72, 36)

    @pytest.mark.asyncio
    async def test_timeout_releases_session(self, styled_book, make_engine):
        engine = make_engine(delay=5.0)
        renderer = PdfRenderer(engine=engine, timeout=0.05)

        with pytest.raises(RenderTimeout) as exc_info:
            await renderer.render(styled_book)

        assert exc_info.value.timeout == 0.05
        assert exc_info.value.renderer == "recording"
        assert engine.acquired == 1
        assert engine.released == 1

    @pytest.mark.asyncio
    async def test_engine_error_releases_session(self, styled_book, make_engine):
        engine = make_engine(error=EngineError("layout crashed", renderer="recording"))

        with pytest.raises(EngineError, match="layout crashed"):
            await PdfRenderer(engine=engine).render(styled_book)

        assert engine.acquired == engine.released == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, styled_book, make_engine):
        engine = make_engine(error=RuntimeError("segfault"))

        with pytest.raises(EngineError, match="segfault"):
            await PdfRenderer(engine=engine).render(styled_book)

        assert engine.released == 1

    @pytest.mark.asyncio
    async def test_empty_artifact_rejected(self, styled_book, make_engine):
        engine = make_engine(result=b"")

        with pytest.raises(EngineError, match="empty"):
            await PdfRenderer(engine=engine).render(styled_book)

    @pytest.mark.asyncio
    async def test_release_failure_does_not_mask_result(self, styled_book, make_engine):
        engine = make_engine(close_error=OSError("already gone"))

        data = await PdfRenderer(engine=engine).render(styled_book)

        assert data == engine.result
        assert engine.released == 1

    @pytest.mark.asyncio
    async def test_page_box_without_content_area(self, styled_book, recording_engine):
        renderer = PdfRenderer(engine=recording_engine)
        with pytest.raises(RenderError, match="no room for content") as exc_info:
            await renderer.render(
                styled_book,
                page_size=PageSize("2in", "2in"),
                margins=Margins("1in", "1in", "1in", "1in"),
            )
        assert exc_info.value.renderer == "pdf"
        assert recording_engine.acquired == 0

    def test_timeout_must_be_positive(self, recording_engine):
        with pytest.raises(ValueError):
            PdfRenderer(engine=recording_engine, timeout=0)

    def test_default_engine(self):
        assert isinstance(PdfRenderer().engine, ReportLabLayoutEngine)


class TestReportLabEngine:

    def test_parse_style_attribute(self):
        assert parse_style_attribute("font-size: 12pt; text-align: center;") == {
            "font-size": "12pt",
            "text-align": "center",
        }

    def test_paragraph_style_mapping(self):
        style = paragraph_style("body", {
            "font-family": "'Times New Roman'",
            "font-size": "12pt",
            "font-weight": "bold",
            "line-height": "1.5",
            "text-indent": "18pt",
            "orphans": "2",
            "widows": "1",
        })
        assert style.fontName == "Times-Bold"
        assert style.leading == pytest.approx(18.0)
        assert style.firstLineIndent == 18.0
        assert style.allowOrphans == 0
        assert style.allowWidows == 1
        assert (style.minOrphans, style.minWidows) == (2, 1)

    def test_story_breaks_before_chapters(self, styled_book):
        from reportlab.platypus import PageBreak

        constraints = PageConstraints(432, 648, 54, 54, 54, 54)
        story, title = build_story(build_markup(styled_book, constraints))

        assert title == "The Lighthouse Keeper"
        assert sum(isinstance(f, PageBreak) for f in story) == 2

    def test_page_opening_blocks_keep_top_margin(self, styled_book):
        from reportlab.platypus import PageBreak, Spacer

        constraints = PageConstraints(432, 648, 54, 54, 54, 54)
        story, _ = build_story(build_markup(styled_book, constraints))

        # title page: 2in above the title
        assert isinstance(story[0], Spacer)
        assert story[0].height == 144
        assert story[1].style.spaceBefore == 0

        # every chapter: 1.5in above the heading on its fresh page
        openers = [story[i + 1] for i, f in enumerate(story) if isinstance(f, PageBreak)]
        assert len(openers) == 2
        assert all(isinstance(f, Spacer) and f.height == 108 for f in openers)

    def test_chapter_margin_moves_heading_down(self, registry):
        def heading_position(margin_top):
            registry.register(ConfiguredTemplate(f"drop-{margin_top}", "Drop", "", {
                "chapter.title": {"marginTop": margin_top},
            }))
            doc = Document.from_blocks([ChapterHeading("Heading"), Paragraph("Body")])
            styled = StyleEngine().apply(doc, registry.get(f"drop-{margin_top}"))
            constraints = PageConstraints(432, 648, 54, 54, 54, 54)
            story, _ = build_story(build_markup(styled, constraints))
            return _laid_out_positions(story, constraints)["Heading"]

        top_page, top_y = heading_position("0in")
        dropped_page, dropped_y = heading_position("3in")

        assert top_page == dropped_page == 1
        assert top_y - dropped_y == pytest.approx(216)

    def test_orphans_above_two_refuse_short_split(self):
        paragraph = KeepLinesParagraph(SIX_LINES, paragraph_style("p", LINE_CSS))
        paragraph.wrap(200, 1000)

        # room for 2 lines, 3 required before the break
        assert paragraph.split(200, 25) == []

    def test_widows_above_two_move_lines_forward(self):
        paragraph = KeepLinesParagraph(SIX_LINES, paragraph_style("p", LINE_CSS))
        paragraph.wrap(200, 1000)

        # room for 4 lines, but that would strand 2 on the next page
        first, rest = paragraph.split(200, 45)
        assert len(first.blPara.lines) == 3
        assert isinstance(rest, KeepLinesParagraph)

    def test_two_line_minimum_left_to_reportlab(self):
        css = dict(LINE_CSS, orphans="2", widows="2")
        paragraph = KeepLinesParagraph(SIX_LINES, paragraph_style("p", css))
        paragraph.wrap(200, 1000)

        first, _ = paragraph.split(200, 45)
        assert len(first.blPara.lines) == 4

    def test_malformed_markup(self):
        with pytest.raises(EngineError):
            build_story("<html><body><p>unclosed</body>")

    @pytest.mark.asyncio
    async def test_renders_pdf(self, styled_book):
        data = await PdfRenderer(engine=ReportLabLayoutEngine()).render(styled_book)
        assert data.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_idempotent(self, styled_book):
        renderer = PdfRenderer(engine=ReportLabLayoutEngine())
        first = await renderer.render(styled_book)
        second = await renderer.render(styled_book)
        assert first == second


class TestEngineFactory:

    def test_by_name(self, temp_dir):
        assert isinstance(get_layout_engine("reportlab"), ReportLabLayoutEngine)
        engine = get_layout_engine("soffice", soffice_path="/opt/lo/soffice", temp_dir=temp_dir)
        assert isinstance(engine, SofficeLayoutEngine)
        assert engine.executable == "/opt/lo/soffice"

    def test_unknown(self):
        with pytest.raises(ValueError, match="prince"):
            get_layout_engine("prince")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell script stands in for soffice")
class TestSofficeEngine:

    @pytest.fixture
    def slow_soffice(self, temp_dir):
        script = temp_dir / "soffice"
        script.write_text("#!/bin/sh\nsleep 30\n")
        script.chmod(script.stat().st_mode | stat.S_IEXEC)
        return str(script)

    def test_find_soffice_missing(self):
        assert find_soffice("/nonexistent/soffice") is None

    @pytest.mark.asyncio
    async def test_missing_executable(self, styled_book, temp_dir):
        engine = SofficeLayoutEngine(executable="/nonexistent/soffice", temp_dir=temp_dir)
        with pytest.raises(EngineError, match="LibreOffice not found"):
            await PdfRenderer(engine=engine).render(styled_book)

    @pytest.mark.asyncio
    async def test_timeout_kills_process_and_cleans_up(self, styled_book, temp_dir, slow_soffice):
        scratch = temp_dir / "scratch"
        scratch.mkdir()
        engine = SofficeLayoutEngine(executable=slow_soffice, temp_dir=scratch)

        with pytest.raises(RenderTimeout):
            await PdfRenderer(engine=engine, timeout=0.5).render(styled_book)

        assert os.listdir(scratch) == []

    @pytest.mark.asyncio
    async def test_close_kills_running_process(self, temp_dir):
        workdir = temp_dir / "session"
        workdir.mkdir()
        session = SofficeLayoutSession("soffice", workdir)
        session._process = await asyncio.create_subprocess_exec("sleep", "30")
        process = session.process

        await session.close()

        assert process.returncode is not None
        assert session.process is None
        assert not workdir.exists()
