"""
Pytest configuration and shared fixtures for KDP Book Formatter tests.
"""
import asyncio
import io
import sys
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator, List, Tuple

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from docx import Document as DocxDocument

from config.settings import Settings
from core.formatting.document_model import (
    ChapterHeading,
    Document,
    Paragraph,
    SectionHeading,
    TitleBlock,
)
from core.formatting.style_engine import StyleEngine
from core.formatting.templates import TemplateRegistry
from core.layout.engines.base import LayoutEngine, LayoutSession
from core.layout.page_layout import PageConstraints


# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_settings(temp_dir: Path) -> Settings:
    """Settings pointing every directory into the temp dir."""
    return Settings(
        output_dir=temp_dir / "output",
        temp_dir=temp_dir / "temp",
        layout_engine="reportlab",
        render_timeout_seconds=30,
    )


# ============================================================================
# Fixtures: Templates
# ============================================================================

@pytest.fixture
def registry() -> TemplateRegistry:
    """Registry with the built-in templates."""
    return TemplateRegistry.with_defaults()


@pytest.fixture
def fiction_template(registry):
    return registry.get("fiction")


@pytest.fixture
def nonfiction_template(registry):
    return registry.get("nonFiction")


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

@pytest.fixture
def scenario_document() -> Document:
    """Two chapters, three paragraphs."""
    return Document.from_blocks([
        ChapterHeading("Ch.1"),
        Paragraph("A"),
        Paragraph("B"),
        ChapterHeading("Ch.2"),
        Paragraph("C"),
    ])


@pytest.fixture
def book_document() -> Document:
    """A small book with every block type."""
    return Document.from_blocks([
        TitleBlock("The Lighthouse Keeper", author_text="Mara Lind"),
        ChapterHeading("Chapter 1: Arrival"),
        Paragraph("The ferry left her on the jetty at dusk."),
        Paragraph("Nobody came down from the tower to meet her."),
        SectionHeading("The Log"),
        Paragraph("Every entry ended with the same three words."),
        ChapterHeading("Chapter 2: Fog"),
        Paragraph("By morning the island had disappeared."),
    ], source="lighthouse.docx")


@pytest.fixture
def styled_book(book_document, fiction_template):
    return StyleEngine().apply(book_document, fiction_template)


@pytest.fixture
def styled_scenario(scenario_document, fiction_template):
    return StyleEngine().apply(scenario_document, fiction_template)


def build_docx_manuscript(author: str = "") -> bytes:
    """A manuscript the way an author would save it from Word."""
    doc = DocxDocument()
    doc.core_properties.author = author
    doc.add_paragraph("The Lighthouse Keeper", style="Title")
    doc.add_paragraph("Mara Lind", style="Subtitle")
    doc.add_heading("Chapter 1: Arrival", level=1)
    para = doc.add_paragraph("The ferry left her on the jetty at dusk.")
    para.runs[0].font.bold = True  # source formatting is discarded
    doc.add_paragraph("")
    doc.add_paragraph("Nobody came down from the tower to meet her.")
    doc.add_heading("The Log", level=2)
    doc.add_paragraph("Every entry ended with the same three words.")
    doc.add_heading("Chapter 2: Fog", level=1)
    doc.add_paragraph("By morning the island had disappeared.")

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_manuscript() -> bytes:
    return build_docx_manuscript()


@pytest.fixture
def text_manuscript() -> bytes:
    return (
        "Title: The Lighthouse Keeper\n"
        "Author: Mara Lind\n"
        "\n"
        "# Chapter 1: Arrival\n"
        "\n"
        "The ferry left her\n"
        "on the jetty at dusk.\n"
        "\n"
        "Nobody came down from the tower to meet her.\n"
        "\n"
        "## The Log\n"
        "\n"
        "Every entry ended with the same three words.\n"
        "\n"
        "Chapter 2: Fog\n"
        "\n"
        "By morning the island had disappeared.\n"
    ).encode("utf-8")


# ============================================================================
# Fixtures: Layout engine test double
# ============================================================================

class RecordingSession(LayoutSession):
    """Session that records renders and reports release to its engine."""

    engine_name = "recording"

    def __init__(self, engine: "RecordingEngine"):
        self.engine = engine

    async def render(self, markup: str, constraints: PageConstraints) -> bytes:
        self.engine.calls.append((markup, constraints))
        if self.engine.delay:
            await asyncio.sleep(self.engine.delay)
        if self.engine.error is not None:
            raise self.engine.error
        return self.engine.result

    async def close(self) -> None:
        self.engine.released += 1
        if self.engine.close_error is not None:
            raise self.engine.close_error


class RecordingEngine(LayoutEngine):
    """Layout engine double tracking acquire/release counts."""

    name = "recording"

    def __init__(self, result: bytes = b"%PDF-1.4 recorded", delay: float = 0.0,
                 error: Exception = None, close_error: Exception = None):
        self.result = result
        self.delay = delay
        self.error = error
        self.close_error = close_error
        self.acquired = 0
        self.released = 0
        self.calls: List[Tuple[str, PageConstraints]] = []

    async def open_session(self) -> LayoutSession:
        self.acquired += 1
        return RecordingSession(self)


@pytest.fixture
def recording_engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def make_engine():
    """Factory for configured engine doubles."""
    return RecordingEngine
