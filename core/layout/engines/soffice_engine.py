#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LibreOffice Layout Engine

Runs headless LibreOffice (soffice) as an external process to convert the
markup to PDF. Each session owns:
- a scratch directory with its own LibreOffice user profile, so parallel
  sessions never contend for the profile lock
- at most one running soffice process

Closing the session kills a still-running process and removes the scratch
directory; LayoutEngine.session() guarantees that close runs even when the
render is cancelled by a timeout.

Requirements:
- LibreOffice: brew install libreoffice (macOS) or apt-get install libreoffice (Linux)
"""

import asyncio
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from config.constants import SOFFICE_KILL_GRACE_SECONDS
from config.logging_config import get_logger
from core.formatting.errors import EngineError
from ..page_layout import PageConstraints
from .base import LayoutEngine, LayoutSession

logger = get_logger(__name__)

# Common LibreOffice executable locations
SOFFICE_CANDIDATES = [
    "soffice",
    "libreoffice",
    "/Applications/LibreOffice.app/Contents/MacOS/soffice",
    "/usr/bin/soffice",
    "/usr/bin/libreoffice",
]


def find_soffice(preferred: Optional[str] = None) -> Optional[str]:
    """
    Locate the LibreOffice executable.

    Returns:
        Executable path, or None if LibreOffice is not installed
    """
    candidates = [preferred] if preferred else SOFFICE_CANDIDATES
    for path in candidates:
        found = shutil.which(path)
        if found:
            return found
        if os.path.isfile(path) and os.access(path, os.X_OK):
            return path
    return None


class SofficeLayoutSession(LayoutSession):
    """One scratch directory plus the soffice process rendering in it."""

    engine_name = "soffice"

    def __init__(self, executable: str, workdir: Path):
        self.executable = executable
        self.workdir = workdir
        self._process: Optional[asyncio.subprocess.Process] = None

    @property
    def process(self) -> Optional[asyncio.subprocess.Process]:
        return self._process

    def _command(self, source: Path, outdir: Path) -> List[str]:
        profile = (self.workdir / "profile").resolve().as_uri()
        return [
            self.executable,
            "--headless",
            "--norestore",
            f"-env:UserInstallation={profile}",
            "--infilter=HTML (StarWriter)",
            "--convert-to", "pdf:writer_pdf_Export",
            "--outdir", str(outdir),
            str(source),
        ]

    async def render(self, markup: str, constraints: PageConstraints) -> bytes:
        # Page box travels inside the markup's @page rule
        source = self.workdir / "manuscript.html"
        outdir = self.workdir / "out"
        outdir.mkdir(exist_ok=True)
        source.write_text(markup, encoding="utf-8")

        logger.debug(
            f"soffice converting {source.name} "
            f"({constraints.width}x{constraints.height}pt)"
        )
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self._command(source, outdir),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise EngineError(f"Could not start LibreOffice: {exc}", renderer=self.engine_name) from exc

        _, stderr = await self._process.communicate()

        if self._process.returncode != 0:
            message = stderr.decode(errors="replace").strip() or f"exit code {self._process.returncode}"
            raise EngineError(f"LibreOffice conversion failed: {message}", renderer=self.engine_name)

        pdf_path = outdir / "manuscript.pdf"
        if not pdf_path.exists():
            raise EngineError("LibreOffice produced no PDF", renderer=self.engine_name)
        return pdf_path.read_bytes()

    async def close(self) -> None:
        process = self._process
        try:
            if process is not None and process.returncode is None:
                logger.warning(f"Killing unfinished soffice process {process.pid}")
                process.kill()
                try:
                    await asyncio.wait_for(process.wait(), SOFFICE_KILL_GRACE_SECONDS)
                except asyncio.TimeoutError:
                    logger.error(f"soffice process {process.pid} did not exit after kill")
        finally:
            self._process = None
            shutil.rmtree(self.workdir, ignore_errors=True)


class SofficeLayoutEngine(LayoutEngine):
    """
    Layout engine backed by headless LibreOffice.

    Usage:
        engine = SofficeLayoutEngine(temp_dir=settings.temp_dir)
        async with engine.session() as session:
            pdf = await session.render(markup, constraints)
    """

    name = "soffice"

    def __init__(self, executable: Optional[str] = None, temp_dir: Optional[Path] = None):
        self.executable = executable
        self.temp_dir = temp_dir

    async def open_session(self) -> LayoutSession:
        executable = find_soffice(self.executable)
        if not executable:
            raise EngineError(
                "LibreOffice not found. Install with:\n"
                "  macOS: brew install --cask libreoffice\n"
                "  Linux: sudo apt-get install libreoffice",
                renderer=self.name,
            )
        workdir = Path(tempfile.mkdtemp(prefix="kdp-soffice-", dir=self.temp_dir))
        return SofficeLayoutSession(executable, workdir)
