#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Engines

External layout/rendering engines consumed by the paginated renderer.
"""

from pathlib import Path
from typing import Optional

from config.constants import DEFAULT_LAYOUT_ENGINE
from .base import LayoutEngine, LayoutSession, release_session
from .reportlab_engine import ReportLabLayoutEngine
from .soffice_engine import SofficeLayoutEngine, find_soffice

ENGINES = {
    ReportLabLayoutEngine.name: ReportLabLayoutEngine,
    SofficeLayoutEngine.name: SofficeLayoutEngine,
}


def get_layout_engine(
    name: str = DEFAULT_LAYOUT_ENGINE,
    soffice_path: Optional[str] = None,
    temp_dir: Optional[Path] = None,
) -> LayoutEngine:
    """
    Create a layout engine by name.

    Raises:
        ValueError: If the engine name is unknown
    """
    if name == SofficeLayoutEngine.name:
        return SofficeLayoutEngine(executable=soffice_path, temp_dir=temp_dir)
    if name == ReportLabLayoutEngine.name:
        return ReportLabLayoutEngine()
    raise ValueError(f"Unknown layout engine: '{name}'. Available engines: {sorted(ENGINES)}")


__all__ = [
    "LayoutEngine",
    "LayoutSession",
    "release_session",
    "ReportLabLayoutEngine",
    "SofficeLayoutEngine",
    "find_soffice",
    "get_layout_engine",
    "ENGINES",
]
