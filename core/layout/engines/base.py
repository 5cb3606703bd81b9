#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Engine Interface

A layout engine turns styled markup plus a page box into a fixed-layout
artifact (PDF bytes). Engines hand out sessions; a session may own an
external process or other scarce resource and is always released through
LayoutEngine.session():

    async with engine.session() as session:
        pdf = await session.render(markup, constraints)

Release happens on every exit path (success, error, cancellation on
timeout). A failure while releasing is logged and never replaces the
error that ended the render.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from config.logging_config import get_logger
from ..page_layout import PageConstraints

logger = get_logger(__name__)


class LayoutSession(ABC):
    """One acquired engine instance."""

    engine_name: str = "base"

    @abstractmethod
    async def render(self, markup: str, constraints: PageConstraints) -> bytes:
        """
        Lay out and paint the markup.

        Args:
            markup: Styled markup from build_markup()
            constraints: Page box in points

        Returns:
            Fixed-layout artifact bytes

        Raises:
            EngineError: If the engine fails
        """
        pass

    async def close(self) -> None:
        """Release the session's resources."""
        return None


class LayoutEngine(ABC):
    """
    Abstract base class for layout engines.

    All engines must implement:
    - open_session(): acquire a LayoutSession
    - supports_format(): check if engine can produce the given format
    """

    name: str = "base"

    @abstractmethod
    async def open_session(self) -> LayoutSession:
        """Acquire a session. Use session() instead of calling this directly."""
        pass

    @asynccontextmanager
    async def session(self) -> AsyncIterator[LayoutSession]:
        """Acquire a session with guaranteed release."""
        session = await self.open_session()
        logger.debug(f"Acquired {self.name} layout session")
        try:
            yield session
        finally:
            await release_session(session)

    @classmethod
    def supports_format(cls, format_name: str) -> bool:
        return format_name.lower() in cls.get_supported_formats()

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["pdf"]


async def release_session(session: LayoutSession) -> None:
    """Best-effort close: logs failures instead of raising."""
    try:
        await session.close()
        logger.debug(f"Released {session.engine_name} layout session")
    except Exception as exc:
        logger.warning(f"Failed to release {session.engine_name} layout session: {exc}")
