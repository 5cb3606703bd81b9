#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

from .constants import (
    DEFAULT_TEMPLATE_ID,
    DEFAULT_LAYOUT_ENGINE,
    RENDER_TIMEOUT_SECONDS,
    OUTPUT_DIR,
    TEMP_DIR,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Templates ==========
    default_template: str = DEFAULT_TEMPLATE_ID
    templates_file: Optional[Path] = None  # extra JSON template definitions

    # ========== Layout Engine ==========
    layout_engine: str = DEFAULT_LAYOUT_ENGINE  # reportlab | soffice
    render_timeout_seconds: float = RENDER_TIMEOUT_SECONDS
    soffice_path: Optional[str] = None  # auto-detected when unset

    # ========== Directories ==========
    output_dir: Path = BASE_DIR / OUTPUT_DIR
    temp_dir: Path = BASE_DIR / TEMP_DIR

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        env_prefix = "FORMATTER_"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        for dir_path in [self.output_dir, self.temp_dir]:
            dir_path.mkdir(exist_ok=True, parents=True)

    def summary(self) -> dict:
        """Configuration summary for startup logging."""
        return {
            "default_template": self.default_template,
            "templates_file": str(self.templates_file) if self.templates_file else None,
            "layout_engine": self.layout_engine,
            "render_timeout_seconds": self.render_timeout_seconds,
            "output_dir": str(self.output_dir),
        }


# Global settings instance
settings = Settings()
