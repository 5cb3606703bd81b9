#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Non-Fiction Template - Layout for academic and non-fiction books.
"""

from .base_template import BaseTemplate, RuleSet
from ..utils.constants import CHAPTER_TITLE, SECTION_TITLE


class NonFictionTemplate(BaseTemplate):
    """Template for academic and non-fiction books with roomier sections."""

    @property
    def template_id(self) -> str:
        return "nonFiction"

    @property
    def display_name(self) -> str:
        return "Non-Fiction"

    @property
    def description(self) -> str:
        return "Academic and non-fiction book formatting"

    def overrides(self) -> RuleSet:
        return {
            CHAPTER_TITLE: {
                "fontSize": "16pt",
                "marginTop": "1in",
            },
            SECTION_TITLE: {
                "fontSize": "14pt",
                "marginTop": "0.75in",
            },
        }
