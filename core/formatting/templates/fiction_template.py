#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fiction Template - Standard layout for novels and short fiction.
"""

from .base_template import BaseTemplate, RuleSet
from ..utils.constants import CHAPTER_TITLE


class FictionTemplate(BaseTemplate):
    """
    Template for novels and other narrative fiction.

    Larger, lower-set chapter titles than the base rules; everything else
    (6x9 trim, indented body text, unindented chapter openers) is inherited.
    """

    @property
    def template_id(self) -> str:
        return "fiction"

    @property
    def display_name(self) -> str:
        return "Fiction"

    @property
    def description(self) -> str:
        return "Standard fiction book formatting"

    def overrides(self) -> RuleSet:
        return {
            CHAPTER_TITLE: {
                "fontSize": "18pt",
                "marginTop": "1.5in",
            },
        }
