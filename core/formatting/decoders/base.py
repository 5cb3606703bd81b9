#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Source Decoder Interface

A source decoder turns an uploaded manuscript into a Document. It keeps
the heading/paragraph distinction and the text; source formatting is
discarded because the template replaces it.
"""

from abc import ABC, abstractmethod
from typing import List

from ..document_model import Document


class SourceDecoder(ABC):
    """
    Abstract base class for manuscript decoders.

    All decoders must implement:
    - decode(): bytes -> Document, raising DecodeError on bad input
    - supports_format(): suffix check used by get_decoder()
    """

    name: str = "base"

    @abstractmethod
    def decode(self, data: bytes, source_name: str = "") -> Document:
        """
        Decode manuscript bytes.

        Args:
            data: Raw file content
            source_name: File name for error messages

        Returns:
            Immutable Document

        Raises:
            DecodeError: If the source is malformed or unsupported
        """
        pass

    @classmethod
    @abstractmethod
    def supports_format(cls, suffix: str) -> bool:
        """Check if decoder handles files with this suffix"""
        pass

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        """Get list of supported suffixes"""
        return []
