#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Source Decoders

Turn uploaded manuscripts into Documents.

Usage:
    decoder = get_decoder("novel.docx")
    document = decoder.decode(path.read_bytes(), source_name="novel.docx")
"""

from pathlib import Path
from typing import Union

from ..errors import DecodeError
from .base import SourceDecoder
from .docx_decoder import DocxSourceDecoder
from .text_decoder import TextSourceDecoder

_DECODERS = (DocxSourceDecoder, TextSourceDecoder)


def get_decoder(filename: Union[str, Path]) -> SourceDecoder:
    """
    Choose a decoder by file suffix.

    Raises:
        DecodeError: If no decoder handles the suffix
    """
    suffix = Path(filename).suffix.lower()
    for decoder_cls in _DECODERS:
        if decoder_cls.supports_format(suffix):
            return decoder_cls()
    raise DecodeError(f"unsupported manuscript format '{suffix or '(none)'}'", str(filename))


__all__ = [
    "SourceDecoder",
    "DocxSourceDecoder",
    "TextSourceDecoder",
    "get_decoder",
]
