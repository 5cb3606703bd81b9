#!/usr/bin/env python3
"""
KDP Formatter CLI

Command-line interface for formatting manuscripts.

Usage:
    kdp-format format novel.docx --template fiction --output build/
    kdp-format format notes.md --engine soffice --timeout 120
    kdp-format templates
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from config.logging_config import get_logger
from .errors import FormattingError
from .pipeline import FormattingPipeline

logger = get_logger(__name__)


def cmd_format(args, pipeline: FormattingPipeline) -> int:
    """Format one manuscript"""
    print(f"\n[>] Formatting {args.manuscript}...\n")

    outputs = asyncio.run(
        pipeline.format_file(args.manuscript, args.template, args.output)
    )

    print(f"  [OK] DOCX: {outputs['docx']}")
    print(f"  [OK] PDF:  {outputs['pdf']}")
    return 0


def cmd_templates(args, pipeline: FormattingPipeline) -> int:
    """List templates"""
    print("\n[i] Available templates")
    print("=" * 50)
    for info in pipeline.available_templates():
        marker = " (default)" if info["id"] == pipeline.default_template_id else ""
        print(f"  {info['id']}{marker}: {info['display_name']}")
        if info["description"]:
            print(f"     {info['description']}")
    print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kdp-format",
        description="Format manuscripts into print-ready DOCX and PDF",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    format_parser = subparsers.add_parser("format", help="Format a manuscript")
    format_parser.add_argument("manuscript", help="Manuscript file (.docx, .txt, .md)")
    format_parser.add_argument("-t", "--template", default=None,
                               help="Template id (unknown ids fall back to the default)")
    format_parser.add_argument("-o", "--output", default=None,
                               help="Output directory (defaults to the manuscript's directory)")
    format_parser.add_argument("-e", "--engine", default=None,
                               choices=["reportlab", "soffice"],
                               help="Layout engine for the PDF")
    format_parser.add_argument("--timeout", type=float, default=None,
                               help="PDF layout time limit in seconds")

    subparsers.add_parser("templates", help="List available templates")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    from config.settings import settings

    overrides = {}
    if getattr(args, "engine", None):
        overrides["layout_engine"] = args.engine
    if getattr(args, "timeout", None) is not None:
        overrides["render_timeout_seconds"] = args.timeout
    if overrides:
        settings = settings.model_copy(update=overrides)

    commands = {
        "format": cmd_format,
        "templates": cmd_templates,
    }

    try:
        pipeline = FormattingPipeline.from_settings(settings)
        return commands[args.command](args, pipeline)
    except (FormattingError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"  [X] Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
