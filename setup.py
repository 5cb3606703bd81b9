#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KDP Book Formatter - Setup Configuration
Template-driven manuscript formatting to print-ready DOCX and PDF.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="kdp-book-formatter",
    version="1.0.0",
    description="Template-driven book formatter producing KDP-ready DOCX and PDF",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="KDP Formatter Team",
    python_requires=">=3.9",
    packages=find_packages(include=["config", "core", "core.*"]),
    install_requires=requirements,
    extras_require={
        # Development dependencies
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "kdp-format=core.formatting.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Markup",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="kdp book formatting docx pdf publishing templates",
)
