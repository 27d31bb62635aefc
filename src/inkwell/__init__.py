"""Markdown to structure pipeline for the blog authoring studio."""

from .adapters.heading_extractor import extract_headings
from .adapters.markdown_parser import render

__version__ = "0.1.0"

__all__ = ["__version__", "extract_headings", "render"]
