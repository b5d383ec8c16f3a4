"""Parsing helpers for generated HTML pages."""

from .classifier import classify
from .extractors import extract_content, extract_styles, extract_text
from .html_parser import (
    ParseResult,
    find_wrapper,
    html_to_blocks,
    load_html_path,
    make_soup,
    parse_html,
    parse_theme,
)

__all__ = [
    "ParseResult",
    "classify",
    "extract_content",
    "extract_styles",
    "extract_text",
    "find_wrapper",
    "html_to_blocks",
    "load_html_path",
    "make_soup",
    "parse_html",
    "parse_theme",
]
