"""HTML → Block conversion that splits a generated page into blocks and a theme."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from page_blocks.config import ParserConfig
from page_blocks.errors import ContentExtractionGap, StructuralParseWarning
from page_blocks.models.blocks import Block, build_block
from page_blocks.models.page import Theme

from .classifier import classify
from .extractors import extract_content, extract_styles

logger = logging.getLogger(__name__)

BLOCK_ID_PREFIX = "block-"


@dataclass(slots=True)
class ParseResult:
    blocks: list[Block] = field(default_factory=list)
    theme: Theme = field(default_factory=Theme)
    warnings: list[str] = field(default_factory=list)
    gaps: list[ContentExtractionGap] = field(default_factory=list)


def make_soup(source: str, config: ParserConfig | None = None) -> BeautifulSoup:
    """Parse ``source`` with the configured tree builder."""
    cfg = config or ParserConfig()
    return BeautifulSoup(source, cfg.features)


def find_wrapper(soup: BeautifulSoup, config: ParserConfig | None = None) -> Tag | None:
    """Return the content wrapper: a direct child of ``<body>`` with the wrapper tag."""
    cfg = config or ParserConfig()
    body = soup.body
    if body is None:
        return None
    return body.find(cfg.wrapper_tag, recursive=False)


def parse_html(source: str, *, config: ParserConfig | None = None) -> ParseResult:
    """Split ``source`` into ordered blocks and a theme with an empty wrapper.

    A document without a wrapper is not an error: the result has no blocks, the
    theme is the input text unchanged and a ``StructuralParseWarning`` is issued.
    """
    cfg = config or ParserConfig()
    soup = make_soup(source, cfg)
    result = ParseResult()

    wrapper = find_wrapper(soup, cfg)
    if wrapper is None:
        result.theme = Theme(html=source)
        _warn(result, f"No <{cfg.wrapper_tag}> wrapper found in <body>.")
        return result

    for element in wrapper.find_all(True, recursive=False):
        block_type = classify(element, config=cfg)
        if block_type is None:
            continue

        block_id = f"{BLOCK_ID_PREFIX}{len(result.blocks) + 1}"
        missing: list[str] = []
        content = extract_content(element, block_type, gaps=missing)
        for field_name in missing:
            logger.debug("Block %s (%s) has no %s element", block_id, block_type.value, field_name)
            result.gaps.append(ContentExtractionGap(block_id=block_id, field=field_name))

        result.blocks.append(
            build_block(
                block_type,
                block_id=block_id,
                content=content,
                styles=extract_styles(element),
            )
        )

    wrapper.clear()
    result.theme = Theme(html=str(soup))

    if not result.blocks:
        _warn(result, f"No blocks found in <{cfg.wrapper_tag}> wrapper.")
    return result


def html_to_blocks(source: str, *, config: ParserConfig | None = None) -> list[Block]:
    """Convert HTML source into blocks, discarding the theme."""
    return parse_html(source, config=config).blocks


def parse_theme(source: str, *, config: ParserConfig | None = None) -> Theme:
    """Return only the theme of ``source``."""
    return parse_html(source, config=config).theme


def load_html_path(path: str | Path, *, config: ParserConfig | None = None) -> ParseResult:
    """Read HTML from disk and parse it."""
    content = Path(path).read_text(encoding="utf-8")
    return parse_html(content, config=config)


def _warn(result: ParseResult, message: str) -> None:
    logger.warning(message)
    result.warnings.append(message)
    warnings.warn(message, StructuralParseWarning, stacklevel=3)


__all__ = [
    "BLOCK_ID_PREFIX",
    "ParseResult",
    "find_wrapper",
    "html_to_blocks",
    "load_html_path",
    "make_soup",
    "parse_html",
    "parse_theme",
]
