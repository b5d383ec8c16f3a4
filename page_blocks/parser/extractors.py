"""Per-type content extraction and inline style extraction."""

from __future__ import annotations

import logging
from typing import Any

import cssutils
from bs4 import Tag

from page_blocks.models.blocks import (
    TESTIMONIAL_FIELDS,
    BlockType,
    FeatureListContent,
    StyleRecord,
    TestimonialContent,
)

cssutils.log.setLevel(logging.ERROR)
# Keep colors as authored (#FF0000 stays #FF0000).
cssutils.ser.prefs.minimizeColorHash = False

# CSS properties read for each StyleRecord field, first non-empty wins.
_STYLE_SOURCES: dict[str, tuple[str, ...]] = {
    "color": ("color",),
    "font_size": ("font-size",),
    "background": ("background", "background-color", "background-image"),
}


def extract_text(element: Tag) -> str:
    return element.get_text().strip()


def extract_content(
    element: Tag,
    block_type: BlockType,
    *,
    gaps: list[str] | None = None,
) -> Any:
    """Return the content payload for ``element`` as classified ``block_type``.

    Missing testimonial attribution fields default to ``""`` and their names
    are appended to ``gaps`` when provided.
    """
    if block_type is BlockType.TESTIMONIAL:
        return _testimonial_content(element, gaps)
    if block_type is BlockType.FEATURE_LIST:
        return FeatureListContent(
            features=tuple(extract_text(item) for item in element.find_all("li"))
        )
    return extract_text(element)


def _testimonial_content(element: Tag, gaps: list[str] | None) -> TestimonialContent:
    values: dict[str, str] = {"text": extract_text(element)}
    for field in TESTIMONIAL_FIELDS:
        match = element.select_one(f".{field}")
        if match is None:
            if gaps is not None:
                gaps.append(field)
            values[field] = ""
        else:
            values[field] = extract_text(match)
    return TestimonialContent(**values)


def extract_styles(element: Tag) -> StyleRecord | None:
    """Read the whitelisted inline styles; ``None`` when none are set."""
    style_text = element.get("style")
    if not style_text:
        return None
    if isinstance(style_text, list):
        style_text = " ".join(style_text)

    declaration = cssutils.parseStyle(style_text, validate=False)
    values: dict[str, str] = {}
    for field, properties in _STYLE_SOURCES.items():
        for css_name in properties:
            value = declaration.getPropertyValue(css_name).strip()
            if value:
                values[field] = value
                break

    if not values:
        return None
    return StyleRecord(**values)


__all__ = ["extract_content", "extract_styles", "extract_text"]
