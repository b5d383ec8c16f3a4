"""Shared building blocks for typed page blocks."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BlockType(str, Enum):
    HEADLINE = "headline"
    SUBHEADLINE = "subheadline"
    FEATURE_LIST = "feature-list"
    CALL_TO_ACTION = "call-to-action"
    TESTIMONIAL = "testimonial"
    PARAGRAPH = "paragraph"
    LINK = "link"
    FOOTER = "footer"
    ILLUSTRATION = "illustration"


# Older generators emitted these marker names.
BLOCK_TYPE_ALIASES: dict[str, BlockType] = {
    "feature": BlockType.FEATURE_LIST,
    "cta": BlockType.CALL_TO_ACTION,
}


def canonical_block_type(value: str | None) -> BlockType | None:
    """Resolve a marker value or alias to a ``BlockType``; ``None`` when unknown."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        return None
    alias = BLOCK_TYPE_ALIASES.get(normalized)
    if alias is not None:
        return alias
    try:
        return BlockType(normalized)
    except ValueError:
        return None


# Field name -> CSS property name, in serialization order.
STYLE_PROPERTIES: dict[str, str] = {
    "color": "color",
    "font_size": "font-size",
    "background": "background",
}


class StyleRecord(BaseModel):
    """Inline style whitelist; unset fields inherit from the theme."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    color: str | None = None
    font_size: str | None = Field(default=None, alias="fontSize")
    background: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in STYLE_PROPERTIES)

    def css_items(self) -> list[tuple[str, str]]:
        return [
            (css_name, value)
            for name, css_name in STYLE_PROPERTIES.items()
            if (value := getattr(self, name)) is not None
        ]

    def to_css(self) -> str:
        return "; ".join(f"{name}: {value}" for name, value in self.css_items())


class StructuredContent(BaseModel):
    """Base class for record-shaped block payloads."""

    model_config = ConfigDict(frozen=True)

    def plain_text(self) -> str:  # pragma: no cover - abstract
        raise NotImplementedError


class Block(BaseModel):
    """Immutable representation of one editable content block."""

    id: str
    type: BlockType
    content: Any = None
    styles: StyleRecord | None = None

    model_config = ConfigDict(frozen=True)

    def content_text(self) -> str:
        """Plain-text view of the content, regardless of its shape."""
        if isinstance(self.content, str):
            return self.content
        if isinstance(self.content, StructuredContent):
            return self.content.plain_text()
        return "" if self.content is None else str(self.content)


__all__ = [
    "BLOCK_TYPE_ALIASES",
    "Block",
    "BlockType",
    "STYLE_PROPERTIES",
    "StructuredContent",
    "StyleRecord",
    "canonical_block_type",
]
