"""Typed block exports and helpers."""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import Field

from .base import (
    BLOCK_TYPE_ALIASES,
    STYLE_PROPERTIES,
    Block,
    BlockType,
    StructuredContent,
    StyleRecord,
    canonical_block_type,
)
from .feature_list import FeatureListBlock, FeatureListContent
from .testimonial import TESTIMONIAL_FIELDS, TestimonialBlock, TestimonialContent
from .text import (
    CallToActionBlock,
    FooterBlock,
    HeadlineBlock,
    IllustrationBlock,
    LinkBlock,
    ParagraphBlock,
    SubheadlineBlock,
    TextBlock,
)

AnyBlock = Annotated[
    Union[
        HeadlineBlock,
        SubheadlineBlock,
        FeatureListBlock,
        CallToActionBlock,
        TestimonialBlock,
        ParagraphBlock,
        LinkBlock,
        FooterBlock,
        IllustrationBlock,
    ],
    Field(discriminator="type"),
]

BLOCK_CLASS_MAP: dict[BlockType, type[Block]] = {
    BlockType.HEADLINE: HeadlineBlock,
    BlockType.SUBHEADLINE: SubheadlineBlock,
    BlockType.FEATURE_LIST: FeatureListBlock,
    BlockType.CALL_TO_ACTION: CallToActionBlock,
    BlockType.TESTIMONIAL: TestimonialBlock,
    BlockType.PARAGRAPH: ParagraphBlock,
    BlockType.LINK: LinkBlock,
    BlockType.FOOTER: FooterBlock,
    BlockType.ILLUSTRATION: IllustrationBlock,
}

CONTENT_MODEL_MAP: dict[BlockType, type[StructuredContent]] = {
    BlockType.FEATURE_LIST: FeatureListContent,
    BlockType.TESTIMONIAL: TestimonialContent,
}

# Placeholder content for blocks added from the editor toolbar.
DEFAULT_CONTENT: dict[BlockType, Any] = {
    BlockType.HEADLINE: "New Headline",
    BlockType.SUBHEADLINE: "New Subheadline",
    BlockType.FEATURE_LIST: {"features": ["New feature"]},
    BlockType.CALL_TO_ACTION: "Get Started",
    BlockType.TESTIMONIAL: {"text": "New testimonial"},
    BlockType.PARAGRAPH: "New paragraph",
    BlockType.LINK: "New link",
    BlockType.FOOTER: "New footer",
    BlockType.ILLUSTRATION: "Illustration",
}


def _normalize(block_type: BlockType | str) -> BlockType:
    if isinstance(block_type, BlockType):
        return block_type
    resolved = canonical_block_type(block_type)
    if resolved is None:
        raise ValueError(f"Unknown block type: {block_type!r}")
    return resolved


def block_class_for(block_type: BlockType | str) -> type[Block]:
    return BLOCK_CLASS_MAP.get(_normalize(block_type), Block)


def content_model_for(block_type: BlockType | str) -> type[StructuredContent] | None:
    return CONTENT_MODEL_MAP.get(_normalize(block_type))


def build_block(
    block_type: BlockType | str,
    *,
    block_id: str,
    content: Any = None,
    styles: StyleRecord | dict[str, Any] | None = None,
) -> Block:
    """Validate ``content``/``styles`` against the type's schema and return a block."""
    normalized = _normalize(block_type)
    block_cls = block_class_for(normalized)
    if content is None:
        content = DEFAULT_CONTENT[normalized]
    if isinstance(styles, dict):
        styles = StyleRecord.model_validate(styles)
    if styles is not None and styles.is_empty():
        styles = None
    return block_cls.model_validate(
        {"id": block_id, "type": normalized, "content": content, "styles": styles}
    )


__all__ = [
    "AnyBlock",
    "BLOCK_CLASS_MAP",
    "BLOCK_TYPE_ALIASES",
    "Block",
    "BlockType",
    "CONTENT_MODEL_MAP",
    "CallToActionBlock",
    "DEFAULT_CONTENT",
    "FeatureListBlock",
    "FeatureListContent",
    "FooterBlock",
    "HeadlineBlock",
    "IllustrationBlock",
    "LinkBlock",
    "ParagraphBlock",
    "STYLE_PROPERTIES",
    "StructuredContent",
    "StyleRecord",
    "SubheadlineBlock",
    "TESTIMONIAL_FIELDS",
    "TestimonialBlock",
    "TestimonialContent",
    "TextBlock",
    "block_class_for",
    "build_block",
    "canonical_block_type",
    "content_model_for",
]
