"""Convenience re-exports for the block model layer."""

from __future__ import annotations

from .blocks import (
    AnyBlock,
    Block,
    BlockType,
    FeatureListContent,
    StructuredContent,
    StyleRecord,
    TestimonialContent,
    block_class_for,
    build_block,
    canonical_block_type,
    content_model_for,
)
from .page import PageSnapshot, Theme

__all__ = [
    "AnyBlock",
    "Block",
    "BlockType",
    "FeatureListContent",
    "PageSnapshot",
    "StructuredContent",
    "StyleRecord",
    "TestimonialContent",
    "Theme",
    "block_class_for",
    "build_block",
    "canonical_block_type",
    "content_model_for",
]
