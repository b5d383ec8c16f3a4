"""Feature list block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockType, StructuredContent


class FeatureListContent(StructuredContent):
    features: tuple[str, ...] = Field(default_factory=tuple)

    def plain_text(self) -> str:
        return "\n".join(self.features)


class FeatureListBlock(Block):
    type: Literal[BlockType.FEATURE_LIST] = BlockType.FEATURE_LIST
    content: FeatureListContent = Field(default_factory=FeatureListContent)


__all__ = ["FeatureListBlock", "FeatureListContent"]
