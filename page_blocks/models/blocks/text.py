"""Block definitions whose content is a plain string."""

from __future__ import annotations

from typing import Literal

from .base import Block, BlockType


class TextBlock(Block):
    content: str = ""


class HeadlineBlock(TextBlock):
    type: Literal[BlockType.HEADLINE] = BlockType.HEADLINE


class SubheadlineBlock(TextBlock):
    type: Literal[BlockType.SUBHEADLINE] = BlockType.SUBHEADLINE


class CallToActionBlock(TextBlock):
    type: Literal[BlockType.CALL_TO_ACTION] = BlockType.CALL_TO_ACTION


class ParagraphBlock(TextBlock):
    type: Literal[BlockType.PARAGRAPH] = BlockType.PARAGRAPH


class LinkBlock(TextBlock):
    type: Literal[BlockType.LINK] = BlockType.LINK


class FooterBlock(TextBlock):
    type: Literal[BlockType.FOOTER] = BlockType.FOOTER


class IllustrationBlock(TextBlock):
    type: Literal[BlockType.ILLUSTRATION] = BlockType.ILLUSTRATION


__all__ = [
    "CallToActionBlock",
    "FooterBlock",
    "HeadlineBlock",
    "IllustrationBlock",
    "LinkBlock",
    "ParagraphBlock",
    "SubheadlineBlock",
    "TextBlock",
]
