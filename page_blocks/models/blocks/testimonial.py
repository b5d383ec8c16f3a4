"""Testimonial block definition."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import Block, BlockType, StructuredContent

TESTIMONIAL_FIELDS: tuple[str, ...] = ("author", "role", "company")


class TestimonialContent(StructuredContent):
    """Quote text plus attribution; ``text`` is the whole quote element's text."""

    text: str = ""
    author: str = ""
    role: str = ""
    company: str = ""

    def plain_text(self) -> str:
        return self.text


class TestimonialBlock(Block):
    type: Literal[BlockType.TESTIMONIAL] = BlockType.TESTIMONIAL
    content: TestimonialContent = Field(default_factory=TestimonialContent)


__all__ = ["TESTIMONIAL_FIELDS", "TestimonialBlock", "TestimonialContent"]
