"""Renderer implementations and helpers."""

from .base import RenderOptions, Renderer
from .html import HtmlRenderer, serialize_blocks

__all__ = ["HtmlRenderer", "RenderOptions", "Renderer", "serialize_blocks"]
