"""HTML renderer package."""

from .components import DEFAULT_COMPONENTS, BaseComponent, RenderContext, TextRun, testimonial_segments
from .renderer import HtmlRenderer, serialize_blocks

__all__ = [
    "BaseComponent",
    "DEFAULT_COMPONENTS",
    "HtmlRenderer",
    "RenderContext",
    "TextRun",
    "serialize_blocks",
    "testimonial_segments",
]
