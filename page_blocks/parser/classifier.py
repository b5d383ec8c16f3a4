"""Map wrapper children onto the closed block type vocabulary."""

from __future__ import annotations

from bs4 import Tag

from page_blocks.config import ParserConfig
from page_blocks.models.blocks import BLOCK_TYPE_ALIASES, BlockType, canonical_block_type

TAG_TYPE_MAP: dict[str, BlockType] = {
    "h1": BlockType.HEADLINE,
    "h2": BlockType.SUBHEADLINE,
    "ul": BlockType.FEATURE_LIST,
    "ol": BlockType.FEATURE_LIST,
    "button": BlockType.CALL_TO_ACTION,
    "blockquote": BlockType.TESTIMONIAL,
    "p": BlockType.PARAGRAPH,
    "a": BlockType.LINK,
    "footer": BlockType.FOOTER,
    "svg": BlockType.ILLUSTRATION,
}

# Longest first so "subheadline" wins over "headline" and "feature-list" over "feature".
CLASS_HINTS: tuple[str, ...] = tuple(
    sorted(
        {block_type.value for block_type in BlockType} | set(BLOCK_TYPE_ALIASES),
        key=lambda name: (-len(name), name),
    )
)

_DEFAULT_CONFIG = ParserConfig()


def classify(element: Tag, *, config: ParserConfig | None = None) -> BlockType | None:
    """Return the block type for ``element`` or ``None`` when it is not a block.

    Resolution order: marker attributes, class name hints, then tag name.
    """
    cfg = config or _DEFAULT_CONFIG
    return (
        _from_marker(element, cfg.marker_attributes)
        or _from_class_names(element)
        or TAG_TYPE_MAP.get((element.name or "").lower())
    )


def _from_marker(element: Tag, attributes: tuple[str, ...]) -> BlockType | None:
    for attribute in attributes:
        value = element.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        block_type = canonical_block_type(value)
        if block_type is not None:
            return block_type
    return None


def _from_class_names(element: Tag) -> BlockType | None:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    lowered = [name.lower() for name in classes]
    if not lowered:
        return None
    for hint in CLASS_HINTS:
        if any(hint in name for name in lowered):
            return canonical_block_type(hint)
    return None


__all__ = ["CLASS_HINTS", "TAG_TYPE_MAP", "classify"]
