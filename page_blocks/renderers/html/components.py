"""HTML renderer component implementations."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from page_blocks.config import ParserConfig
from page_blocks.models.blocks import (
    TESTIMONIAL_FIELDS,
    Block,
    BlockType,
    FeatureListContent,
    TestimonialContent,
)
from page_blocks.renderers.base import RenderOptions, RendererComponent

# ---------------------------------------------------------------------------
# Rendering context & base component


@dataclass(slots=True)
class RenderContext:
    soup: BeautifulSoup
    options: RenderOptions
    config: ParserConfig

    def element_for(self, block: Block, tag_name: str) -> Tag:
        """Create the block's root element with marker and inline styles applied."""
        element = self.soup.new_tag(tag_name)
        if self.options.include_markers:
            element[self.config.primary_marker] = block.type.value
        if self.options.include_styles and block.styles is not None and not block.styles.is_empty():
            element["style"] = block.styles.to_css()
        return element

    def child(self, parent: Tag, tag_name: str, text: str, *, css_class: str | None = None) -> Tag:
        element = self.soup.new_tag(tag_name)
        if css_class:
            element["class"] = css_class
        element.string = text
        parent.append(element)
        return element


class BaseComponent(RendererComponent):
    def render(
        self,
        block: Block,
        *,
        soup: BeautifulSoup,
        options: RenderOptions,
        config: ParserConfig,
    ) -> Tag:
        ctx = RenderContext(soup=soup, options=options, config=config)
        return self.render_block(block, ctx)

    def render_block(self, block: Block, ctx: RenderContext) -> Tag:  # pragma: no cover - abstract
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Component implementations


class TextComponent(BaseComponent):
    """Single element holding the block text."""

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name

    def render_block(self, block: Block, ctx: RenderContext) -> Tag:
        element = ctx.element_for(block, self.tag_name)
        text = block.content_text()
        if text:
            element.string = text
        return element


class LinkComponent(TextComponent):
    def __init__(self, href: str = "#") -> None:
        super().__init__("a")
        self.href = href

    def render_block(self, block: Block, ctx: RenderContext) -> Tag:
        element = super().render_block(block, ctx)
        element["href"] = self.href
        return element


class IllustrationComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> Tag:
        element = ctx.element_for(block, "svg")
        element["xmlns"] = "http://www.w3.org/2000/svg"
        text = block.content_text()
        if text:
            ctx.child(element, "text", text)
        return element


class FeatureListComponent(BaseComponent):
    def render_block(self, block: Block, ctx: RenderContext) -> Tag:
        element = ctx.element_for(block, "ul")
        content = block.content if isinstance(block.content, FeatureListContent) else FeatureListContent()
        for feature in content.features:
            ctx.child(element, "li", feature)
        return element


class TestimonialComponent(BaseComponent):
    """Quote text with author/role/company spans placed inside it.

    Parsed testimonials keep the attribution inside ``text``; each field is
    wrapped where it occurs so the element text stays equal to ``text``.
    A field found inside another field's text becomes a span nested in that
    field's span. Fields that do not occur in ``text`` are appended after it.
    """

    def render_block(self, block: Block, ctx: RenderContext) -> Tag:
        element = ctx.element_for(block, "blockquote")
        content = block.content if isinstance(block.content, TestimonialContent) else TestimonialContent()
        _append_runs(element, testimonial_segments(content), ctx)
        return element


def _append_runs(parent: Tag, runs: list[TextRun], ctx: RenderContext) -> None:
    for run in runs:
        if run.css_class is None:
            parent.append(ctx.soup.new_string(run.text))
            continue
        span = ctx.soup.new_tag("span")
        span["class"] = run.css_class
        parent.append(span)
        _append_runs(span, run.children, ctx)


@dataclass(slots=True)
class TextRun:
    """Plain text when ``css_class`` is ``None``, otherwise a span of nested runs."""

    css_class: str | None
    text: str
    children: list[TextRun] = field(default_factory=list)


def testimonial_segments(content: TestimonialContent) -> list[TextRun]:
    """Split a testimonial into top-level runs with attribution spans nested as found."""
    text = content.text
    taken: list[tuple[int, int]] = []
    placed: list[tuple[int, int, int, str]] = []
    unplaced: list[tuple[str, str]] = []

    # Longest values first so enclosing spans are placed before the ones they hold.
    candidates = [
        (name, value) for name in TESTIMONIAL_FIELDS if (value := getattr(content, name))
    ]
    candidates.sort(key=lambda item: -len(item[1]))
    for name, value in candidates:
        position = _find_slot(text, value, taken)
        if position < 0:
            unplaced.append((name, value))
            continue
        stop = position + len(value)
        taken.append((position, stop))
        placed.append((position, -len(value), len(placed), name))

    spans = [(start, start - neg_length, name) for start, neg_length, _, name in sorted(placed)]
    runs = _runs(text, 0, len(text), spans)

    for name, value in unplaced:
        if runs:
            runs.append(TextRun(None, " "))
        runs.append(TextRun(name, value, [TextRun(None, value)]))
    return runs


def _runs(text: str, start: int, end: int, spans: list[tuple[int, int, str]]) -> list[TextRun]:
    """Runs covering ``text[start:end]``; ``spans`` lie inside it, sorted outermost first."""
    runs: list[TextRun] = []
    cursor = start
    index = 0
    while index < len(spans):
        span_start, span_end, name = spans[index]
        index += 1
        inner_from = index
        while index < len(spans) and spans[index][0] < span_end:
            index += 1
        if span_start > cursor:
            runs.append(TextRun(None, text[cursor:span_start]))
        children = _runs(text, span_start, span_end, spans[inner_from:index])
        runs.append(TextRun(name, text[span_start:span_end], children))
        cursor = span_end
    if cursor < end:
        runs.append(TextRun(None, text[cursor:end]))
    return runs


def _find_slot(text: str, value: str, taken: list[tuple[int, int]]) -> int:
    """Index for ``value`` in ``text``, or -1.

    The last occurrence clear of every ``taken`` range wins; failing that, the
    last one lying wholly inside a taken range. Partial overlaps never qualify.
    """
    # Attribution usually trails the quote, so search from the end.
    nested = -1
    position = text.rfind(value)
    while position >= 0:
        stop = position + len(value)
        if all(stop <= start or position >= end for start, end in taken):
            return position
        if nested < 0 and all(
            stop <= start or position >= end or (start <= position and stop <= end)
            for start, end in taken
        ):
            nested = position
        position = text.rfind(value, 0, stop - 1)
    return nested


DEFAULT_COMPONENTS: dict[BlockType, RendererComponent] = {
    BlockType.HEADLINE: TextComponent("h1"),
    BlockType.SUBHEADLINE: TextComponent("h2"),
    BlockType.FEATURE_LIST: FeatureListComponent(),
    BlockType.CALL_TO_ACTION: TextComponent("button"),
    BlockType.TESTIMONIAL: TestimonialComponent(),
    BlockType.PARAGRAPH: TextComponent("p"),
    BlockType.LINK: LinkComponent(),
    BlockType.FOOTER: TextComponent("footer"),
    BlockType.ILLUSTRATION: IllustrationComponent(),
}


__all__ = [
    "BaseComponent",
    "DEFAULT_COMPONENTS",
    "FeatureListComponent",
    "IllustrationComponent",
    "LinkComponent",
    "RenderContext",
    "TestimonialComponent",
    "TextComponent",
    "TextRun",
    "testimonial_segments",
]
