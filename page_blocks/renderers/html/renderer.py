"""Renderer entry-point that writes blocks back into a theme document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from bs4 import BeautifulSoup, Tag

from page_blocks.config import ParserConfig
from page_blocks.errors import SerializationError
from page_blocks.models.blocks import Block, BlockType
from page_blocks.models.page import Theme
from page_blocks.parser.html_parser import find_wrapper, make_soup
from page_blocks.renderers.base import RenderOptions, Renderer, RendererComponent

from .components import DEFAULT_COMPONENTS, TextComponent


def _default_components() -> dict[BlockType, RendererComponent]:
    return dict(DEFAULT_COMPONENTS)


@dataclass(slots=True)
class HtmlRenderer(Renderer):
    config: ParserConfig = field(default_factory=ParserConfig)
    _components: dict[BlockType, RendererComponent] = field(default_factory=dict)
    _fallback_component: RendererComponent | None = None

    def __post_init__(self) -> None:
        if not self._components:
            self._components = _default_components()
        if self._fallback_component is None:
            self._fallback_component = TextComponent("div")

    def register(self, block_type: BlockType, component: RendererComponent) -> None:
        self._components[block_type] = component

    def render(
        self,
        blocks: Sequence[Block],
        theme: Theme,
        *,
        options: RenderOptions | None = None,
    ) -> str:
        """Return ``theme`` with one element per block appended to its wrapper.

        Raises ``SerializationError`` when there are blocks to place but the
        theme has no wrapper, or when a component emits a nested wrapper.
        """
        opts = options or RenderOptions()
        soup = make_soup(theme.html, self.config)
        wrapper = find_wrapper(soup, self.config)

        if wrapper is None:
            if blocks:
                raise SerializationError(
                    f"Theme has no <{self.config.wrapper_tag}> wrapper to hold {len(blocks)} block(s)."
                )
            return theme.html

        wrapper.clear()
        for block in blocks:
            wrapper.append(self._render_block(block, soup, opts))
        return str(soup)

    # Internal helpers -------------------------------------------------
    def _render_block(self, block: Block, soup: BeautifulSoup, options: RenderOptions) -> Tag:
        component = self._components.get(block.type, self._fallback_component)
        assert component is not None, "Fallback component must be configured"
        element = component.render(block, soup=soup, options=options, config=self.config)

        wrapper_tag = self.config.wrapper_tag
        if element.name == wrapper_tag or element.find(wrapper_tag) is not None:
            raise SerializationError(
                f"Block {block.id} rendered a nested <{wrapper_tag}> element."
            )
        return element


def serialize_blocks(
    blocks: Sequence[Block],
    theme: Theme,
    *,
    config: ParserConfig | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Rebuild a full document from ``blocks`` and ``theme``."""
    renderer = HtmlRenderer(config=config or ParserConfig())
    return renderer.render(blocks, theme, options=options)


__all__ = ["HtmlRenderer", "serialize_blocks"]
