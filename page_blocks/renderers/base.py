"""Renderer interfaces and shared helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from bs4 import BeautifulSoup, Tag

from page_blocks.config import ParserConfig
from page_blocks.models.blocks import Block
from page_blocks.models.page import Theme


@dataclass(slots=True)
class RenderOptions:
    include_styles: bool = True
    include_markers: bool = True


class Renderer(Protocol):
    def render(
        self,
        blocks: Sequence[Block],
        theme: Theme,
        *,
        options: RenderOptions | None = None,
    ) -> str:
        ...


class RendererComponent(Protocol):
    def render(
        self,
        block: Block,
        *,
        soup: BeautifulSoup,
        options: RenderOptions,
        config: ParserConfig,
    ) -> Tag:
        ...
