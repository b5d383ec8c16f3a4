"""Theme and page snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .blocks import Block


class Theme(BaseModel):
    """Full document template whose content wrapper is empty."""

    html: str = ""

    model_config = ConfigDict(frozen=True)


class PageSnapshot(BaseModel):
    """Ordered blocks and theme of one page at a point in time.

    A block's order index is its position in ``blocks``.
    """

    project_id: str
    page_id: str
    blocks: tuple[Block, ...] = Field(default_factory=tuple)
    theme: Theme = Field(default_factory=Theme)

    model_config = ConfigDict(frozen=True)

    def order_indexes(self) -> list[tuple[str, int]]:
        return [(block.id, index) for index, block in enumerate(self.blocks)]


__all__ = ["PageSnapshot", "Theme"]
