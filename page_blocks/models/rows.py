"""Persisted record shapes exchanged with the storage client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class BlockRow(BaseModel):
    """One stored block; ``content`` is JSON text for structured payloads."""

    project_id: str
    page_id: str
    block_id: str
    type: str
    content: str
    order_index: int
    styles: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


class PageRow(BaseModel):
    project_id: str
    page_id: str
    theme_html: str = ""
    html_content: str | None = None

    model_config = ConfigDict(frozen=True)


__all__ = ["BlockRow", "PageRow"]
