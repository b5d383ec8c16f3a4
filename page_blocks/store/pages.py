"""Conversion between in-memory pages and stored rows."""

from __future__ import annotations

import json
import logging
from typing import Any

from page_blocks.config import ParserConfig
from page_blocks.errors import PersistenceError, SerializationError
from page_blocks.models.blocks import (
    Block,
    BlockType,
    StructuredContent,
    build_block,
    canonical_block_type,
    content_model_for,
)
from page_blocks.models.page import PageSnapshot, Theme
from page_blocks.models.rows import BlockRow, PageRow
from page_blocks.parser.html_parser import parse_theme
from page_blocks.renderers.html import serialize_blocks
from page_blocks.repositories.base import StorageClient

logger = logging.getLogger(__name__)


def block_to_row(block: Block, *, project_id: str, page_id: str, order_index: int) -> BlockRow:
    if isinstance(block.content, StructuredContent):
        content = json.dumps(block.content.model_dump(mode="json"))
    else:
        content = "" if block.content is None else str(block.content)
    styles = (
        block.styles.model_dump(by_alias=True, exclude_none=True)
        if block.styles is not None and not block.styles.is_empty()
        else None
    )
    return BlockRow(
        project_id=project_id,
        page_id=page_id,
        block_id=block.id,
        type=block.type.value,
        content=content,
        order_index=order_index,
        styles=styles,
    )


def row_to_block(row: BlockRow) -> Block | None:
    """Rebuild a block from its row; rows with an unknown type yield ``None``."""
    block_type = canonical_block_type(row.type)
    if block_type is None:
        logger.warning("Skipping block %s with unknown type %r", row.block_id, row.type)
        return None

    content: Any = row.content
    if content_model_for(block_type) is not None:
        content = _decode_structured(block_type, row)
    return build_block(block_type, block_id=row.block_id, content=content, styles=row.styles)


def snapshot_to_rows(snapshot: PageSnapshot) -> list[BlockRow]:
    return [
        block_to_row(
            block,
            project_id=snapshot.project_id,
            page_id=snapshot.page_id,
            order_index=index,
        )
        for index, block in enumerate(snapshot.blocks)
    ]


def save_page(
    storage: StorageClient,
    snapshot: PageSnapshot,
    *,
    config: ParserConfig | None = None,
) -> None:
    """Replace the stored blocks of the page and upsert its page row.

    The page row also receives the serialized document. Storage failures are
    raised as ``PersistenceError``.
    """
    rows = snapshot_to_rows(snapshot)
    html_content: str | None = None
    if snapshot.theme.html:
        try:
            html_content = serialize_blocks(snapshot.blocks, snapshot.theme, config=config)
        except SerializationError:
            logger.exception(
                "Could not serialize page %s/%s; storing blocks without document HTML",
                snapshot.project_id,
                snapshot.page_id,
            )

    try:
        storage.replace_blocks(snapshot.project_id, snapshot.page_id, rows)
        storage.upsert_page(
            PageRow(
                project_id=snapshot.project_id,
                page_id=snapshot.page_id,
                theme_html=snapshot.theme.html,
                html_content=html_content,
            )
        )
    except Exception as exc:
        raise PersistenceError(
            f"Failed to save page {snapshot.project_id}/{snapshot.page_id}: {exc}"
        ) from exc


def load_page(
    storage: StorageClient,
    project_id: str,
    page_id: str,
    *,
    config: ParserConfig | None = None,
) -> PageSnapshot:
    """Read a page back; the theme falls back to parsing the stored document."""
    try:
        rows = storage.list_blocks(project_id, page_id)
        page_row = storage.get_page(project_id, page_id)
    except Exception as exc:
        raise PersistenceError(f"Failed to load page {project_id}/{page_id}: {exc}") from exc

    blocks = [
        block
        for row in sorted(rows, key=lambda item: item.order_index)
        if (block := row_to_block(row)) is not None
    ]

    theme = Theme()
    if page_row is not None:
        if page_row.theme_html:
            theme = Theme(html=page_row.theme_html)
        elif page_row.html_content:
            theme = parse_theme(page_row.html_content, config=config)

    return PageSnapshot(project_id=project_id, page_id=page_id, blocks=tuple(blocks), theme=theme)


def _decode_structured(block_type: BlockType, row: BlockRow) -> Any:
    if not row.content:
        return {}
    try:
        payload = json.loads(row.content)
    except json.JSONDecodeError:
        logger.warning("Block %s has non-JSON %s content", row.block_id, block_type.value)
        payload = None
    if isinstance(payload, dict):
        return payload
    if block_type is BlockType.FEATURE_LIST:
        return {"features": [line for line in row.content.splitlines() if line.strip()]}
    return {"text": row.content}


__all__ = [
    "block_to_row",
    "load_page",
    "row_to_block",
    "save_page",
    "snapshot_to_rows",
]
