"""Startup helpers for opening a page for editing."""

from __future__ import annotations

from page_blocks.config import ParserConfig
from page_blocks.parser.html_parser import parse_html
from page_blocks.repositories.base import StorageClient
from page_blocks.store.block_store import ChangeHook, OrderedBlockStore
from page_blocks.store.pages import load_page


def open_page(
    storage: StorageClient,
    project_id: str,
    page_id: str,
    *,
    initial_html: str | None = None,
    on_change: ChangeHook | None = None,
    config: ParserConfig | None = None,
) -> OrderedBlockStore:
    """Return a store for the page, loading stored blocks or parsing ``initial_html``.

    - Stored blocks win; loading them does not trigger a save.
    - Otherwise ``initial_html`` (typically freshly generated) is parsed and the
      result is handed to ``on_change`` so it gets persisted.
    - With neither, the store starts empty (keeping any stored theme).
    """
    snapshot = load_page(storage, project_id, page_id, config=config)
    store = OrderedBlockStore(
        project_id,
        page_id,
        blocks=snapshot.blocks,
        theme=snapshot.theme,
        on_change=on_change,
    )
    if snapshot.blocks or not initial_html:
        return store

    parsed = parse_html(initial_html, config=config)
    store.load(parsed.blocks, parsed.theme)
    return store


__all__ = ["open_page"]
