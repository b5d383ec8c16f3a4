"""Factory helpers for wiring a page store to persistence."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from sqlalchemy.orm import Session, sessionmaker

from page_blocks.config import ParserConfig
from page_blocks.repositories.base import StorageClient
from page_blocks.repositories.page_repository import PageRepository

from .block_store import OrderedBlockStore
from .persistence import ErrorFn, PersistenceQueue
from .pages import save_page


@dataclass(slots=True)
class PageSession:
    """An open page: its store, the write queue feeding storage, and the storage."""

    store: OrderedBlockStore
    queue: PersistenceQueue
    storage: StorageClient

    def __enter__(self) -> PageSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def flush(self, timeout: float | None = None) -> bool:
        return self.queue.flush(timeout)

    def close(self, timeout: float | None = None) -> None:
        self.queue.close(timeout)

    def delete_page(self) -> None:
        """Drop the page from storage and clear the in-memory state."""
        self.queue.flush()
        self.storage.delete_page(self.store.project_id, self.store.page_id)
        self.store.clear()


def open_page_session(
    storage: StorageClient,
    project_id: str,
    page_id: str,
    *,
    initial_html: str | None = None,
    on_error: ErrorFn | None = None,
    config: ParserConfig | None = None,
) -> PageSession:
    """Open a page whose edits are saved through a ``PersistenceQueue``."""
    from page_blocks.startup import open_page

    queue = PersistenceQueue(
        partial(save_page, storage, config=config),
        on_error=on_error,
        name=f"persist-{project_id}-{page_id}",
    )
    store = open_page(
        storage,
        project_id,
        page_id,
        initial_html=initial_html,
        on_change=queue,
        config=config,
    )
    return PageSession(store=store, queue=queue, storage=storage)


def create_page_session(
    session_factory: sessionmaker[Session],
    project_id: str,
    page_id: str,
    *,
    initial_html: str | None = None,
    on_error: ErrorFn | None = None,
    config: ParserConfig | None = None,
) -> PageSession:
    """Build a PageSession backed by the default SQLAlchemy repository."""
    return open_page_session(
        PageRepository(session_factory),
        project_id,
        page_id,
        initial_html=initial_html,
        on_error=on_error,
        config=config,
    )


__all__ = ["PageSession", "create_page_session", "open_page_session"]
