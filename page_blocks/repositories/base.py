"""Storage client interface consumed by the page store."""

from __future__ import annotations

from typing import Protocol, Sequence

from page_blocks.models.rows import BlockRow, PageRow


class StorageClient(Protocol):
    def list_blocks(self, project_id: str, page_id: str) -> list[BlockRow]:
        """Return the page's block rows ordered by ``order_index``."""
        ...

    def delete_blocks(self, project_id: str, page_id: str) -> int:
        ...

    def insert_blocks(self, rows: Sequence[BlockRow]) -> None:
        ...

    def replace_blocks(self, project_id: str, page_id: str, rows: Sequence[BlockRow]) -> None:
        """Delete the page's rows and insert ``rows`` as one unit of work."""
        ...

    def get_page(self, project_id: str, page_id: str) -> PageRow | None:
        ...

    def upsert_page(self, row: PageRow) -> None:
        ...

    def delete_page(self, project_id: str, page_id: str) -> None:
        ...
