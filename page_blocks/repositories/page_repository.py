"""SQLAlchemy-backed storage client for pages and their block rows."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from page_blocks.db.schema import DbContentBlock, DbPage
from page_blocks.models.rows import BlockRow, PageRow


class RepositoryError(RuntimeError):
    """Base class for repository-level errors."""


class DuplicateBlockError(RepositoryError):
    """Raised when a batch insert collides with an existing block row."""


class PageRepository:
    """Repository that persists block rows and page rows."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    # ------------------------------------------------------------------ Blocks
    def list_blocks(self, project_id: str, page_id: str) -> list[BlockRow]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(DbContentBlock)
                .where(
                    DbContentBlock.project_id == project_id,
                    DbContentBlock.page_id == page_id,
                )
                .order_by(DbContentBlock.order_index.asc())
            ).all()
        return [self._to_block_row(row) for row in rows]

    def delete_blocks(self, project_id: str, page_id: str) -> int:
        with self._session_factory() as session:
            deleted = self._delete_blocks(session, project_id, page_id)
            session.commit()
        return deleted

    def insert_blocks(self, rows: Sequence[BlockRow]) -> None:
        """Insert block rows in bulk; colliding keys raise ``DuplicateBlockError``."""
        if not rows:
            return
        with self._session_factory() as session:
            session.add_all(DbContentBlock(**row.model_dump()) for row in rows)
            self._commit_inserts(session)

    def replace_blocks(self, project_id: str, page_id: str, rows: Sequence[BlockRow]) -> None:
        """Swap the page's block rows for ``rows`` inside a single transaction."""
        foreign = [row for row in rows if (row.project_id, row.page_id) != (project_id, page_id)]
        if foreign:
            raise RepositoryError(
                f"Rows for {foreign[0].project_id}/{foreign[0].page_id} "
                f"cannot replace blocks of {project_id}/{page_id}."
            )
        with self._session_factory() as session:
            self._delete_blocks(session, project_id, page_id)
            session.add_all(DbContentBlock(**row.model_dump()) for row in rows)
            self._commit_inserts(session)

    # ------------------------------------------------------------------- Pages
    def get_page(self, project_id: str, page_id: str) -> PageRow | None:
        with self._session_factory() as session:
            db_row = session.get(DbPage, (project_id, page_id))
            if db_row is None:
                return None
            return PageRow(
                project_id=db_row.project_id,
                page_id=db_row.page_id,
                theme_html=db_row.theme_html or "",
                html_content=db_row.html_content,
            )

    def upsert_page(self, row: PageRow) -> None:
        payload = row.model_dump()
        with self._session_factory() as session:
            bind = session.get_bind()
            if bind is not None and bind.dialect.name == "postgresql":
                stmt = pg_insert(DbPage).values(payload)
                session.execute(
                    stmt.on_conflict_do_update(
                        index_elements=[DbPage.project_id, DbPage.page_id],
                        set_={
                            "theme_html": stmt.excluded.theme_html,
                            "html_content": stmt.excluded.html_content,
                        },
                    )
                )
            else:
                session.merge(DbPage(**payload))
            session.commit()

    def delete_page(self, project_id: str, page_id: str) -> None:
        """Remove the page row and every block row that belongs to it."""
        with self._session_factory() as session:
            self._delete_blocks(session, project_id, page_id)
            session.execute(
                delete(DbPage).where(
                    DbPage.project_id == project_id,
                    DbPage.page_id == page_id,
                )
            )
            session.commit()

    # ----------------------------------------------------------------- Helpers
    @staticmethod
    def _delete_blocks(session: Session, project_id: str, page_id: str) -> int:
        result = session.execute(
            delete(DbContentBlock).where(
                DbContentBlock.project_id == project_id,
                DbContentBlock.page_id == page_id,
            )
        )
        return result.rowcount or 0

    @staticmethod
    def _commit_inserts(session: Session) -> None:
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise DuplicateBlockError(f"Block rows collide with stored rows: {exc.orig}") from exc

    @staticmethod
    def _to_block_row(record: DbContentBlock) -> BlockRow:
        return BlockRow(
            project_id=record.project_id,
            page_id=record.page_id,
            block_id=record.block_id,
            type=record.type,
            content=record.content,
            order_index=record.order_index,
            styles=record.styles,
        )


__all__ = ["DuplicateBlockError", "PageRepository", "RepositoryError"]
