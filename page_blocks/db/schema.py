"""SQLAlchemy declarative schema for stored pages and their blocks."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.sqltypes import JSON

JSON_TYPE = JSON().with_variant(JSONB, "postgresql")


class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative mappings."""


class DbContentBlock(Base):
    """ORM mapping for one block of a page."""

    __tablename__ = "content_blocks"
    __table_args__ = (
        Index("ix_content_blocks_page_order", "project_id", "page_id", "order_index"),
    )

    project_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    page_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    block_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    styles: Mapped[dict[str, Any] | None] = mapped_column(JSON_TYPE, nullable=True)
    created_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    last_edited_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class DbPage(Base):
    """ORM mapping for a page's theme and last serialized document."""

    __tablename__ = "pages"

    project_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    page_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    theme_html: Mapped[str] = mapped_column(Text, nullable=False, default="")
    html_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    last_edited_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


def create_all(engine: Engine) -> None:
    """Create database tables for the schema."""
    Base.metadata.create_all(engine, checkfirst=True)


__all__ = ["Base", "DbContentBlock", "DbPage", "create_all"]
