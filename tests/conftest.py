from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Any, Callable

import pytest
from sqlalchemy.engine import Engine

from page_blocks.db.engine import create_engine
from page_blocks.db.schema import Base, DbContentBlock, DbPage, create_all
from page_blocks.models.block import Block, BlockType, build_block
from page_blocks.repositories.page_repository import PageRepository

SAMPLE_PAGE = """<!DOCTYPE html>
<html>
<head><title>Acme</title><style>body { font-family: sans-serif; }</style></head>
<body>
<nav class="top">Acme</nav>
<main>
<h1 data-element="headline" style="color: red; font-size: 32px">Ship faster</h1>
<h2 class="hero-subheadline">Tools for small teams</h2>
<ul data-element="feature-list"><li>Fast</li><li>Simple</li></ul>
<button data-element="cta">Get Started</button>
<blockquote data-element="testimonial">Loved it. <span class="author">Jane</span> <span class="role">CTO</span> <span class="company">Acme</span></blockquote>
<p>Plain paragraph.</p>
<footer>Copyright Acme</footer>
</main>
<script>console.log("ready");</script>
</body>
</html>
"""


@pytest.fixture(scope="session")
def postgres_url() -> str | None:
    """Return the Postgres test URL if provided via env."""
    return os.getenv("POSTGRES_TEST_URL") or os.getenv("DATABASE_URL")


@pytest.fixture
def engine(postgres_url: str | None) -> Iterator[Engine]:
    """Yield an engine targeting Postgres when configured; otherwise SQLite in-memory."""
    engine = create_engine(postgres_url) if postgres_url else create_engine()
    create_all(engine)
    try:
        yield engine
    finally:
        with engine.begin() as connection:
            if engine.dialect.name == "sqlite":
                Base.metadata.drop_all(bind=connection)
            else:
                connection.execute(DbContentBlock.__table__.delete())
                connection.execute(DbPage.__table__.delete())


@pytest.fixture
def session_factory(engine: Engine):
    from page_blocks.db.engine import create_session_factory

    return create_session_factory(engine)


@pytest.fixture
def repository(session_factory) -> PageRepository:
    return PageRepository(session_factory)


@pytest.fixture
def sample_page() -> str:
    return SAMPLE_PAGE


@pytest.fixture
def block_factory() -> Callable[..., Block]:
    counter = {"next": 100}

    def _factory(
        block_type: BlockType | str = BlockType.PARAGRAPH,
        content: Any = None,
        *,
        block_id: str | None = None,
        styles: dict[str, Any] | None = None,
    ) -> Block:
        if block_id is None:
            block_id = f"block-{counter['next']}"
            counter["next"] += 1
        return build_block(block_type, block_id=block_id, content=content, styles=styles)

    return _factory
