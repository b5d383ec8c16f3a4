from __future__ import annotations

from page_blocks import open_page
from page_blocks.models.block import BlockType
from page_blocks.store import create_page_session, load_page


def test_open_page_parses_initial_html_and_persists(repository, sample_page: str) -> None:
    saved = []

    store = open_page(repository, "project-1", "home", initial_html=sample_page, on_change=saved.append)

    assert len(store) == 7
    assert len(saved) == 1
    assert saved[0].blocks == store.blocks


def test_open_page_prefers_stored_blocks(session_factory, sample_page: str) -> None:
    with create_page_session(session_factory, "project-1", "home", initial_html=sample_page) as session:
        session.store.move_to("block-7", 0)
        assert session.flush(timeout=5)

    saved = []
    store = open_page(
        session.storage,
        "project-1",
        "home",
        initial_html="<body><main><h1>Ignored</h1></main></body>",
        on_change=saved.append,
    )

    assert [block.id for block in store.blocks][:2] == ["block-7", "block-1"]
    assert saved == []


def test_open_page_without_content_is_empty(repository) -> None:
    store = open_page(repository, "project-1", "blank")
    assert len(store) == 0
    assert store.new_block(BlockType.HEADLINE).id == "block-1"


def test_page_session_persists_edits_in_background(session_factory, sample_page: str) -> None:
    errors = []
    session = create_page_session(
        session_factory,
        "project-1",
        "home",
        initial_html=sample_page,
        on_error=lambda snapshot, exc: errors.append(exc),
    )
    try:
        store = session.store
        store.delete_by_id("block-2")
        added = store.new_block("cta", "Buy now")
        store.insert_at(added, 1)
        store.replace_content("block-1", {"content": "Renamed"})
        assert session.flush(timeout=5)
    finally:
        session.close(timeout=5)

    assert errors == []
    loaded = load_page(session.storage, "project-1", "home")
    assert [block.id for block in loaded.blocks] == [block.id for block in session.store.blocks]
    assert loaded.blocks[0].content == "Renamed"
    assert loaded.blocks[1].content == "Buy now"
    assert session.queue.saved_count >= 1


def test_page_session_delete_page(session_factory, sample_page: str) -> None:
    with create_page_session(session_factory, "project-1", "home", initial_html=sample_page) as session:
        assert session.flush(timeout=5)
        session.delete_page()

        assert len(session.store) == 0
        assert session.storage.get_page("project-1", "home") is None
