from __future__ import annotations

import threading

import pytest

from page_blocks.errors import PersistenceError
from page_blocks.models.block import PageSnapshot
from page_blocks.store import OrderedBlockStore, PersistenceQueue


def _snapshot(label: str) -> PageSnapshot:
    return PageSnapshot(project_id="p", page_id=label)


def test_saves_are_serialized_and_coalesced() -> None:
    started = threading.Event()
    release = threading.Event()
    saved: list[str] = []
    active = {"count": 0, "max": 0}
    lock = threading.Lock()

    def _save(snapshot: PageSnapshot) -> None:
        with lock:
            active["count"] += 1
            active["max"] = max(active["max"], active["count"])
        if snapshot.page_id == "first":
            started.set()
            release.wait(timeout=5)
        saved.append(snapshot.page_id)
        with lock:
            active["count"] -= 1

    with PersistenceQueue(_save) as queue:
        queue.submit(_snapshot("first"))
        assert started.wait(timeout=5)
        for label in ("second", "third", "fourth"):
            queue.submit(_snapshot(label))
        release.set()
        assert queue.flush(timeout=5)

    assert saved == ["first", "fourth"]
    assert active["max"] == 1
    assert queue.saved_count == 2


def test_failures_are_reported_and_do_not_stop_the_worker(caplog) -> None:
    errors: list[tuple[str, str]] = []

    def _save(snapshot: PageSnapshot) -> None:
        if snapshot.page_id == "bad":
            raise RuntimeError("disk full")

    queue = PersistenceQueue(_save, on_error=lambda snap, exc: errors.append((snap.page_id, str(exc))))
    try:
        with caplog.at_level("ERROR"):
            queue.submit(_snapshot("bad"))
            assert queue.flush(timeout=5)
        queue.submit(_snapshot("good"))
        assert queue.flush(timeout=5)
    finally:
        queue.close(timeout=5)

    assert errors == [("bad", "disk full")]
    assert queue.failed_count == 1
    assert queue.saved_count == 1
    assert isinstance(queue.last_error, RuntimeError)
    assert "Saving page p/bad failed" in caplog.text


def test_error_callback_failures_are_contained() -> None:
    def _save(snapshot: PageSnapshot) -> None:
        raise RuntimeError("boom")

    def _on_error(snapshot: PageSnapshot, exc: Exception) -> None:
        raise ValueError("callback broke")

    queue = PersistenceQueue(_save, on_error=_on_error)
    queue.submit(_snapshot("x"))
    assert queue.flush(timeout=5)
    queue.submit(_snapshot("y"))
    assert queue.flush(timeout=5)
    queue.close(timeout=5)

    assert queue.failed_count == 2


def test_close_writes_pending_snapshot_and_rejects_new_ones() -> None:
    saved: list[str] = []
    queue = PersistenceQueue(lambda snapshot: saved.append(snapshot.page_id))

    queue.submit(_snapshot("last"))
    queue.close(timeout=5)

    assert saved == ["last"]
    assert queue.closed
    with pytest.raises(PersistenceError):
        queue.submit(_snapshot("late"))


def test_queue_as_store_change_hook(block_factory) -> None:
    saved: list[PageSnapshot] = []

    with PersistenceQueue(saved.append) as queue:
        store = OrderedBlockStore("p", "page", on_change=queue)
        for index in range(5):
            store.append(block_factory(block_id=f"block-{index + 1}"))
        assert queue.flush(timeout=5)

    assert saved
    assert [block.id for block in saved[-1].blocks] == [f"block-{n}" for n in range(1, 6)]
