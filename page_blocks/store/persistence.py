"""Background writer that persists page snapshots one at a time."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from page_blocks.errors import PersistenceError
from page_blocks.models.page import PageSnapshot

logger = logging.getLogger(__name__)

SaveFn = Callable[[PageSnapshot], None]
ErrorFn = Callable[[PageSnapshot, Exception], None]


class PersistenceQueue:
    """Single-worker write queue for one page.

    At most one save runs at a time. Snapshots submitted while a save is in
    flight replace each other, so only the latest one is written next.
    Failures are logged and passed to ``on_error``; nothing is retried.
    Instances are callable and can be used directly as a store change hook.
    """

    def __init__(
        self,
        save: SaveFn,
        *,
        on_error: ErrorFn | None = None,
        name: str = "page-blocks-persistence",
    ):
        self._save = save
        self._on_error = on_error
        self._condition = threading.Condition()
        self._pending: PageSnapshot | None = None
        self._busy = False
        self._closed = False
        self.saved_count = 0
        self.failed_count = 0
        self.last_error: Exception | None = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def __call__(self, snapshot: PageSnapshot) -> None:
        self.submit(snapshot)

    def __enter__(self) -> PersistenceQueue:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, snapshot: PageSnapshot) -> None:
        """Schedule ``snapshot`` for saving, replacing any not-yet-started one."""
        with self._condition:
            if self._closed:
                raise PersistenceError("Persistence queue is closed.")
            self._pending = snapshot
            self._condition.notify_all()

    def flush(self, timeout: float | None = None) -> bool:
        """Block until nothing is pending or running; ``False`` on timeout."""
        with self._condition:
            return self._condition.wait_for(
                lambda: self._pending is None and not self._busy,
                timeout=timeout,
            )

    def close(self, timeout: float | None = None) -> None:
        """Write whatever is pending, then stop the worker."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()
        self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._pending is not None or self._closed)
                if self._pending is None:
                    return
                snapshot, self._pending = self._pending, None
                self._busy = True

            try:
                self._save(snapshot)
            except Exception as exc:
                logger.exception(
                    "Saving page %s/%s failed", snapshot.project_id, snapshot.page_id
                )
                self._report(snapshot, exc)
            else:
                self.saved_count += 1
            finally:
                with self._condition:
                    self._busy = False
                    self._condition.notify_all()

    def _report(self, snapshot: PageSnapshot, exc: Exception) -> None:
        self.failed_count += 1
        self.last_error = exc
        if self._on_error is None:
            return
        try:
            self._on_error(snapshot, exc)
        except Exception:
            logger.exception("Persistence error callback failed")


__all__ = ["PersistenceQueue"]
