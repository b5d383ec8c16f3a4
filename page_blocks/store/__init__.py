"""Page store orchestration helpers."""

from .block_store import ChangeHook, OrderedBlockStore
from .factory import PageSession, create_page_session, open_page_session
from .pages import load_page, save_page
from .persistence import PersistenceQueue

__all__ = [
    "ChangeHook",
    "OrderedBlockStore",
    "PageSession",
    "PersistenceQueue",
    "create_page_session",
    "load_page",
    "open_page_session",
    "save_page",
]
