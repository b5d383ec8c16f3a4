"""Database engine helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from page_blocks.config import StorageConfig

DEFAULT_SQLITE_URL = "sqlite+pysqlite:///:memory:"


def create_engine(
    connection_string: str | None = None,
    *,
    sqlite_path: str | Path | None = None,
    echo: bool = False,
    connect_args: Mapping[str, Any] | None = None,
) -> Engine:
    """Create a SQLAlchemy engine for a URL, a SQLite file, or in-memory SQLite.

    Parameters
    ----------
    connection_string:
        Full SQLAlchemy URL. Takes precedence over ``sqlite_path``.
    sqlite_path:
        Filesystem path to a SQLite database file. Expanded to an absolute path.
    echo:
        Enable SQLAlchemy engine echo logging.
    connect_args:
        Optional mapping passed through to ``sqlalchemy.create_engine``.

    Notes
    -----
    The in-memory default shares a single connection across threads so the
    background persistence worker sees the same database as the caller.
    """
    if connection_string and sqlite_path is not None:
        raise ValueError("Provide either 'connection_string' or 'sqlite_path', not both.")

    if connection_string:
        url = connection_string
    elif sqlite_path is not None:
        db_path = Path(sqlite_path).expanduser().resolve()
        url = f"sqlite+pysqlite:///{db_path.as_posix()}"
    else:
        url = DEFAULT_SQLITE_URL

    options: dict[str, Any] = {}
    args = dict(connect_args or {})
    if url == DEFAULT_SQLITE_URL:
        args.setdefault("check_same_thread", False)
        options["poolclass"] = StaticPool

    return sa_create_engine(url, echo=echo, future=True, connect_args=args, **options)


def engine_from_config(config: StorageConfig | None = None) -> Engine:
    """Build an engine from ``StorageConfig`` (environment-backed by default)."""
    cfg = config or StorageConfig()
    return create_engine(cfg.database_url, sqlite_path=cfg.sqlite_path, echo=cfg.echo)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a configured session factory bound to the given engine."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False, future=True)


__all__ = ["DEFAULT_SQLITE_URL", "create_engine", "create_session_factory", "engine_from_config"]
