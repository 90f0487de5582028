"""Database configuration helpers."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import create_engine


def sqlite_engine(db_path: Path) -> Engine:
    """Create an engine for the SQLite file at ``db_path``.

    The parent directory is created when missing. ``check_same_thread`` is
    disabled because FastAPI and the cleanup scheduler both call into the
    store from worker threads.
    """

    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{db_path}", connect_args={"check_same_thread": False}
    )


__all__ = ["sqlite_engine"]
