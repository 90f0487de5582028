"""Donation store backends and the factory that picks one."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Engine

from ...core import (
    DATABASE_PATH,
    DB_RESET,
    DELIVERED_LIFETIME_SEC,
    DONATION_LIFETIME_SEC,
    MAX_QUEUE_SIZE,
    STORAGE_BACKEND,
    Clock,
    sqlite_engine,
)
from ._memory import MemoryDonationStore
from ._sqlite import SqliteDonationStore
from .base import DonationStore


# Factory keeps app.py free of backend-specific constructor arguments.
def new_store(
    backend: Optional[str] = None,
    *,
    engine: Optional[Engine] = None,
    clock: Optional[Clock] = None,
) -> DonationStore:
    backend = (backend or STORAGE_BACKEND).lower()
    retention = dict(
        lifetime_sec=DONATION_LIFETIME_SEC,
        delivered_lifetime_sec=DELIVERED_LIFETIME_SEC,
        clock=clock,
    )
    if backend == "sqlite":
        return SqliteDonationStore(
            engine if engine is not None else sqlite_engine(DATABASE_PATH),
            reset=DB_RESET,
            **retention,
        )
    if backend == "memory":
        return MemoryDonationStore(max_queue_size=MAX_QUEUE_SIZE, **retention)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "DonationStore",
    "MemoryDonationStore",
    "SqliteDonationStore",
    "new_store",
]
