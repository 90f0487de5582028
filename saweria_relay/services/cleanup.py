"""Periodic eviction of stale donations."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .store import DonationStore

logger = logging.getLogger(__name__)


def sweep_expired(store: DonationStore) -> int:
    """Run one cleanup pass over ``store``."""

    removed = store.cleanup()
    if removed:
        logger.info("Cleanup removed %d expired donations", removed)
    return removed


def start_cleanup_scheduler(store: DonationStore, interval_sec: int) -> AsyncIOScheduler:
    """Schedule :func:`sweep_expired` every ``interval_sec`` seconds.

    Must be called from inside the running event loop (the app lifespan).
    The caller owns the returned scheduler and shuts it down.
    """

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        sweep_expired,
        "interval",
        seconds=interval_sec,
        args=[store],
        id="cleanup-expired-donations",
        coalesce=True,
        max_instances=1,
    )
    scheduler.start()
    return scheduler


__all__ = ["start_cleanup_scheduler", "sweep_expired"]
