"""Polling endpoint for the Roblox game server."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...core import TOP_SPENDERS_LIMIT, iso_now
from ...services.donations import donation_to_dict, spender_to_dict
from ...services.store import DonationStore
from ..deps import get_store

router = APIRouter(tags=["roblox"])
logger = logging.getLogger(__name__)


@router.get("/roblox-check")
def roblox_check(
    confirm: Optional[str] = None, store: DonationStore = Depends(get_store)
) -> Dict[str, Any]:
    """Acknowledge ``confirm`` if given, then hand out the oldest pending donation."""

    if confirm:
        if store.confirm(confirm):
            logger.info("Confirmed delivery of %s", confirm)
        else:
            logger.debug("Nothing to confirm for %s", confirm)

    donation = store.next_undelivered()
    return {
        "donation": donation_to_dict(donation) if donation else None,
        "top_spenders": [spender_to_dict(s) for s in store.top_spenders(TOP_SPENDERS_LIMIT)],
        "queue_size": store.undelivered_count(),
        "timestamp": iso_now(),
    }


__all__ = ["router"]
