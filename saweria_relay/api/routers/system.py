"""Health, introspection and maintenance endpoints."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ...core import TOP_SPENDERS_LIMIT
from ...services.donations import donation_to_dict, spender_to_dict
from ...services.store import DonationStore
from ..deps import get_store

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "saweria": "/saweria (POST)",
    "roblox": "/roblox-check (GET)",
    "confirm": "/roblox-check?confirm=DONATION_ID (GET)",
    "debug": "/debug (GET)",
    "clear": "/clear (POST)",
    "stats": "/stats (GET)",
}


@router.get("/")
def health(request: Request, store: DonationStore = Depends(get_store)) -> Dict[str, Any]:
    """Status summary used as a readiness probe."""

    return {
        "status": "online",
        "server": f"Saweria Relay ({store.backend})",
        "storage": store.backend,
        "queue_undelivered": store.undelivered_count(),
        "queue_total": len(store.donations()),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "endpoints": ENDPOINTS,
    }


@router.get("/debug")
def debug(store: DonationStore = Depends(get_store)) -> Dict[str, Any]:
    """Dump everything the store currently holds."""

    donations = store.donations()
    return {
        "last_raw_data": store.last_raw_payload,
        "donation_queue": [donation_to_dict(d) for d in donations],
        "top_spenders": {s.username: spender_to_dict(s) for s in store.spenders()},
        "undelivered_count": sum(1 for d in donations if not d.delivered),
        "total_count": len(donations),
    }


@router.get("/stats")
def stats(store: DonationStore = Depends(get_store)) -> Dict[str, Any]:
    summary: Dict[str, Any] = dict(store.stats())
    summary["top_spenders"] = [
        spender_to_dict(s) for s in store.top_spenders(TOP_SPENDERS_LIMIT)
    ]
    return summary


@router.post("/clear")
def clear(store: DonationStore = Depends(get_store)) -> Dict[str, Any]:
    """Drop all queued donations and the leaderboard."""

    store.clear()
    logger.info("All data cleared")
    return {"success": True, "message": "All data cleared"}


__all__ = ["router"]
