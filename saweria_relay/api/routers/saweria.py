"""Saweria webhook ingest endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.formparsers import MultiPartException

from ...core.errors import InvalidPayloadError
from ...services.ingest import build_donation
from ...services.store import DonationStore
from ..deps import get_store

router = APIRouter(tags=["saweria"])
logger = logging.getLogger(__name__)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> Dict[str, Any]:
    """Decode a JSON or form body into a plain dict."""

    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(_FORM_TYPES):
            form = await request.form()
            return {key: value for key, value in form.items() if isinstance(value, str)}

        body = await request.body()
        if not body.strip():
            return {}
        data = json.loads(body)
    except MultiPartException as exc:
        raise InvalidPayloadError(f"Form body is malformed: {exc}") from exc
    except ValueError as exc:
        raise InvalidPayloadError(f"Body is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidPayloadError("Payload must be a JSON object")
    return data


@router.post("/saweria")
async def saweria_webhook(request: Request, store: DonationStore = Depends(get_store)):
    """Queue a donation from the Saweria webhook and credit its donor."""

    payload = await read_payload(request)
    logger.debug("Raw Saweria payload: %s", payload)

    donation = build_donation(payload, store.now())
    queue_size = await run_in_threadpool(store.add, donation, payload)

    logger.info(
        "Donation saved id=%s username=%s amount=%d pending=%d",
        donation.id,
        donation.username,
        donation.amount,
        queue_size,
    )
    return {"success": True, "donation_id": donation.id, "queue_size": queue_size}


__all__ = ["read_payload", "router"]
