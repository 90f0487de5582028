"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Request

from ..services.store import DonationStore


def get_store(request: Request) -> DonationStore:
    """Return the store the app was created with."""

    return request.app.state.store


__all__ = ["get_store"]
