"""Helpers for turning store records into API payloads."""

from __future__ import annotations

from typing import Any, Dict

from ..models import Donation, TopSpender


def donation_to_dict(donation: Donation) -> Dict[str, Any]:
    """Serialise a donation in the shape the game client reads."""

    return {
        "id": donation.id,
        "username": donation.username,
        "display_name": donation.display_name,
        "amount": donation.amount,
        "message": donation.message,
        "timestamp": donation.timestamp,
        "received_at": donation.received_at,
        "delivered": donation.delivered,
        "avatar_url": donation.avatar_url,
    }


def spender_to_dict(spender: TopSpender) -> Dict[str, Any]:
    return {
        "username": spender.username,
        "display_name": spender.display_name,
        "total_amount": spender.total_amount,
    }


__all__ = ["donation_to_dict", "spender_to_dict"]
