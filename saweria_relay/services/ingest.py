"""Normalisation of inbound Saweria webhook payloads."""

from __future__ import annotations

import math
import re
import secrets
import string
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..core.errors import InvalidPayloadError
from ..core.time import iso_from_millis
from ..models import Donation

# Saweria has renamed these fields over time; the first alias present wins.
# A present amount that does not parse counts as 0, later aliases are not tried.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "username": (
        "donatur_name",
        "donator_name",
        "supporter_name",
        "supporter",
        "name",
        "username",
    ),
    "amount": ("amount_raw", "amount", "nominal", "donation"),
    "message": ("message", "pesan", "note", "comment"),
}

DEFAULT_USERNAME = "Anonymous"

# Largest single donation accepted; stays exact as a JSON number (< 2**53).
MAX_AMOUNT = 10**15

_ID_ALPHABET = string.digits + string.ascii_lowercase
_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")


def first_present(payload: Mapping[str, Any], fields: Sequence[str]) -> Optional[Any]:
    """Return the value of the first field that is set to something non-empty."""

    for field in fields:
        value = payload.get(field)
        if value is None or value == "":
            continue
        return value
    return None


def parse_amount(value: Any) -> int:
    """Coerce a raw amount to a non-negative integer.

    Numbers are truncated, strings contribute their leading integer
    (``"5000.50"`` is 5000), anything else counts as zero. Amounts above
    :data:`MAX_AMOUNT` raise :class:`InvalidPayloadError`.
    """

    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        amount = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return 0
        amount = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        sign, digits = match.groups()
        if sign == "-":
            return 0
        # Checked before int() so huge strings never reach the conversion limit.
        if len(digits) > len(str(MAX_AMOUNT)):
            raise InvalidPayloadError(f"Amount exceeds the maximum of {MAX_AMOUNT}")
        amount = int(digits)
    else:
        return 0
    if amount > MAX_AMOUNT:
        raise InvalidPayloadError(f"Amount exceeds the maximum of {MAX_AMOUNT}")
    return max(amount, 0)


def new_donation_id(now_ms: int) -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{now_ms}-{suffix}"


def build_donation(payload: Mapping[str, Any], now_ms: int) -> Donation:
    """Map an arbitrary webhook payload onto a fresh, undelivered donation."""

    raw_username = first_present(payload, FIELD_ALIASES["username"])
    username = DEFAULT_USERNAME if raw_username is None else str(raw_username)

    amount = parse_amount(first_present(payload, FIELD_ALIASES["amount"]))

    raw_message = first_present(payload, FIELD_ALIASES["message"])
    message = "" if raw_message is None else str(raw_message)

    return Donation(
        id=new_donation_id(now_ms),
        username=username,
        display_name=username,
        amount=amount,
        message=message,
        timestamp=iso_from_millis(now_ms),
        received_at=now_ms,
        delivered=False,
        avatar_url=None,
    )


__all__ = [
    "DEFAULT_USERNAME",
    "FIELD_ALIASES",
    "MAX_AMOUNT",
    "build_donation",
    "first_present",
    "new_donation_id",
    "parse_amount",
]
