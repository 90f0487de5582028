"""Interface shared by the donation store backends."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ...core.time import Clock, now_millis
from ...models import MAX_TOTAL_AMOUNT, Donation, TopSpender


class DonationStore:
    """Queue of pending donations plus the cumulative donor leaderboard.

    Backends implement the storage primitives; the retention rules and the
    last-payload bookkeeping live here so every backend ages donations out
    the same way.
    """

    backend = "base"

    def __init__(
        self,
        *,
        lifetime_sec: int = 120,
        delivered_lifetime_sec: int = 30,
        clock: Optional[Clock] = None,
    ) -> None:
        self.lifetime_ms = lifetime_sec * 1000
        self.delivered_lifetime_ms = delivered_lifetime_sec * 1000
        self.clock: Clock = clock or now_millis
        self.last_raw_payload: Optional[Dict[str, Any]] = None

    def now(self) -> int:
        return self.clock()

    def is_expired(self, donation: Donation, now_ms: int) -> bool:
        """Return True when the cleanup sweep should drop ``donation``."""

        age = now_ms - donation.received_at
        if age > self.lifetime_ms:
            return True
        return donation.delivered and age > self.delivered_lifetime_ms

    @staticmethod
    def credit(spender: TopSpender, amount: int) -> None:
        """Add ``amount`` to a donor total, saturating at the column maximum."""

        spender.total_amount = min(spender.total_amount + amount, MAX_TOTAL_AMOUNT)

    # Lifecycle ---------------------------------------------------------------
    def open(self) -> None:
        """Prepare the backing storage; called once at startup."""

    def close(self) -> None:
        """Release backing resources; called once at shutdown."""

    # Operations --------------------------------------------------------------
    def add(self, donation: Donation, raw_payload: Mapping[str, Any]) -> int:
        """Queue ``donation``, credit its donor and return the pending count."""
        raise NotImplementedError

    def confirm(self, donation_id: str) -> bool:
        """Mark a donation delivered; False when unknown or already delivered."""
        raise NotImplementedError

    def next_undelivered(self) -> Optional[Donation]:
        raise NotImplementedError

    def undelivered_count(self) -> int:
        raise NotImplementedError

    def top_spenders(self, limit: int) -> List[TopSpender]:
        raise NotImplementedError

    def donations(self) -> List[Donation]:
        raise NotImplementedError

    def spenders(self) -> List[TopSpender]:
        raise NotImplementedError

    def stats(self) -> Dict[str, int]:
        """Return total, delivered, pending, amount and donor counts."""
        raise NotImplementedError

    def cleanup(self, now_ms: Optional[int] = None) -> int:
        """Drop expired donations and return how many were removed."""
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


__all__ = ["DonationStore"]
