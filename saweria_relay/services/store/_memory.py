"""Process-local donation store; contents are lost on restart."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional

from ...models import Donation, TopSpender
from .base import DonationStore


class MemoryDonationStore(DonationStore):
    """Bounded FIFO of donations kept in a list.

    When the queue grows past ``max_queue_size`` the oldest entries are
    dropped whether or not they were delivered.
    """

    backend = "memory"

    def __init__(self, *, max_queue_size: int = 20, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.max_queue_size = max_queue_size
        self._queue: List[Donation] = []
        self._spenders: Dict[str, TopSpender] = {}
        self._lock = threading.Lock()

    def add(self, donation: Donation, raw_payload: Mapping[str, Any]) -> int:
        with self._lock:
            self._queue.append(donation)
            overflow = len(self._queue) - self.max_queue_size
            if overflow > 0:
                del self._queue[:overflow]

            spender = self._spenders.get(donation.username)
            if spender is None:
                spender = TopSpender(
                    username=donation.username,
                    display_name=donation.display_name,
                    total_amount=0,
                )
                self._spenders[donation.username] = spender
            self.credit(spender, donation.amount)

            self.last_raw_payload = dict(raw_payload)
            return self._pending()

    def confirm(self, donation_id: str) -> bool:
        with self._lock:
            for donation in self._queue:
                if donation.id == donation_id:
                    if donation.delivered:
                        return False
                    donation.delivered = True
                    return True
        return False

    def next_undelivered(self) -> Optional[Donation]:
        with self._lock:
            # min() keeps the earliest queued entry on received_at ties.
            return min(
                (d for d in self._queue if not d.delivered),
                key=lambda d: d.received_at,
                default=None,
            )

    def undelivered_count(self) -> int:
        with self._lock:
            return self._pending()

    def top_spenders(self, limit: int) -> List[TopSpender]:
        with self._lock:
            ranked = sorted(
                self._spenders.values(), key=lambda s: s.total_amount, reverse=True
            )
        return ranked[:limit]

    def donations(self) -> List[Donation]:
        with self._lock:
            return list(self._queue)

    def spenders(self) -> List[TopSpender]:
        with self._lock:
            return list(self._spenders.values())

    def stats(self) -> Dict[str, int]:
        with self._lock:
            delivered = sum(1 for d in self._queue if d.delivered)
            return {
                "total_donations": len(self._queue),
                "delivered_donations": delivered,
                "pending_donations": len(self._queue) - delivered,
                "total_amount": sum(d.amount for d in self._queue),
                "unique_donors": len(self._spenders),
            }

    def cleanup(self, now_ms: Optional[int] = None) -> int:
        now_ms = self.now() if now_ms is None else now_ms
        with self._lock:
            kept = [d for d in self._queue if not self.is_expired(d, now_ms)]
            removed = len(self._queue) - len(kept)
            self._queue = kept
        return removed

    def clear(self) -> None:
        with self._lock:
            self._queue = []
            self._spenders = {}
            self.last_raw_payload = None

    def _pending(self) -> int:
        return sum(1 for d in self._queue if not d.delivered)


__all__ = ["MemoryDonationStore"]
