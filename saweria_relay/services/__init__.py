"""Service layer helpers."""

from .cleanup import start_cleanup_scheduler, sweep_expired
from .donations import donation_to_dict, spender_to_dict
from .ingest import build_donation, parse_amount
from .store import DonationStore, new_store

__all__ = [
    "DonationStore",
    "build_donation",
    "donation_to_dict",
    "new_store",
    "parse_amount",
    "spender_to_dict",
    "start_cleanup_scheduler",
    "sweep_expired",
]
