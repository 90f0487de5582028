"""Database model exports."""

from .donation import Donation
from .top_spender import MAX_TOTAL_AMOUNT, TopSpender

__all__ = [
    "Donation",
    "MAX_TOTAL_AMOUNT",
    "TopSpender",
]
