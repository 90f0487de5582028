"""Database model for the donor leaderboard."""

from __future__ import annotations

from sqlmodel import Field as ORMField, SQLModel

# SQLite INTEGER is a signed 64-bit value.
MAX_TOTAL_AMOUNT = 2**63 - 1


class TopSpender(SQLModel, table=True):
    """Cumulative donation total for a single donor name."""

    __tablename__ = "top_spenders"

    username: str = ORMField(primary_key=True)
    display_name: str
    total_amount: int = ORMField(default=0, index=True)


__all__ = ["MAX_TOTAL_AMOUNT", "TopSpender"]
