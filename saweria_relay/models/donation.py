"""Database model for queued donations."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field as ORMField, SQLModel


class Donation(SQLModel, table=True):
    """One webhook event waiting to be picked up by the game server."""

    __tablename__ = "donations"

    id: str = ORMField(primary_key=True)
    username: str
    display_name: str
    amount: int = 0
    message: str = ""
    timestamp: str
    received_at: int = ORMField(index=True)
    delivered: bool = ORMField(default=False, index=True)
    avatar_url: Optional[str] = None


__all__ = ["Donation"]
