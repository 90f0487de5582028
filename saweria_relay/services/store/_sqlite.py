"""SQLite-backed donation store that survives restarts."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from sqlalchemy import literal_column, or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, func, select

from ...core.errors import StorageError
from ...models import Donation, TopSpender
from .base import DonationStore

# Implicit SQLite row id; breaks received_at ties in insertion order.
_ROWID = literal_column("donations.rowid")


class SqliteDonationStore(DonationStore):
    """Donation queue and leaderboard persisted in two tables.

    Only the age-based sweep bounds the queue. Each mutating call commits
    once, so a donation and its leaderboard credit land together.
    """

    backend = "sqlite"

    def __init__(self, engine: Engine, *, reset: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.engine = engine
        self.reset = reset

    def open(self) -> None:
        tables = [Donation.__table__, TopSpender.__table__]
        try:
            if self.reset:
                SQLModel.metadata.drop_all(self.engine, tables=tables)
            SQLModel.metadata.create_all(self.engine, tables=tables)
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not prepare database: {exc}") from exc

    def close(self) -> None:
        self.engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
        # OverflowError comes from the sqlite3 driver for out-of-range integers.
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(str(exc)) from exc

    def add(self, donation: Donation, raw_payload: Mapping[str, Any]) -> int:
        with self._session() as session:
            spender = session.get(TopSpender, donation.username)
            if spender is None:
                spender = TopSpender(
                    username=donation.username,
                    display_name=donation.display_name,
                    total_amount=0,
                )
            self.credit(spender, donation.amount)
            session.add(donation)
            session.add(spender)
            session.commit()
            pending = self._pending(session)

        self.last_raw_payload = dict(raw_payload)
        return pending

    def confirm(self, donation_id: str) -> bool:
        with self._session() as session:
            donation = session.get(Donation, donation_id)
            if donation is None or donation.delivered:
                return False
            donation.delivered = True
            session.add(donation)
            session.commit()
            return True

    def next_undelivered(self) -> Optional[Donation]:
        with self._session() as session:
            return session.exec(
                select(Donation)
                .where(Donation.delivered == False)  # noqa: E712
                .order_by(Donation.received_at.asc(), _ROWID)
                .limit(1)
            ).first()

    def undelivered_count(self) -> int:
        with self._session() as session:
            return self._pending(session)

    def top_spenders(self, limit: int) -> List[TopSpender]:
        with self._session() as session:
            return list(
                session.exec(
                    select(TopSpender)
                    .order_by(TopSpender.total_amount.desc(), TopSpender.username)
                    .limit(limit)
                ).all()
            )

    def donations(self) -> List[Donation]:
        with self._session() as session:
            return list(
                session.exec(
                    select(Donation).order_by(Donation.received_at.asc(), _ROWID)
                ).all()
            )

    def spenders(self) -> List[TopSpender]:
        with self._session() as session:
            return list(session.exec(select(TopSpender)).all())

    def stats(self) -> Dict[str, int]:
        with self._session() as session:
            total = session.exec(select(func.count()).select_from(Donation)).one()
            delivered = session.exec(
                select(func.count())
                .select_from(Donation)
                .where(Donation.delivered == True)  # noqa: E712
            ).one()
            amount = session.exec(
                select(func.coalesce(func.sum(Donation.amount), 0))
            ).one()
            donors = session.exec(select(func.count()).select_from(TopSpender)).one()
        return {
            "total_donations": total,
            "delivered_donations": delivered,
            "pending_donations": total - delivered,
            "total_amount": int(amount),
            "unique_donors": donors,
        }

    def cleanup(self, now_ms: Optional[int] = None) -> int:
        now_ms = self.now() if now_ms is None else now_ms
        with self._session() as session:
            candidates = session.exec(
                select(Donation).where(
                    or_(
                        Donation.received_at < now_ms - self.lifetime_ms,
                        Donation.delivered == True,  # noqa: E712
                    )
                )
            ).all()
            expired = [d for d in candidates if self.is_expired(d, now_ms)]
            for donation in expired:
                session.delete(donation)
            session.commit()
        return len(expired)

    def clear(self) -> None:
        with self._session() as session:
            for donation in session.exec(select(Donation)).all():
                session.delete(donation)
            for spender in session.exec(select(TopSpender)).all():
                session.delete(spender)
            session.commit()
        self.last_raw_payload = None

    @staticmethod
    def _pending(session: Session) -> int:
        return session.exec(
            select(func.count())
            .select_from(Donation)
            .where(Donation.delivered == False)  # noqa: E712
        ).one()


__all__ = ["SqliteDonationStore"]
