import pytest
from sqlmodel import create_engine

from saweria_relay.core.errors import StorageError
from saweria_relay.models import MAX_TOTAL_AMOUNT
from saweria_relay.services.ingest import build_donation
from saweria_relay.services.store import (
    MemoryDonationStore,
    SqliteDonationStore,
    new_store,
)


def ingest(store, username="Budi", amount=1000, message=""):
    payload = {"donatur_name": username, "amount_raw": str(amount), "message": message}
    donation = build_donation(payload, store.now())
    store.add(donation, payload)
    return donation


def test_add_returns_pending_count(store):
    payload = {"name": "Sari", "amount": 500}
    first = store.add(build_donation(payload, store.now()), payload)
    second = store.add(build_donation(payload, store.now()), payload)
    assert (first, second) == (1, 2)
    assert store.last_raw_payload == payload


def test_leaderboard_totals_accumulate(store):
    for amount in (1000, 2500, 0, 700):
        ingest(store, "Budi", amount)
    ingest(store, "Sari", 9000)

    ranked = store.top_spenders(10)
    assert [(s.username, s.total_amount) for s in ranked] == [
        ("Sari", 9000),
        ("Budi", 4200),
    ]
    assert ranked[1].display_name == "Budi"


def test_top_spenders_respects_limit(store):
    for index in range(12):
        ingest(store, f"donor-{index}", (index + 1) * 100)

    ranked = store.top_spenders(10)
    assert len(ranked) == 10
    assert ranked[0].total_amount == 1200
    assert [s.total_amount for s in ranked] == sorted(
        (s.total_amount for s in ranked), reverse=True
    )


def test_next_undelivered_is_oldest_pending(store):
    first = ingest(store, "A")
    second = ingest(store, "B")
    ingest(store, "C")

    assert store.next_undelivered().id == first.id
    assert store.confirm(first.id) is True
    assert store.next_undelivered().id == second.id


def test_next_undelivered_is_none_when_everything_delivered(store):
    assert store.next_undelivered() is None
    donation = ingest(store)
    store.confirm(donation.id)
    assert store.next_undelivered() is None
    assert store.undelivered_count() == 0


def test_confirm_is_idempotent(store):
    donation = ingest(store)
    ingest(store)

    assert store.confirm(donation.id) is True
    assert store.undelivered_count() == 1
    assert store.confirm(donation.id) is False
    assert store.confirm("no-such-id") is False
    assert store.undelivered_count() == 1
    assert len(store.donations()) == 2


def test_cleanup_drops_stale_donations(store):
    old = ingest(store, "old")
    delivered = ingest(store, "delivered")
    fresh = ingest(store, "fresh")
    store.confirm(delivered.id)

    # 31s later only the delivered donation is past its window.
    assert store.cleanup(now_ms=delivered.received_at + 30_001) == 1
    assert {d.id for d in store.donations()} == {old.id, fresh.id}

    # Undelivered donations go once they pass the absolute lifetime.
    assert store.cleanup(now_ms=old.received_at + 120_001) == 1
    assert [d.id for d in store.donations()] == [fresh.id]


def test_cleanup_keeps_leaderboard(store):
    donation = ingest(store, "Budi", 5000)
    assert store.cleanup(now_ms=donation.received_at + 500_000) == 1
    assert store.donations() == []
    assert store.top_spenders(10)[0].total_amount == 5000


def test_cleanup_uses_store_clock(store, clock):
    ingest(store)
    clock.advance(120_001)
    assert store.cleanup() == 1


def test_stats(store):
    first = ingest(store, "Budi", 1000)
    ingest(store, "Budi", 2000)
    ingest(store, "Sari", 500)
    store.confirm(first.id)

    assert store.stats() == {
        "total_donations": 3,
        "delivered_donations": 1,
        "pending_donations": 2,
        "total_amount": 3500,
        "unique_donors": 2,
    }


def test_clear_resets_everything(store):
    ingest(store, "Budi", 1000)
    store.clear()

    assert store.donations() == []
    assert store.spenders() == []
    assert store.last_raw_payload is None
    assert store.stats()["total_amount"] == 0


def test_memory_queue_drops_oldest_beyond_capacity(memory_store):
    donations = [ingest(memory_store, f"donor-{i}") for i in range(21)]
    memory_store.confirm(donations[1].id)
    ingest(memory_store, "late")

    queued = [d.id for d in memory_store.donations()]
    assert len(queued) == 20
    # Eviction ignores delivered status: both the oldest pending and the
    # delivered second entry are gone.
    assert donations[0].id not in queued
    assert donations[1].id not in queued
    assert memory_store.next_undelivered().id == donations[2].id
    # The leaderboard still remembers evicted donors.
    assert len(memory_store.spenders()) == 22


def test_sqlite_store_is_unbounded_by_count(sqlite_store):
    for index in range(25):
        ingest(sqlite_store, f"donor-{index}")
    assert len(sqlite_store.donations()) == 25


def test_sqlite_store_persists_between_instances(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'donations.db'}"
    first = SqliteDonationStore(create_engine(db_url))
    first.open()
    donation = ingest(first, "Budi", 5000)
    first.close()

    second = SqliteDonationStore(create_engine(db_url))
    second.open()
    try:
        assert second.next_undelivered().id == donation.id
        assert second.top_spenders(10)[0].total_amount == 5000
    finally:
        second.close()


def test_sqlite_reset_drops_existing_rows(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'donations.db'}"
    first = SqliteDonationStore(create_engine(db_url))
    first.open()
    ingest(first)
    first.close()

    second = SqliteDonationStore(create_engine(db_url), reset=True)
    second.open()
    try:
        assert second.donations() == []
    finally:
        second.close()


def test_new_store_picks_backend():
    assert isinstance(new_store("memory"), MemoryDonationStore)
    assert isinstance(new_store("sqlite", engine=create_engine("sqlite://")), SqliteDonationStore)
    with pytest.raises(ValueError):
        new_store("redis")


def test_leaderboard_total_saturates_at_column_limit(store):
    for _ in range(3):
        payload = {"name": "Whale"}
        donation = build_donation(payload, store.now())
        donation.amount = MAX_TOTAL_AMOUNT // 2
        store.add(donation, payload)

    assert store.top_spenders(1)[0].total_amount == MAX_TOTAL_AMOUNT


def test_sqlite_duplicate_id_leaves_no_partial_state(sqlite_store):
    payload = {"name": "Budi", "amount": 1000}
    donation = build_donation(payload, sqlite_store.now())
    sqlite_store.add(donation, payload)

    duplicate = build_donation(payload, sqlite_store.now())
    duplicate.id = donation.id
    with pytest.raises(StorageError):
        sqlite_store.add(duplicate, payload)

    assert len(sqlite_store.donations()) == 1
    assert sqlite_store.top_spenders(1)[0].total_amount == 1000
