import logging

from saweria_relay.services.cleanup import sweep_expired
from saweria_relay.services.ingest import build_donation


def test_sweep_expired_logs_removals(memory_store, clock, caplog):
    payload = {"name": "Budi", "amount": 1000}
    memory_store.add(build_donation(payload, memory_store.now()), payload)
    clock.advance(200_000)

    with caplog.at_level(logging.INFO, logger="saweria_relay.services.cleanup"):
        assert sweep_expired(memory_store) == 1

    assert "removed 1 expired donations" in caplog.text
    assert memory_store.donations() == []


def test_sweep_expired_is_quiet_when_nothing_expires(memory_store, caplog):
    with caplog.at_level(logging.INFO, logger="saweria_relay.services.cleanup"):
        assert sweep_expired(memory_store) == 0
    assert caplog.text == ""
