import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from saweria_relay.app import create_app
from saweria_relay.services.store import MemoryDonationStore, SqliteDonationStore

START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that moves forward one tick per reading."""

    def __init__(self, start=START_MS, step=1):
        self.current = start
        self.step = step

    def __call__(self):
        value = self.current
        self.current += self.step
        return value

    def advance(self, millis):
        self.current += millis


def memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    store = MemoryDonationStore(max_queue_size=20, clock=clock)
    store.open()
    return store


@pytest.fixture
def sqlite_store(clock):
    store = SqliteDonationStore(memory_engine(), clock=clock)
    store.open()
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as test_client:
        yield test_client
