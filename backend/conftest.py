"""Shared fixtures: in-memory KV wiring with a deterministic clock."""

from datetime import datetime, timedelta, timezone

import pytest

from kv import LazyKVClient
from preferences import PreferencesGate
from repositories import MemoryStore
from store import PreferencesStore


class TickClock:
    """Returns a timestamp one second later on every call."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> str:
        self.now += timedelta(seconds=1)
        return self.now.strftime("%Y-%m-%dT%H:%M:%S.000Z")


class RecordingStore(MemoryStore):
    """MemoryStore that remembers every (operation, key) it served."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple[str, str]] = []

    async def get(self, key):
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key, value):
        self.calls.append(("set", key))
        return await super().set(key, value)

    async def delete(self, key):
        self.calls.append(("delete", key))
        return await super().delete(key)

    def touched(self, prefix: str) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[1].startswith(prefix)]


class BrokenStore:
    """A live store whose every call fails."""

    async def get(self, key):
        raise ConnectionError("store down")

    async def set(self, key, value):
        raise ConnectionError("store down")

    async def delete(self, key):
        raise ConnectionError("store down")


@pytest.fixture
def memory():
    return RecordingStore()


@pytest.fixture
def clock():
    return TickClock()


@pytest.fixture
def kv(memory):
    return LazyKVClient(lambda: memory)


@pytest.fixture
def prefs_store(kv, clock):
    return PreferencesStore(kv, clock=clock)


@pytest.fixture
def gate(prefs_store):
    return PreferencesGate(prefs_store)
