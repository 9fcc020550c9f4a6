"""Persistence service: key layout, entitlement and merge semantics."""

import asyncio
import re

import pytest

from kv import LazyKVClient
from repositories import KVUnavailable, MemoryStore
from store import PreferencesStore, entitlement_key, iso_now, preferences_key


def unavailable_store():
    def factory():
        raise KVUnavailable("not configured")
    return PreferencesStore(LazyKVClient(factory))


def test_key_layout():
    assert entitlement_key(12345) == "entitlement:12345"
    assert preferences_key(12345) == "preferences:12345"
    assert preferences_key(1) != preferences_key(11)
    assert entitlement_key(7) != preferences_key(7)


@pytest.mark.parametrize("bad", ["12345", 1.5, None, True])
def test_non_integer_identity_is_a_bug(bad):
    with pytest.raises(TypeError):
        preferences_key(bad)


def test_iso_now_matches_javascript_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", iso_now())


def test_grant_and_check(prefs_store, memory):
    async def run():
        assert await prefs_store.is_entitled(1) is False
        assert await prefs_store.get_entitlement(1) is None
        assert await prefs_store.grant_entitlement(1, proof="0xabc") is True
        return await prefs_store.get_entitlement(1)

    record = asyncio.run(run())
    assert record == {"identity": 1, "grantedAt": "2026-01-01T00:00:01.000Z", "proof": "0xabc"}
    assert memory.keys() == ["entitlement:1"]


def test_grant_is_idempotent(prefs_store):
    async def run():
        await prefs_store.grant_entitlement(9)
        first = await prefs_store.get_entitlement(9)
        await prefs_store.grant_entitlement(9)
        second = await prefs_store.get_entitlement(9)
        return first, second, await prefs_store.is_entitled(9)

    first, second, entitled = asyncio.run(run())
    assert entitled is True
    assert second["grantedAt"] > first["grantedAt"]
    assert "proof" not in second


def test_set_preferences_stamps_updated_at(prefs_store):
    async def run():
        ok = await prefs_store.set_preferences(3, {"colorTheme": "dark", "updatedAt": "1999-01-01"})
        return ok, await prefs_store.get_preferences(3)

    ok, record = asyncio.run(run())
    assert ok is True
    assert record == {"colorTheme": "dark", "updatedAt": "2026-01-01T00:00:01.000Z"}


def test_set_preferences_replaces_whole_record(prefs_store):
    async def run():
        await prefs_store.set_preferences(3, {"colorTheme": "dark", "language": "en"})
        await prefs_store.set_preferences(3, {"font": "mono"})
        return await prefs_store.get_preferences(3)

    assert asyncio.run(run()) == {"font": "mono", "updatedAt": "2026-01-01T00:00:02.000Z"}


def test_merge_preserves_untouched_fields(prefs_store):
    async def run():
        await prefs_store.set_preferences(4, {"colorTheme": "dark", "language": "en"})
        await prefs_store.merge_preferences(4, {"language": "fr"})
        return await prefs_store.get_preferences(4)

    assert asyncio.run(run()) == {
        "colorTheme": "dark",
        "language": "fr",
        "updatedAt": "2026-01-01T00:00:02.000Z",
    }


def test_merge_replaces_structured_fields_wholesale(prefs_store):
    async def run():
        await prefs_store.set_preferences(4, {"sectionOrder": ["about", "nfts", "cast"], "featuredCastHash": "0x1"})
        await prefs_store.merge_preferences(4, {"sectionOrder": ["cast"], "featuredCastHash": None})
        return await prefs_store.get_preferences(4)

    record = asyncio.run(run())
    assert record["sectionOrder"] == ["cast"]
    assert record["featuredCastHash"] is None


def test_merge_into_missing_record(prefs_store):
    async def run():
        assert await prefs_store.merge_preferences(5, {"font": "serif", "updatedAt": "client"}) is True
        return await prefs_store.get_preferences(5)

    assert asyncio.run(run()) == {"font": "serif", "updatedAt": "2026-01-01T00:00:01.000Z"}


def test_delete_then_get(prefs_store):
    async def run():
        await prefs_store.set_preferences(6, {"font": "mono"})
        assert await prefs_store.delete_preferences(6) is True
        return await prefs_store.get_preferences(6)

    assert asyncio.run(run()) is None


def test_sequential_writes_have_non_decreasing_timestamps(memory):
    store = PreferencesStore(LazyKVClient(lambda: memory))

    async def run():
        stamps = []
        for i in range(5):
            await store.merge_preferences(8, {"extendedBio": str(i)})
            stamps.append((await store.get_preferences(8))["updatedAt"])
        return stamps

    stamps = asyncio.run(run())
    assert stamps == sorted(stamps)


def test_unavailable_store_reads_absent_and_writes_fail():
    store = unavailable_store()

    async def run():
        return (
            await store.is_entitled(1),
            await store.get_entitlement(1),
            await store.grant_entitlement(1),
            await store.get_preferences(1),
            await store.set_preferences(1, {"font": "mono"}),
            await store.merge_preferences(1, {"font": "mono"}),
            await store.delete_preferences(1),
        )

    assert asyncio.run(run()) == (False, None, False, None, False, False, False)


def test_concurrent_merges_lose_an_update(clock):
    """Read-modify-write without a lock: the later write wins."""

    class YieldingStore(MemoryStore):
        async def get(self, key):
            value = await super().get(key)
            await asyncio.sleep(0)
            return value

    store = PreferencesStore(LazyKVClient(YieldingStore), clock=clock)

    async def run():
        await asyncio.gather(
            store.merge_preferences(10, {"colorTheme": "dark"}),
            store.merge_preferences(10, {"language": "fr"}),
        )
        return await store.get_preferences(10)

    record = asyncio.run(run())
    assert record["language"] == "fr"
    assert "colorTheme" not in record


@pytest.mark.parametrize("bad", [1.5, "12", True])
def test_grant_with_non_integer_identity_is_a_bug(prefs_store, memory, bad):
    with pytest.raises(TypeError):
        asyncio.run(prefs_store.grant_entitlement(bad))
    assert memory.calls == []
