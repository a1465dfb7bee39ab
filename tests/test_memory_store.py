"""Tests for the in-process link store."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from shortlinks.database.memory import MemoryLinkStore
from shortlinks.database.models import Link
from shortlinks.errors import ConflictError, NotFoundError


@pytest.mark.asyncio
class TestMemoryLinkStore:
    """Test the links table semantics on the in-process backend."""

    async def test_insert_starts_at_zero(self, store):
        link = await store.insert("abc123", "https://example.com")

        assert isinstance(link, Link)
        assert link.code == "abc123"
        assert link.url == "https://example.com"
        assert link.click_count == 0
        assert link.last_clicked is None
        assert link.created_at.tzinfo is not None

    async def test_insert_duplicate_is_conflict(self, store):
        await store.insert("abc123", "https://example.com")

        result = await store.insert("abc123", "https://other.com")

        assert isinstance(result, ConflictError)
        link = await store.get("abc123")
        assert link.url == "https://example.com"

    async def test_get_unknown_is_not_found(self, store):
        assert isinstance(await store.get("nope123"), NotFoundError)

    async def test_list_newest_first(self, store):
        for code in ("first1", "second", "third3"):
            await store.insert(code, f"https://example.com/{code}")

        links = await store.list()

        assert [link.code for link in links] == ["third3", "second", "first1"]

    async def test_list_breaks_timestamp_ties_by_insertion(self, store, monkeypatch):
        frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)

        class FrozenDatetime(datetime):
            @classmethod
            def now(cls, tz=None):
                return frozen

        monkeypatch.setattr("shortlinks.database.memory.datetime", FrozenDatetime)
        for code in ("aaaaaa", "bbbbbb", "cccccc"):
            await store.insert(code, "https://example.com")

        links = await store.list()

        assert {link.created_at for link in links} == {frozen}
        assert [link.code for link in links] == ["cccccc", "bbbbbb", "aaaaaa"]

    async def test_list_is_a_snapshot(self, store):
        await store.insert("abc123", "https://example.com")
        links = await store.list()

        await store.insert("def456", "https://example.com")

        assert len(links) == 1
        assert len(await store.list()) == 2

    async def test_delete(self, store):
        await store.insert("abc123", "https://example.com")

        assert await store.delete("abc123") is True
        assert isinstance(await store.get("abc123"), NotFoundError)
        assert await store.delete("abc123") is False

    async def test_delete_missing_leaves_table_unchanged(self, store):
        await store.insert("abc123", "https://example.com")

        assert await store.delete("zzz999") is False
        assert [link.code for link in await store.list()] == ["abc123"]

    async def test_resolve_and_increment(self, store):
        created = await store.insert("abc123", "https://example.com")

        url = await store.resolve_and_increment("abc123")

        assert url == "https://example.com"
        link = await store.get("abc123")
        assert link.click_count == 1
        assert link.last_clicked is not None
        assert link.last_clicked >= created.created_at

    async def test_resolve_unknown(self, store):
        assert isinstance(await store.resolve_and_increment("nope123"), NotFoundError)

    async def test_exception_inside_lock_discards_increment(self, store):
        await store.insert("abc123", "https://example.com")

        with pytest.raises(RuntimeError):
            async with store.lock_row("abc123") as row:
                await row.increment(datetime.now(timezone.utc))
                raise RuntimeError("boom")

        link = await store.get("abc123")
        assert link.click_count == 0
        assert link.last_clicked is None

    async def test_lock_row_serializes_same_code(self, store):
        await store.insert("abc123", "https://example.com")
        order = []

        async def hold(name):
            async with store.lock_row("abc123"):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(hold("a"), hold("b"))

        assert order in (
            ["a-in", "a-out", "b-in", "b-out"],
            ["b-in", "b-out", "a-in", "a-out"],
        )

    async def test_lock_row_does_not_block_other_codes(self, store):
        await store.insert("abc123", "https://example.com")
        await store.insert("def456", "https://example.com")

        async with store.lock_row("abc123"):
            url = await asyncio.wait_for(store.resolve_and_increment("def456"), timeout=1)

        assert url == "https://example.com"

    async def test_row_locks_are_released(self, store):
        await store.insert("abc123", "https://example.com")

        await store.resolve_and_increment("abc123")
        await store.resolve_and_increment("nope123")
        await store.delete("abc123")

        assert store._row_locks == {}

    async def test_last_clicked_never_before_created_at(self):
        link = Link(code="abc123", url="https://example.com", created_at=datetime.now(timezone.utc))

        clicked = link.clicked(link.created_at - timedelta(seconds=5))

        assert clicked.click_count == 1
        assert clicked.last_clicked == link.created_at

    async def test_health_check(self):
        assert await MemoryLinkStore().health_check() is True
