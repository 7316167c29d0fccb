"""
Unit tests for ResourceCache.

Tests TTL gating, refresh reentrancy, selection, and the write-then-reread path.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from conftest import FakeClock

from folio_library.store import StoreError
from folio_library.sync import ResourceCache

TTL = 300.0


def make_cache(clock: FakeClock, fetch_all: AsyncMock | None = None, update: AsyncMock | None = None) -> ResourceCache:
    return ResourceCache(
        fetch_all or AsyncMock(return_value=[{"id": "a"}, {"id": "b"}]),
        AsyncMock(side_effect=lambda item_id: {"id": item_id, "body": f"body of {item_id}"}),
        update or AsyncMock(return_value=None),
        ttl=TTL,
        clock=clock,
        name="pages",
    )


@pytest.mark.unit
class TestRefresh:
    """Test TTL-gated refresh."""

    async def test_refresh_populates_collection(self, clock: FakeClock) -> None:
        cache = make_cache(clock)

        await cache.refresh()

        assert cache.items == ({"id": "a"}, {"id": "b"})
        assert cache.last_refresh == clock.now
        assert cache.loading is False

    async def test_refresh_within_ttl_fetches_once(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(return_value=[{"id": "a"}])
        cache = make_cache(clock, fetch_all=fetch_all)

        await cache.refresh()
        clock.advance(TTL - 1)
        await cache.refresh()

        assert fetch_all.await_count == 1

    async def test_refresh_after_ttl_fetches_again(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(return_value=[{"id": "a"}])
        cache = make_cache(clock, fetch_all=fetch_all)

        await cache.refresh()
        clock.advance(TTL)
        await cache.refresh()

        assert fetch_all.await_count == 2

    async def test_overlapping_refresh_is_noop(self, clock: FakeClock) -> None:
        """A refresh issued while another is in flight returns without fetching."""
        release = asyncio.Event()
        calls = 0

        async def slow_fetch() -> list[dict]:
            nonlocal calls
            calls += 1
            await release.wait()
            return [{"id": "a"}]

        cache = make_cache(clock, fetch_all=AsyncMock(side_effect=slow_fetch))

        first = asyncio.create_task(cache.refresh())
        await asyncio.sleep(0)
        assert cache.is_refreshing
        assert cache.loading is True

        await cache.refresh()
        assert calls == 1
        assert cache.items == ()

        release.set()
        await first

        assert calls == 1
        assert cache.is_refreshing is False
        assert cache.items == ({"id": "a"},)

        clock.advance(TTL)
        await cache.refresh()
        assert calls == 2

    async def test_failed_refresh_clears_guard_and_propagates(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(side_effect=[[{"id": "a"}], StoreError("boom"), [{"id": "b"}]])
        cache = make_cache(clock, fetch_all=fetch_all)
        await cache.refresh()
        clock.advance(TTL)

        with pytest.raises(StoreError):
            await cache.refresh()

        # Stale-but-present data stays visible
        assert cache.items == ({"id": "a"},)
        assert cache.is_refreshing is False
        assert cache.loading is False

        await cache.refresh()
        assert cache.items == ({"id": "b"},)

    async def test_reload_ignores_ttl(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(return_value=[])
        cache = make_cache(clock, fetch_all=fetch_all)

        await cache.refresh()
        await cache.reload()

        assert fetch_all.await_count == 2


@pytest.mark.unit
class TestSelect:
    """Test selecting the current item."""

    async def test_select_always_fetches(self, clock: FakeClock) -> None:
        cache = make_cache(clock)

        first = await cache.select("a")
        second = await cache.select("a")

        assert first == {"id": "a", "body": "body of a"}
        assert cache.selected == second
        assert cache._fetch_one.await_count == 2

    async def test_select_does_not_require_item_in_collection(self, clock: FakeClock) -> None:
        cache = make_cache(clock)

        await cache.select("zzz")

        assert cache.items == ()
        assert cache.selected["id"] == "zzz"

    async def test_failed_select_keeps_previous_selection(self, clock: FakeClock) -> None:
        cache = make_cache(clock)
        await cache.select("a")
        cache._fetch_one.side_effect = StoreError("gone")

        with pytest.raises(StoreError):
            await cache.select("b")

        assert cache.selected["id"] == "a"


@pytest.mark.unit
class TestWrite:
    """Test the write-through path."""

    async def test_write_rereads_within_ttl(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(side_effect=[[{"id": "a"}], [{"id": "a", "title": "X"}]])
        update = AsyncMock(return_value=None)
        cache = make_cache(clock, fetch_all=fetch_all, update=update)
        await cache.refresh()
        clock.advance(1)

        await cache.write("a", {"title": "X"})

        update.assert_awaited_once_with("a", {"title": "X"})
        assert fetch_all.await_count == 2
        assert cache.items == ({"id": "a", "title": "X"},)
        assert cache.last_refresh == clock.now
        assert cache.loading is False

    async def test_failed_write_leaves_cache_untouched(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(return_value=[{"id": "a"}])
        update = AsyncMock(side_effect=StoreError("rejected", status_code=500))
        cache = make_cache(clock, fetch_all=fetch_all, update=update)
        await cache.refresh()
        stamped = cache.last_refresh

        with pytest.raises(StoreError):
            await cache.write("a", {"title": "X"})

        assert fetch_all.await_count == 1
        assert cache.items == ({"id": "a"},)
        assert cache.last_refresh == stamped
        assert cache.loading is False

    async def test_refresh_started_before_write_does_not_overwrite_it(self, clock: FakeClock) -> None:
        release = asyncio.Event()
        responses = [[{"id": "a", "title": "old"}], [{"id": "a", "title": "new"}]]

        async def fetch() -> list[dict]:
            data = responses.pop(0)
            if data[0]["title"] == "old":
                await release.wait()
            return data

        cache = make_cache(clock, fetch_all=AsyncMock(side_effect=fetch))

        stale_refresh = asyncio.create_task(cache.refresh())
        await asyncio.sleep(0)
        await cache.write("a", {"title": "new"})
        release.set()
        await stale_refresh

        assert cache.items == ({"id": "a", "title": "new"},)

    async def test_scenario_refresh_refresh_write(self, clock: FakeClock) -> None:
        fetch_all = AsyncMock(return_value=[{"id": "a"}, {"id": "b"}])
        update = AsyncMock(return_value=None)
        cache = make_cache(clock, fetch_all=fetch_all, update=update)

        await cache.refresh()
        assert len(cache.items) == 2
        assert cache.loading is False

        await cache.refresh()
        assert fetch_all.await_count == 1

        await cache.write("a", {"title": "X"})
        update.assert_awaited_once_with("a", {"title": "X"})
        assert fetch_all.await_count == 2
