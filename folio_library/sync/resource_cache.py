"""TTL-gated cache for a bulk collection plus one selected item."""

import logging
import time
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any
from typing import Generic
from typing import TypeVar

from .write_through import LoadingTracker
from .write_through import write_through

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P")

DEFAULT_TTL_SECONDS = 5 * 60


class ResourceCache(Generic[T, P]):
    """Caches the full collection of one resource type and a selected item.

    The collection is only ever replaced by the complete result of a
    successful fetch. `refresh()` is skipped while the collection is fresh or
    another refresh is running; `write()` always re-reads regardless of TTL.

    Example:
        >>> pages = ResourceCache(store.list_pages, store.get_page, store.update_page)
        >>> await pages.refresh()
        >>> await pages.write("about", PageUpdate(title="About me"))
    """

    def __init__(
        self,
        fetch_all: Callable[[], Awaitable[list[T]]],
        fetch_one: Callable[[str], Awaitable[T]],
        update: Callable[[str, P], Awaitable[Any]],
        *,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        tracker: LoadingTracker | None = None,
        name: str = "resource",
    ) -> None:
        """Initialize the cache.

        Args:
            fetch_all: Store call returning the whole collection
            fetch_one: Store call returning one item by id
            update: Store call writing a patch to one item
            ttl: Seconds a fetched collection stays fresh
            clock: Monotonic time source
            tracker: Loading indicator, shared when several caches feed one UI
            name: Label used in log messages
        """
        self._fetch_all = fetch_all
        self._fetch_one = fetch_one
        self._update = update
        self.ttl = ttl
        self._clock = clock
        self._tracker = tracker or LoadingTracker()
        self.name = name

        self._items: list[T] = []
        self._selected: T | None = None
        self._last_refresh: float | None = None
        self._refreshing = False
        # Bumped by every successful write; refreshes that started earlier are discarded
        self._generation = 0

    # --- Snapshots ---

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    @property
    def selected(self) -> T | None:
        return self._selected

    @property
    def loading(self) -> bool:
        return self._tracker.loading

    @property
    def last_refresh(self) -> float | None:
        return self._last_refresh

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    def is_fresh(self) -> bool:
        if self._last_refresh is None:
            return False
        return self._clock() - self._last_refresh < self.ttl

    # --- Operations ---

    def invalidate(self) -> None:
        """Mark the collection stale so the next refresh fetches."""
        self._last_refresh = None

    async def refresh(self) -> None:
        """Fetch the collection unless it is fresh or a refresh is running."""
        if self.is_fresh():
            logger.debug(f"{self.name}: cache fresh, skipping refresh")
            return
        if self._refreshing:
            logger.debug(f"{self.name}: refresh already in progress")
            return

        self._refreshing = True
        generation = self._generation
        try:
            with self._tracker.track():
                items = await self._fetch_all()
        except Exception as e:
            logger.warning(f"Failed to refresh {self.name}: {e}")
            raise
        finally:
            self._refreshing = False

        if generation != self._generation:
            logger.debug(f"{self.name}: discarding refresh superseded by a write")
            return
        self._replace(items)
        logger.debug(f"{self.name}: refreshed {len(items)} item(s)")

    async def reload(self) -> None:
        """Force a re-read regardless of TTL."""
        self.invalidate()
        await self.refresh()

    async def select(self, item_id: str) -> T:
        """Fetch one item and make it the selected item. Never served from cache."""
        try:
            item = await self._fetch_one(item_id)
        except Exception as e:
            logger.warning(f"Failed to select {self.name} {item_id}: {e}")
            raise
        self._selected = item
        return item

    async def write(self, item_id: str, patch: P) -> None:
        """Write a patch through to the store, then re-read the collection.

        The collection and its freshness are untouched if the store rejects
        the write.
        """

        async def reread(_result: Any) -> None:
            self._generation += 1
            self._last_refresh = None
            self._replace(await self._fetch_all())

        try:
            await write_through(lambda: self._update(item_id, patch), reread, self._tracker)
        except Exception as e:
            logger.warning(f"Failed to write {self.name} {item_id}: {e}")
            raise
        logger.info(f"{self.name}: wrote {item_id} and re-read {len(self._items)} item(s)")

    def _replace(self, items: list[T]) -> None:
        self._items = list(items)
        self._last_refresh = self._clock()
