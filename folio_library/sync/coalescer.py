"""Per-key override cache with single-flight fetching.

Concurrent requests for the same uncached key share one store fetch: the
first caller registers an asyncio.Task for the key before it first suspends,
and every later caller awaits that same task until it settles.
"""

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any
from typing import Generic
from typing import TypeVar

from folio_library.store.errors import StoreNotFoundError

from .write_through import LoadingTracker
from .write_through import write_through

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

# Returned by a failed fetch task; each caller substitutes its own fallback
_MISSING: Any = object()


class KeyedRequestCoalescer(Generic[K, V]):
    """Cache of per-key values fetched at most once at a time per key.

    A cached key is authoritative until `set`, `invalidate` or `clear`; it is
    never re-validated against the store on read. A failed fetch caches
    nothing, so the next `get` for that key fetches again.
    """

    def __init__(
        self,
        fetch: Callable[[K], Awaitable[V]],
        update: Callable[[K, V], Awaitable[V]],
        *,
        tracker: LoadingTracker | None = None,
        name: str = "override",
    ) -> None:
        """Initialize the coalescer.

        Args:
            fetch: Store call for one key; must raise when the key has no value
            update: Store call writing a value and returning the stored value
            tracker: Loading indicator held during `set`
            name: Label used in log messages
        """
        self._fetch = fetch
        self._update = update
        self._tracker = tracker or LoadingTracker()
        self.name = name

        self._cache: dict[K, V] = {}
        self._in_flight: dict[K, asyncio.Task[Any]] = {}
        # Fetches started under an older generation must not overwrite newer values
        self._generations: dict[K, int] = {}

    # --- Snapshots ---

    @property
    def cached(self) -> dict[K, V]:
        return dict(self._cache)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    @property
    def loading(self) -> bool:
        return self._tracker.loading

    def is_in_flight(self, key: K) -> bool:
        return key in self._in_flight

    def peek(self, key: K) -> V | None:
        """Return the cached value without fetching."""
        return self._cache.get(key)

    # --- Operations ---

    async def get(self, key: K, fallback: Any = None) -> Any:
        """Return the value for `key`, fetching it once if needed.

        Args:
            key: Entity key; a falsy key returns `fallback` without fetching
            fallback: Returned when the key has no value or the fetch failed

        Returns:
            Cached or freshly fetched value, or `fallback`
        """
        if not key:
            return fallback
        if key in self._cache:
            return self._cache[key]

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.create_task(self._run_fetch(key, self._generations.get(key, 0)))
            self._in_flight[key] = task
        else:
            logger.debug(f"{self.name}: joining in-flight fetch for {key}")

        # Shielded so a cancelled caller does not cancel the fetch other callers share
        result = await asyncio.shield(task)
        return fallback if result is _MISSING else result

    async def set(self, key: K, value: V) -> V:
        """Write `value` through to the store and cache the stored result."""

        def store(result: V) -> None:
            self._bump(key)
            self._cache[key] = result

        try:
            return await write_through(lambda: self._update(key, value), store, self._tracker)
        except Exception as e:
            logger.warning(f"Failed to update {self.name} for {key}: {e}")
            raise

    async def invalidate(self, key: K, fallback: Any = None) -> Any:
        """Drop the cached value for `key` and fetch it again.

        A fetch already in flight for the key is waited out and its result
        discarded, since it may predate the change being invalidated.
        """
        if not key:
            return fallback

        self._bump(key)
        self._cache.pop(key, None)

        pending = self._in_flight.get(key)
        if pending is not None:
            await asyncio.shield(pending)

        return await self.get(key, fallback)

    def clear(self) -> None:
        """Drop every cached value. In-flight fetches will not repopulate the cache."""
        # In-flight keys keep a bumped generation so their results are discarded
        self._generations = {key: self._generations.get(key, 0) + 1 for key in self._in_flight}
        self._cache.clear()
        logger.debug(f"{self.name}: cache cleared")

    def _bump(self, key: K) -> None:
        self._generations[key] = self._generations.get(key, 0) + 1

    async def _run_fetch(self, key: K, generation: int) -> Any:
        try:
            value = await self._fetch(key)
        except StoreNotFoundError:
            logger.debug(f"{self.name}: no value stored for {key}")
            return _MISSING
        except Exception as e:
            logger.warning(f"Failed to fetch {self.name} for {key}, using fallback: {e}")
            return _MISSING
        else:
            if self._generations.get(key, 0) == generation:
                self._cache[key] = value
                return value
            return self._cache.get(key, value)
        finally:
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]
            if key not in self._cache and key not in self._in_flight:
                self._generations.pop(key, None)
