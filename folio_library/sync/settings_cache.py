"""Cache for a single settings document (image defaults, layout)."""

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any
from typing import Generic
from typing import TypeVar

from .write_through import LoadingTracker
from .write_through import write_through

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SettingsCache(Generic[T]):
    """Holds one settings value.

    Refreshes are single-flight: callers that arrive while a fetch is running
    await that fetch. Updates write through and then re-read the value.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        update: Callable[[T], Awaitable[Any]],
        *,
        tracker: LoadingTracker | None = None,
        name: str = "settings",
    ) -> None:
        self._fetch = fetch
        self._update = update
        self._tracker = tracker or LoadingTracker()
        self.name = name

        self._value: T | None = None
        self._pending: asyncio.Task[T] | None = None
        self._generation = 0

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def loading(self) -> bool:
        return self._tracker.loading

    def invalidate(self) -> None:
        """Drop the value. A fetch already running is detached and its result discarded."""
        self._generation += 1
        self._value = None
        self._pending = None

    async def refresh(self) -> T:
        """Fetch the current value, sharing a fetch that is already running."""
        if self._pending is None:
            self._pending = asyncio.create_task(self._load(self._generation))
        return await asyncio.shield(self._pending)

    async def update(self, value: T) -> T | None:
        """Write `value` through to the store, then re-read the stored value."""

        async def reread(_result: Any) -> None:
            self._generation += 1
            self._pending = None
            self._value = await self._fetch()

        try:
            await write_through(lambda: self._update(value), reread, self._tracker)
        except Exception as e:
            logger.warning(f"Failed to update {self.name}: {e}")
            raise
        logger.info(f"Updated {self.name}")
        return self._value

    async def _load(self, generation: int) -> T:
        try:
            with self._tracker.track():
                value = await self._fetch()
        except Exception as e:
            logger.warning(f"Failed to refresh {self.name}: {e}")
            raise
        finally:
            if self._pending is asyncio.current_task():
                self._pending = None

        if generation == self._generation:
            self._value = value
        return value
