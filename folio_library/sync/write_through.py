"""Write-through policy shared by every cache in the synchronization core.

A write always goes to the store first; the local cache is only touched once
the store has accepted it, and the loading indicator stays raised for the
whole operation.
"""

import inspect
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")


class LoadingTracker:
    """Counted loading flag.

    Overlapping operations each hold the flag; it reads False only once all of
    them have finished, so one operation can never clear another's indicator.
    """

    def __init__(self) -> None:
        self._active = 0

    @property
    def loading(self) -> bool:
        return self._active > 0

    @contextmanager
    def track(self) -> Iterator[None]:
        self._active += 1
        try:
            yield
        finally:
            self._active -= 1


async def write_through(
    mutate: Callable[[], Awaitable[R]],
    apply: Callable[[R], Awaitable[None] | None],
    tracker: LoadingTracker,
) -> R:
    """Run a store mutation, then update the cache from its result.

    Args:
        mutate: Store call performing the write
        apply: Cache update run only after `mutate` succeeded; may be async
        tracker: Loading indicator held across both steps

    Returns:
        Whatever the store mutation returned

    Raises:
        Any error from `mutate` (cache untouched) or from `apply`
    """
    with tracker.track():
        result = await mutate()
        outcome = apply(result)
        if inspect.isawaitable(outcome):
            await outcome
        return result
