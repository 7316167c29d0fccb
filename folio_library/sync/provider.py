"""Content provider: the admin console's view of the content store.

One ContentProvider is created per admin session and handed to whatever
needs it. It owns every cached resource the console edits:

- the page list and the page currently being edited (TTL-gated)
- the global image-processing defaults
- the layout settings
- per-photo image-setting overrides (coalesced per photo)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from collections.abc import Callable
from contextlib import asynccontextmanager

from folio_library.config import FolioSettings
from folio_library.config import load_config
from folio_library.models import ImageSettings
from folio_library.models import LayoutSettings
from folio_library.models import Page
from folio_library.models import PageUpdate
from folio_library.store import ContentStore
from folio_library.store import HttpContentStore

from .coalescer import KeyedRequestCoalescer
from .resource_cache import DEFAULT_TTL_SECONDS
from .resource_cache import ResourceCache
from .settings_cache import SettingsCache
from .write_through import LoadingTracker

logger = logging.getLogger(__name__)


class ContentProvider:
    """Cached, deduplicated access to editable site content."""

    def __init__(
        self,
        store: ContentStore,
        *,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the provider.

        Args:
            store: Backing content store
            ttl: Freshness window for the page list, in seconds
            clock: Monotonic time source for the TTL check
        """
        self.store = store
        self._tracker = LoadingTracker()

        self.pages: ResourceCache[Page, PageUpdate] = ResourceCache(
            store.list_pages,
            store.get_page,
            store.update_page,
            ttl=ttl,
            clock=clock,
            tracker=self._tracker,
            name="pages",
        )
        self.image_settings: SettingsCache[ImageSettings] = SettingsCache(
            store.get_image_settings,
            store.update_image_settings,
            tracker=self._tracker,
            name="image settings",
        )
        self.layout_settings: SettingsCache[LayoutSettings] = SettingsCache(
            store.get_layout_settings,
            store.update_layout_settings,
            tracker=self._tracker,
            name="layout settings",
        )
        self.photo_settings: KeyedRequestCoalescer[str, ImageSettings] = KeyedRequestCoalescer(
            store.get_photo_settings,
            store.update_photo_settings,
            tracker=self._tracker,
            name="photo image settings",
        )

    # --- Snapshots ---

    @property
    def loading(self) -> bool:
        return self._tracker.loading

    @property
    def page_list(self) -> tuple[Page, ...]:
        return self.pages.items

    @property
    def current_page(self) -> Page | None:
        return self.pages.selected

    @property
    def last_refresh(self) -> float | None:
        return self.pages.last_refresh

    @property
    def image_settings_value(self) -> ImageSettings | None:
        return self.image_settings.value

    @property
    def layout_settings_value(self) -> LayoutSettings | None:
        return self.layout_settings.value

    # --- Pages ---

    async def refresh_pages(self) -> tuple[Page, ...]:
        await self.pages.refresh()
        return self.pages.items

    async def select_page(self, page_id: str) -> Page:
        return await self.pages.select(page_id)

    async def update_page(self, page_id: str, patch: PageUpdate) -> None:
        await self.pages.write(page_id, patch)

    # --- Global settings ---

    async def refresh_image_settings(self) -> ImageSettings:
        return await self.image_settings.refresh()

    async def update_image_settings(self, settings: ImageSettings) -> ImageSettings | None:
        return await self.image_settings.update(settings)

    async def refresh_layout_settings(self) -> LayoutSettings:
        return await self.layout_settings.refresh()

    async def update_layout_settings(self, settings: LayoutSettings) -> LayoutSettings | None:
        return await self.layout_settings.update(settings)

    # --- Per-photo overrides ---

    def _default_photo_settings(self) -> ImageSettings:
        return self.image_settings.value or ImageSettings()

    async def get_photo_settings(self, photo_id: str) -> ImageSettings:
        """Get a photo's override, falling back to the global image defaults."""
        return await self.photo_settings.get(photo_id, self._default_photo_settings())

    async def effective_photo_settings(self, photo_id: str) -> ImageSettings:
        """Global defaults with the photo's explicitly-set override fields applied."""
        defaults = self._default_photo_settings()
        override = await self.photo_settings.get(photo_id)
        return defaults.merged(override)

    async def update_photo_settings(self, photo_id: str, settings: ImageSettings) -> ImageSettings:
        return await self.photo_settings.set(photo_id, settings)

    async def invalidate_photo_settings(self, photo_id: str) -> ImageSettings:
        return await self.photo_settings.invalidate(photo_id, self._default_photo_settings())

    # --- Everything ---

    async def clear_cache(self) -> None:
        """Drop every cached resource and re-read pages and both settings documents."""
        self.pages.invalidate()
        self.image_settings.invalidate()
        self.layout_settings.invalidate()
        self.photo_settings.clear()

        with self._tracker.track():
            await asyncio.gather(
                self.pages.refresh(),
                self.image_settings.refresh(),
                self.layout_settings.refresh(),
            )
        logger.info("Content cache cleared and reloaded")


@asynccontextmanager
async def open_provider(settings: FolioSettings | None = None) -> AsyncIterator[ContentProvider]:
    """Create a provider talking to the configured admin API.

    Example:
        >>> async with open_provider() as provider:
        ...     pages = await provider.refresh_pages()
    """
    settings = settings or load_config()
    async with HttpContentStore.from_settings(settings) as store:
        logger.debug(f"Opened content provider against {settings.api_base}")
        yield ContentProvider(store, ttl=settings.cache_ttl_seconds)
