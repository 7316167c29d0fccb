"""Store interface consumed by the synchronization core."""

from typing import Protocol

from folio_library.models import ImageSettings
from folio_library.models import LayoutSettings
from folio_library.models import Page
from folio_library.models import PageUpdate


class ContentStore(Protocol):
    """Access to the backing content store.

    Every method may raise a StoreError subclass. `get_photo_settings` must
    raise StoreNotFoundError (never return None) when a photo has no override.
    """

    async def list_pages(self) -> list[Page]: ...

    async def get_page(self, page_id: str) -> Page: ...

    async def update_page(self, page_id: str, patch: PageUpdate) -> Page: ...

    async def get_image_settings(self) -> ImageSettings: ...

    async def update_image_settings(self, settings: ImageSettings) -> ImageSettings: ...

    async def get_layout_settings(self) -> LayoutSettings: ...

    async def update_layout_settings(self, settings: LayoutSettings) -> LayoutSettings: ...

    async def get_photo_settings(self, photo_id: str) -> ImageSettings: ...

    async def update_photo_settings(self, photo_id: str, settings: ImageSettings) -> ImageSettings: ...
