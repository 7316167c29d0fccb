"""In-process content store over the admin database.

Mirrors the admin API semantics without HTTP, for embedding the
synchronization core next to the database (scripts, tests).
"""

import logging

from folio_library.db import IMAGE_SETTINGS_KEY
from folio_library.db import LAYOUT_SETTINGS_KEY
from folio_library.db import AdminDatabase
from folio_library.models import ImageSettings
from folio_library.models import LayoutSettings
from folio_library.models import Page
from folio_library.models import PageUpdate

from .errors import StoreNotFoundError

logger = logging.getLogger(__name__)


class LocalContentStore:
    """ContentStore implementation calling AdminDatabase directly."""

    def __init__(self, db: AdminDatabase) -> None:
        self.db = db

    async def list_pages(self) -> list[Page]:
        return [Page.model_validate(row) for row in self.db.get_all_pages()]

    async def get_page(self, page_id: str) -> Page:
        row = self.db.get_page(page_id)
        if row is None:
            raise StoreNotFoundError(f"Page not found: {page_id}", operation="get_page")
        return Page.model_validate(row)

    async def update_page(self, page_id: str, patch: PageUpdate) -> Page:
        row = self.db.upsert_page(page_id, title=patch.title, content=patch.content)
        return Page.model_validate(row)

    async def get_image_settings(self) -> ImageSettings:
        return ImageSettings.model_validate(self.db.get_setting(IMAGE_SETTINGS_KEY) or {})

    async def update_image_settings(self, settings: ImageSettings) -> ImageSettings:
        stored = self.db.upsert_setting(IMAGE_SETTINGS_KEY, settings.model_dump(mode="json"))
        return ImageSettings.model_validate(stored)

    async def get_layout_settings(self) -> LayoutSettings:
        return LayoutSettings.model_validate(self.db.get_setting(LAYOUT_SETTINGS_KEY) or {})

    async def update_layout_settings(self, settings: LayoutSettings) -> LayoutSettings:
        stored = self.db.upsert_setting(LAYOUT_SETTINGS_KEY, settings.model_dump(mode="json"))
        return LayoutSettings.model_validate(stored)

    async def get_photo_settings(self, photo_id: str) -> ImageSettings:
        stored = self.db.get_photo_settings(photo_id)
        if stored is None:
            raise StoreNotFoundError(f"No image settings for photo {photo_id}", operation="get_photo_settings")
        return ImageSettings.model_validate(stored)

    async def update_photo_settings(self, photo_id: str, settings: ImageSettings) -> ImageSettings:
        stored = self.db.upsert_photo_settings(photo_id, settings.model_dump(mode="json", exclude_unset=True))
        return ImageSettings.model_validate(stored)
