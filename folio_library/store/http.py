"""HTTP content store backed by the foliod admin API."""

from __future__ import annotations

import logging
from typing import Any
from typing import TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import TypeAdapter
from pydantic import ValidationError

from folio_library.config.settings import FolioSettings
from folio_library.models import ImageSettings
from folio_library.models import LayoutSettings
from folio_library.models import Page
from folio_library.models import PageUpdate

from .errors import StoreError
from .errors import StoreNotFoundError
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_page_list = TypeAdapter(list[Page])


class HttpContentStore:
    """ContentStore implementation over the admin API.

    No retries are attempted: transport failures and non-success statuses are
    mapped onto the StoreError hierarchy and raised to the caller.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Admin API root (e.g. http://127.0.0.1:8430)
            timeout: Per-request timeout in seconds
            client: Pre-built client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: FolioSettings) -> HttpContentStore:
        return cls(settings.api_base, timeout=settings.request_timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpContentStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, operation: str, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.TimeoutException as e:
            raise StoreUnavailableError(f"{operation}: request timed out", operation=operation) from e
        except httpx.TransportError as e:
            raise StoreUnavailableError(f"{operation}: {e}", operation=operation) from e

        if response.status_code == 404:
            raise StoreNotFoundError(
                f"{operation}: not found ({path})",
                operation=operation,
                status_code=404,
            )
        if not response.is_success:
            raise StoreError(
                f"{operation}: {response.status_code} {response.reason_phrase}",
                operation=operation,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"{operation}: malformed response body", operation=operation) from e

    async def _request_model(
        self,
        model: type[ModelT],
        operation: str,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> ModelT:
        data = await self._request(operation, method, path, payload)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise StoreError(f"{operation}: malformed response: {e}", operation=operation) from e

    # --- Pages ---

    async def list_pages(self) -> list[Page]:
        data = await self._request("list_pages", "GET", "/api/admin/pages")
        try:
            return _page_list.validate_python(data)
        except ValidationError as e:
            raise StoreError(f"list_pages: malformed response: {e}", operation="list_pages") from e

    async def get_page(self, page_id: str) -> Page:
        if not page_id:
            raise ValueError("page_id is required")
        return await self._request_model(Page, "get_page", "GET", f"/api/admin/pages/{quote(page_id, safe='')}")

    async def update_page(self, page_id: str, patch: PageUpdate) -> Page:
        if not page_id:
            raise ValueError("page_id is required")
        return await self._request_model(
            Page,
            "update_page",
            "PUT",
            f"/api/admin/pages/{quote(page_id, safe='')}",
            patch.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    # --- Global settings ---

    async def get_image_settings(self) -> ImageSettings:
        return await self._request_model(ImageSettings, "get_image_settings", "GET", "/api/admin/settings/images")

    async def update_image_settings(self, settings: ImageSettings) -> ImageSettings:
        return await self._request_model(
            ImageSettings,
            "update_image_settings",
            "PUT",
            "/api/admin/settings/images",
            settings.model_dump(mode="json", by_alias=True),
        )

    async def get_layout_settings(self) -> LayoutSettings:
        return await self._request_model(LayoutSettings, "get_layout_settings", "GET", "/api/admin/settings/layout")

    async def update_layout_settings(self, settings: LayoutSettings) -> LayoutSettings:
        return await self._request_model(
            LayoutSettings,
            "update_layout_settings",
            "PUT",
            "/api/admin/settings/layout",
            settings.model_dump(mode="json", by_alias=True),
        )

    # --- Per-photo overrides ---

    async def get_photo_settings(self, photo_id: str) -> ImageSettings:
        return await self._request_model(
            ImageSettings,
            "get_photo_settings",
            "GET",
            f"/api/admin/photos/{quote(photo_id, safe='')}/image-settings",
        )

    async def update_photo_settings(self, photo_id: str, settings: ImageSettings) -> ImageSettings:
        return await self._request_model(
            ImageSettings,
            "update_photo_settings",
            "PUT",
            f"/api/admin/photos/{quote(photo_id, safe='')}/image-settings",
            # Only explicitly-set fields override the global defaults
            settings.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
