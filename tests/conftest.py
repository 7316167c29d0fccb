"""
Shared pytest fixtures for the folio test suite.

Provides fixtures for:
- Isolated FOLIO_HOME storage
- An in-memory admin database
- A controllable fake content store and clock
- A foliod test client bound to that database
"""

import asyncio
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# foliod.main loads config at import time; keep it out of the working tree
os.environ["FOLIO_HOME"] = tempfile.mkdtemp(prefix="folio-test-")

from folio_library.db import AdminDatabase  # noqa: E402
from folio_library.models import ImageSettings  # noqa: E402
from folio_library.models import LayoutSettings  # noqa: E402
from folio_library.models import Page  # noqa: E402
from folio_library.models import PageUpdate  # noqa: E402
from folio_library.store import StoreNotFoundError  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStore:
    """In-memory ContentStore that records calls.

    Every call suspends at least once, like a network round trip. Setting
    `gate` to an unset asyncio.Event holds every call until it is set; putting
    an exception in `fail` under a method name makes that method raise it.
    """

    def __init__(self) -> None:
        self.pages: dict[str, Page] = {}
        self.image_settings = ImageSettings()
        self.layout_settings = LayoutSettings()
        self.photo_settings: dict[str, ImageSettings] = {}
        self.calls: list[tuple] = []
        self.gate: asyncio.Event | None = None
        self.fail: dict[str, Exception] = {}

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    async def _enter(self, name: str, *args: object) -> None:
        self.calls.append((name, *args))
        await asyncio.sleep(0)
        if self.gate is not None:
            await self.gate.wait()
        if name in self.fail:
            raise self.fail[name]

    async def list_pages(self) -> list[Page]:
        await self._enter("list_pages")
        return [self.pages[key] for key in sorted(self.pages)]

    async def get_page(self, page_id: str) -> Page:
        await self._enter("get_page", page_id)
        if page_id not in self.pages:
            raise StoreNotFoundError(f"Page not found: {page_id}")
        return self.pages[page_id]

    async def update_page(self, page_id: str, patch: PageUpdate) -> Page:
        await self._enter("update_page", page_id, patch)
        current = self.pages.get(page_id, Page(id=page_id, title=page_id))
        updated = current.model_copy(update=patch.model_dump(exclude_none=True))
        self.pages[page_id] = updated
        return updated

    async def get_image_settings(self) -> ImageSettings:
        await self._enter("get_image_settings")
        return self.image_settings

    async def update_image_settings(self, settings: ImageSettings) -> ImageSettings:
        await self._enter("update_image_settings", settings)
        self.image_settings = settings
        return settings

    async def get_layout_settings(self) -> LayoutSettings:
        await self._enter("get_layout_settings")
        return self.layout_settings

    async def update_layout_settings(self, settings: LayoutSettings) -> LayoutSettings:
        await self._enter("update_layout_settings", settings)
        self.layout_settings = settings
        return settings

    async def get_photo_settings(self, photo_id: str) -> ImageSettings:
        await self._enter("get_photo_settings", photo_id)
        if photo_id not in self.photo_settings:
            raise StoreNotFoundError(f"No image settings for photo {photo_id}")
        return self.photo_settings[photo_id]

    async def update_photo_settings(self, photo_id: str, settings: ImageSettings) -> ImageSettings:
        await self._enter("update_photo_settings", photo_id, settings)
        self.photo_settings[photo_id] = settings
        return settings


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_store() -> FakeStore:
    store = FakeStore()
    store.pages = {
        "about": Page(id="about", title="About", content="<p>About me</p>"),
        "contact": Page(id="contact", title="Contact", content="<p>Say hi</p>"),
    }
    return store


@pytest.fixture
def admin_db() -> Generator[AdminDatabase, None, None]:
    """In-memory admin database, closed after the test."""
    db = AdminDatabase(":memory:")
    yield db
    db.close()


@pytest.fixture
def folio_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point FOLIO_HOME at a fresh temporary directory."""
    home = tmp_path / "folio-home"
    monkeypatch.setenv("FOLIO_HOME", str(home))
    for var in ("FOLIO_CONFIG_DIR", "FOLIO_STATE_DIR", "FOLIO_LOG_DIR"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def client(admin_db: AdminDatabase) -> Generator[TestClient, None, None]:
    """foliod test client serving an in-memory admin database.

    The client is not entered as a context manager, so the lifespan (which
    would open the configured database file) does not run.
    """
    from foliod.dependencies import get_admin_db
    from foliod.main import app

    app.dependency_overrides[get_admin_db] = lambda: admin_db
    yield TestClient(app)
    app.dependency_overrides.clear()
