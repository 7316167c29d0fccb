"""
Tests for the folio CLI.

The content provider is swapped for one over an in-memory fake store.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import FakeStore

from folio_library.models import ImageSettings
from folio_library.store import StoreUnavailableError
from folio_library.sync import ContentProvider
from foliod.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def fake_provider(fake_store: FakeStore):
    """Patch open_provider to serve fake_store."""

    @asynccontextmanager
    async def open_fake_provider(settings=None):
        yield ContentProvider(fake_store)

    with patch("foliod.cli.open_provider", open_fake_provider):
        yield fake_store


@pytest.mark.unit
class TestContentCommands:
    """Test commands that go through the content provider."""

    def test_pages_lists_ids_and_titles(self, runner: CliRunner, fake_provider: FakeStore) -> None:
        result = runner.invoke(cli, ["pages"])

        assert result.exit_code == 0
        assert "about\tAbout" in result.output
        assert "contact\tContact" in result.output

    def test_page_shows_content(self, runner: CliRunner, fake_provider: FakeStore) -> None:
        result = runner.invoke(cli, ["page", "contact"])

        assert result.exit_code == 0
        assert "# Contact" in result.output
        assert "<p>Say hi</p>" in result.output

    def test_missing_page_exits_with_error(self, runner: CliRunner, fake_provider: FakeStore) -> None:
        result = runner.invoke(cli, ["page", "nope"])

        assert result.exit_code == 1
        assert "Page not found" in result.output

    def test_photo_settings_shows_effective_transformation(
        self, runner: CliRunner, fake_provider: FakeStore
    ) -> None:
        fake_provider.image_settings = ImageSettings(format="webp")
        fake_provider.photo_settings["photo1"] = ImageSettings(quality=80)

        result = runner.invoke(cli, ["photo-settings", "photo1"])

        assert result.exit_code == 0
        assert "transformation: f_webp,q_80" in result.output

    def test_set_photo_settings_stores_override(self, runner: CliRunner, fake_provider: FakeStore) -> None:
        result = runner.invoke(cli, ["set-photo-settings", "photo1", "--quality", "75", "--sharpen", "10"])

        assert result.exit_code == 0
        stored = fake_provider.photo_settings["photo1"]
        assert stored.model_dump(exclude_unset=True) == {"quality": 75, "sharpen": 10}

    def test_set_photo_settings_requires_a_field(self, runner: CliRunner, fake_provider: FakeStore) -> None:
        result = runner.invoke(cli, ["set-photo-settings", "photo1"])

        assert result.exit_code == 1
        assert "no settings given" in result.output

    @pytest.mark.parametrize("quality", ["abc", "150"])
    def test_set_photo_settings_rejects_bad_quality(
        self, runner: CliRunner, fake_provider: FakeStore, quality: str
    ) -> None:
        result = runner.invoke(cli, ["set-photo-settings", "photo1", "--quality", quality])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "quality" in result.output
        assert not isinstance(result.exception, (ValueError, TypeError))
        assert fake_provider.calls == []

    def test_unreachable_store_exits_with_error(self, runner: CliRunner, fake_provider: FakeStore) -> None:
        fake_provider.fail["list_pages"] = StoreUnavailableError("list_pages: connection refused")

        result = runner.invoke(cli, ["pages"])

        assert result.exit_code == 1
        assert "connection refused" in result.output


@pytest.mark.unit
class TestLocalCommands:
    """Test commands that only touch local files."""

    def test_init_config(self, runner: CliRunner, folio_home: Path) -> None:
        result = runner.invoke(cli, ["init-config"])

        assert result.exit_code == 0
        assert (folio_home / "config" / "folio.yaml").exists()

    def test_logs_without_file(self, runner: CliRunner, folio_home: Path) -> None:
        result = runner.invoke(cli, ["logs"])

        assert result.exit_code == 0
        assert "No logs found" in result.output

    def test_logs_tail(self, runner: CliRunner, folio_home: Path) -> None:
        log_dir = folio_home / "logs" / "foliod"
        log_dir.mkdir(parents=True)
        (log_dir / "foliod.log").write_text("one\ntwo\nthree\n")

        result = runner.invoke(cli, ["logs", "-n", "2"])

        assert result.output.splitlines() == ["two", "three"]

    def test_serve_uses_config(self, runner: CliRunner, folio_home: Path) -> None:
        with patch("foliod.cli.uvicorn.run") as run:
            result = runner.invoke(cli, ["serve", "--port", "9100"])

        assert result.exit_code == 0
        run.assert_called_once_with("foliod.main:app", host="127.0.0.1", port=9100, log_level="info")
