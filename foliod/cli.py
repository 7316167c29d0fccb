"""folio CLI.

Runs the admin API and inspects site content through the same cached
content provider the admin console uses.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
import uvicorn
from pydantic import ValidationError

from folio_library.config import create_default_config
from folio_library.config import load_config
from folio_library.models import ImageSettings
from folio_library.storage import get_log_dir
from folio_library.store import StoreError
from folio_library.sync import open_provider

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_file() -> Path:
    return get_log_dir() / "foliod.log"


def _run(coro):
    """Run a provider coroutine, turning store failures into a clean exit."""
    try:
        return asyncio.run(coro)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
def cli():
    """folio - photography portfolio content tools."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default from config)")
@click.option("--port", default=None, type=int, help="Port to listen on (default from config)")
@click.option("--log-file", is_flag=True, help="Also write logs to the foliod log file")
def serve(host: str | None, port: int | None, log_file: bool):
    """Run the foliod admin API."""
    config = load_config()
    if log_file:
        handler = logging.FileHandler(get_log_file(), encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)
        click.echo(f"Logging to {get_log_file()}")
    uvicorn.run(
        "foliod.main:app",
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
    )


@cli.command("init-config")
def init_config():
    """Write the default folio.yaml if it does not exist."""
    path = create_default_config()
    click.echo(f"Config: {path}")


@cli.command()
def pages():
    """List pages."""

    async def _list():
        async with open_provider() as provider:
            return await provider.refresh_pages()

    items = _run(_list())
    if not items:
        click.echo("No pages")
        return
    for page in items:
        click.echo(f"{page.id}\t{page.title}")


@cli.command()
@click.argument("page_id")
def page(page_id: str):
    """Show one page."""

    async def _select():
        async with open_provider() as provider:
            return await provider.select_page(page_id)

    selected = _run(_select())
    click.echo(f"# {selected.title}")
    click.echo(selected.content)


@cli.command("photo-settings")
@click.argument("photo_id")
def photo_settings(photo_id: str):
    """Show the effective image settings for a photo."""

    async def _resolve():
        async with open_provider() as provider:
            await provider.refresh_image_settings()
            return await provider.effective_photo_settings(photo_id)

    settings = _run(_resolve())
    click.echo(settings.model_dump_json(by_alias=True))
    click.echo(f"transformation: {settings.to_transformation()}")


@cli.command("set-photo-settings")
@click.argument("photo_id")
@click.option("--quality", default=None, help="1-100 or 'auto'")
@click.option("--sharpen", default=None, type=int)
@click.option("--blur", default=None, type=int)
@click.option("--format", "image_format", default=None, type=click.Choice(["auto", "webp", "jpg", "png", "avif"]))
def set_photo_settings(photo_id: str, quality: str | None, sharpen: int | None, blur: int | None, image_format: str | None):
    """Store an image-settings override for a photo."""
    fields = {"quality": quality, "sharpen": sharpen, "blur": blur, "format": image_format}
    if quality is not None and quality != "auto":
        try:
            fields["quality"] = int(quality)
        except ValueError:
            click.echo(f"Error: quality must be 1-100 or 'auto', got {quality!r}", err=True)
            sys.exit(1)
    override = {k: v for k, v in fields.items() if v is not None}
    if not override:
        click.echo("Error: no settings given", err=True)
        sys.exit(1)

    try:
        settings = ImageSettings.model_validate(override)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            click.echo(f"Error: {field}: {error['msg']}", err=True)
        sys.exit(1)

    async def _store():
        async with open_provider() as provider:
            return await provider.update_photo_settings(photo_id, settings)

    stored = _run(_store())
    click.echo(f"Stored override for {photo_id}: {stored.model_dump_json(by_alias=True, exclude_unset=True)}")


@cli.command()
@click.option("-n", "--lines", default=50, help="Number of lines to show")
def logs(lines: int):
    """Show the end of the foliod log file."""
    log_file = get_log_file()
    if not log_file.exists():
        click.echo(f"No logs found at {log_file}")
        return

    with open(log_file, encoding="utf-8") as f:
        all_lines = f.readlines()
    for line in all_lines[-lines:]:
        click.echo(line.rstrip())


def main():
    """Entry point for folio CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
