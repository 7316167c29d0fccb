"""Admin database for editable site content.

Row store for pages plus two key/value tables: site-wide settings (image
defaults, layout) and per-photo image-setting overrides. Values in the
key/value tables are stored as JSON text.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import Any

from folio_library.config.settings import IN_MEMORY_DB

logger = logging.getLogger(__name__)

IMAGE_SETTINGS_KEY = "images"
LAYOUT_SETTINGS_KEY = "layout"

SCHEMA = """
CREATE TABLE IF NOT EXISTS pages (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT DEFAULT '',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS photo_image_settings (
    photo_id TEXT PRIMARY KEY,
    settings TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def _now() -> str:
    return datetime.now(UTC).isoformat()


class AdminDatabase:
    """SQLite-backed store behind the admin API.

    Last write wins: every write is an upsert and no version checks are made.
    A single connection is shared and serialized with a lock, since FastAPI
    may call in from worker threads.
    """

    def __init__(self, db_path: str | Path = IN_MEMORY_DB) -> None:
        """Open (and create if needed) the admin database.

        Args:
            db_path: Database file, or ":memory:" for a throwaway database
        """
        self.db_path = str(db_path)
        if self.db_path != IN_MEMORY_DB:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row

        if self.db_path != IN_MEMORY_DB:
            self._conn.execute("PRAGMA journal_mode = WAL")
        self._conn.executescript(SCHEMA)
        self._conn.commit()

        logger.info(f"Opened admin database at {self.db_path}")

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info(f"Closed admin database at {self.db_path}")

    def _query_one(self, sql: str, params: tuple) -> sqlite3.Row | None:
        with self._lock:
            return self._conn.execute(sql, params).fetchone()

    def _write(self, sql: str, params: tuple) -> None:
        with self._lock:
            self._conn.execute(sql, params)
            self._conn.commit()

    # --- Pages ---

    def get_all_pages(self) -> list[dict[str, Any]]:
        with self._lock:
            rows = self._conn.execute("SELECT * FROM pages ORDER BY id").fetchall()
        return [dict(row) for row in rows]

    def get_page(self, page_id: str) -> dict[str, Any] | None:
        row = self._query_one("SELECT * FROM pages WHERE id = ?", (page_id,))
        return dict(row) if row else None

    def upsert_page(self, page_id: str, title: str | None = None, content: str | None = None) -> dict[str, Any]:
        """Insert or update a page.

        Fields passed as None keep their stored value. A new page without a
        title is titled after its id.

        Returns:
            The stored page row
        """
        existing = self.get_page(page_id)
        if title is None:
            title = existing["title"] if existing else page_id
        if content is None:
            content = existing["content"] if existing else ""

        now = _now()
        self._write(
            """
            INSERT INTO pages (id, title, content, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title = excluded.title,
                content = excluded.content,
                updated_at = excluded.updated_at
            """,
            (page_id, title, content, now, now),
        )
        logger.debug(f"Upserted page {page_id}")

        page = self.get_page(page_id)
        if page is None:
            raise RuntimeError(f"Page {page_id} missing after upsert")
        return page

    # --- Settings ---

    def get_setting(self, key: str) -> Any | None:
        """Get a decoded setting value, or None when unset."""
        row = self._query_one("SELECT value FROM settings WHERE key = ?", (key,))
        return json.loads(row["value"]) if row else None

    def upsert_setting(self, key: str, value: Any) -> Any:
        self._write(
            """
            INSERT INTO settings (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, json.dumps(value), _now()),
        )
        logger.debug(f"Upserted setting {key}")
        return value

    # --- Per-photo image settings ---

    def get_photo_settings(self, photo_id: str) -> dict[str, Any] | None:
        """Get a photo's override, or None when the photo has none."""
        row = self._query_one("SELECT settings FROM photo_image_settings WHERE photo_id = ?", (photo_id,))
        return json.loads(row["settings"]) if row else None

    def upsert_photo_settings(self, photo_id: str, settings: dict[str, Any]) -> dict[str, Any]:
        self._write(
            """
            INSERT INTO photo_image_settings (photo_id, settings, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(photo_id) DO UPDATE SET
                settings = excluded.settings,
                updated_at = excluded.updated_at
            """,
            (photo_id, json.dumps(settings), _now()),
        )
        logger.debug(f"Upserted image settings for photo {photo_id}")
        return settings
