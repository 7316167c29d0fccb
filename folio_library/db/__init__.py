"""Admin database (server-side source of truth)."""

from .admin_db import IMAGE_SETTINGS_KEY
from .admin_db import LAYOUT_SETTINGS_KEY
from .admin_db import AdminDatabase

__all__ = ["AdminDatabase", "IMAGE_SETTINGS_KEY", "LAYOUT_SETTINGS_KEY"]
