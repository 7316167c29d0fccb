"""API routers for foliod.

This module contains FastAPI routers for all API endpoints.
"""

from .pages import router as pages_router
from .photos import router as photos_router
from .settings import router as settings_router
from .status import router as status_router

__all__ = [
    "pages_router",
    "photos_router",
    "settings_router",
    "status_router",
]
