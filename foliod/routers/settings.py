"""Site settings API endpoints.

Global image-processing defaults and layout settings, each stored as one
JSON document in the settings table. Unset documents read as defaults.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from folio_library.db import IMAGE_SETTINGS_KEY
from folio_library.db import LAYOUT_SETTINGS_KEY
from folio_library.db import AdminDatabase
from folio_library.models import ImageSettings
from folio_library.models import LayoutSettings

from ..dependencies import get_admin_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/settings", tags=["settings"])


@router.get("/images", response_model=ImageSettings)
async def get_image_settings(db: Annotated[AdminDatabase, Depends(get_admin_db)]) -> ImageSettings:
    """Get the global image-processing defaults."""
    try:
        return ImageSettings.model_validate(db.get_setting(IMAGE_SETTINGS_KEY) or {})
    except Exception as exc:
        logger.error(f"Failed to get image settings: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.put("/images", response_model=ImageSettings)
async def update_image_settings(
    settings: ImageSettings,
    db: Annotated[AdminDatabase, Depends(get_admin_db)],
) -> ImageSettings:
    """Replace the global image-processing defaults."""
    try:
        stored = db.upsert_setting(IMAGE_SETTINGS_KEY, settings.model_dump(mode="json"))
    except Exception as exc:
        logger.error(f"Failed to update image settings: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    logger.info("Updated image settings")
    return ImageSettings.model_validate(stored)


@router.get("/layout", response_model=LayoutSettings)
async def get_layout_settings(db: Annotated[AdminDatabase, Depends(get_admin_db)]) -> LayoutSettings:
    """Get the layout settings."""
    try:
        return LayoutSettings.model_validate(db.get_setting(LAYOUT_SETTINGS_KEY) or {})
    except Exception as exc:
        logger.error(f"Failed to get layout settings: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.put("/layout", response_model=LayoutSettings)
async def update_layout_settings(
    settings: LayoutSettings,
    db: Annotated[AdminDatabase, Depends(get_admin_db)],
) -> LayoutSettings:
    """Replace the layout settings."""
    try:
        stored = db.upsert_setting(LAYOUT_SETTINGS_KEY, settings.model_dump(mode="json"))
    except Exception as exc:
        logger.error(f"Failed to update layout settings: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    logger.info("Updated layout settings")
    return LayoutSettings.model_validate(stored)
