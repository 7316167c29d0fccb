"""Per-photo image settings API endpoints.

A photo without an override answers 404, so clients can tell "no override"
apart from an override equal to the defaults. Photo ids are CDN public ids
and may contain slashes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from folio_library.db import AdminDatabase
from folio_library.models import ImageSettings

from ..dependencies import get_admin_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/photos", tags=["photos"])


@router.get("/{photo_id:path}/image-settings", response_model=ImageSettings, response_model_exclude_unset=True)
async def get_photo_image_settings(
    photo_id: str,
    db: Annotated[AdminDatabase, Depends(get_admin_db)],
) -> ImageSettings:
    """Get a photo's image-setting override.

    Raises:
        HTTPException:
            - 404 if the photo has no override
            - 500 for other errors
    """
    try:
        stored = db.get_photo_settings(photo_id)
    except Exception as exc:
        logger.error(f"Failed to get image settings for photo {photo_id}: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    if stored is None:
        raise HTTPException(status_code=404, detail=f"No image settings for photo {photo_id}")
    return ImageSettings.model_validate(stored)


@router.put("/{photo_id:path}/image-settings", response_model=ImageSettings, response_model_exclude_unset=True)
async def update_photo_image_settings(
    photo_id: str,
    settings: ImageSettings,
    db: Annotated[AdminDatabase, Depends(get_admin_db)],
) -> ImageSettings:
    """Store a photo's image-setting override.

    Only the fields present in the body are stored; the rest keep following
    the global defaults.

    Example:
        ```json
        {"quality": 80, "sharpen": 50}
        ```
    """
    try:
        stored = db.upsert_photo_settings(photo_id, settings.model_dump(mode="json", exclude_unset=True))
    except Exception as exc:
        logger.error(f"Failed to update image settings for photo {photo_id}: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    logger.info(f"Updated image settings for photo {photo_id}")
    return ImageSettings.model_validate(stored)
