"""Pages API endpoints.

Editable content pages stored as rows in the admin database.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from folio_library.db import AdminDatabase
from folio_library.models import Page
from folio_library.models import PageUpdate

from ..dependencies import get_admin_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/pages", tags=["pages"])


@router.get("", response_model=list[Page])
async def list_pages(db: Annotated[AdminDatabase, Depends(get_admin_db)]) -> list[Page]:
    """List every page.

    Returns:
        All pages ordered by id
    """
    try:
        return [Page.model_validate(row) for row in db.get_all_pages()]
    except Exception as exc:
        logger.error(f"Failed to list pages: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.get("/{page_id}", response_model=Page)
async def get_page(page_id: str, db: Annotated[AdminDatabase, Depends(get_admin_db)]) -> Page:
    """Get one page.

    Raises:
        HTTPException:
            - 404 if the page does not exist
            - 500 for other errors
    """
    try:
        row = db.get_page(page_id)
    except Exception as exc:
        logger.error(f"Failed to get page {page_id}: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    if row is None:
        raise HTTPException(status_code=404, detail=f"Page not found: {page_id}")
    return Page.model_validate(row)


@router.put("/{page_id}", response_model=Page)
async def update_page(
    page_id: str,
    patch: PageUpdate,
    db: Annotated[AdminDatabase, Depends(get_admin_db)],
) -> Page:
    """Create or update a page.

    Fields left out of the body keep their stored value.

    Example:
        ```json
        {"title": "About", "content": "<p>Landscape photographer...</p>"}
        ```
    """
    try:
        row = db.upsert_page(page_id, title=patch.title, content=patch.content)
    except Exception as exc:
        logger.error(f"Failed to update page {page_id}: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    logger.info(f"Updated page {page_id}")
    return Page.model_validate(row)
