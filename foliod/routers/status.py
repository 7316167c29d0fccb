"""Status endpoints: liveness and a summary of the admin database."""

import logging
import time
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from folio_library import __version__
from folio_library.db import AdminDatabase

from ..dependencies import get_admin_db
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

_started_at = time.monotonic()


@router.get("/status", response_model=StatusResponse)
async def get_status(db: Annotated[AdminDatabase, Depends(get_admin_db)]) -> StatusResponse:
    """Report version, uptime and what the admin database holds.

    Raises:
        HTTPException: 500 if the database cannot be read
    """
    try:
        page_count = len(db.get_all_pages())
    except Exception as exc:
        logger.error(f"Status check could not read admin database: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.monotonic() - _started_at,
        db_path=db.db_path,
        page_count=page_count,
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
