"""Shared dependency factories for FastAPI endpoints."""

from fastapi import HTTPException
from fastapi import Request

from folio_library.db import AdminDatabase


def get_admin_db(request: Request) -> AdminDatabase:
    """Get the admin database opened by the application lifespan.

    Raises:
        HTTPException: 503 if the database is not open
    """
    db: AdminDatabase | None = getattr(request.app.state, "admin_db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Admin database not available")
    return db
