"""Response models for foliod API not shared with folio_library."""

from pydantic import Field

from folio_library.models import CamelCaseModel


class StatusResponse(CamelCaseModel):
    """foliod status as reported by /api/v1/status."""

    status: str = Field(..., description="Always 'running' when the API answers")
    version: str = Field(..., description="folio package version")
    uptime_seconds: float = Field(..., description="Seconds since foliod started")
    db_path: str = Field(..., description="Admin database location")
    page_count: int = Field(..., description="Pages stored in the admin database")
