"""Health check endpoint."""

from datetime import UTC, datetime

from fastapi import APIRouter

from statustracker.api.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="ok", timestamp=datetime.now(UTC).isoformat())
