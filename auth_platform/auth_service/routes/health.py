"""
Liveness endpoint for the authentication service
"""
from fastapi import APIRouter, Request, status
from datetime import datetime, timezone

from ..schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """
    Lightweight liveness call used by the health prober.

    Only reads counters; never blocks on anything but the store locks.
    """
    service = request.app.state.auth_service
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        accounts=len(service.accounts),
        active_sessions=service.sessions.active_count(),
    )
