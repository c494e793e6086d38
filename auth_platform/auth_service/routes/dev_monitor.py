"""
Dev Monitor Router - Development-only endpoint for authentication event inspection.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Request, HTTPException

from ..schemas import AuthEventOut

router = APIRouter(prefix="/dev", tags=["dev-monitor"])
logger = logging.getLogger(__name__)

MAX_EVENT_LIMIT = 1000


def is_dev_mode(request: Request) -> bool:
    """Check if DEV_MODE is enabled."""
    return bool(request.app.state.settings.DEV_MODE)


def client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.get("/event-logs", response_model=List[AuthEventOut])
def get_event_logs(
    request: Request,
    limit: int = 50,
    event_type: Optional[str] = None,
):
    """
    Get recent authentication events (development only).

    Args:
        limit: Maximum number of events to return (default 50, max 1000)
        event_type: Filter by event type (optional)

    Returns:
        List of authentication events as dictionaries, newest first

    Raises:
        404: If DEV_MODE is not enabled
        400: If limit is out of range
    """
    if not is_dev_mode(request):
        logger.warning(
            "Attempt to access /dev/event-logs with DEV_MODE disabled from IP %s",
            client_host(request)
        )
        raise HTTPException(status_code=404, detail="Not found")

    if limit > MAX_EVENT_LIMIT:
        raise HTTPException(
            status_code=400,
            detail=f"Limit cannot exceed {MAX_EVENT_LIMIT} events"
        )
    if limit < 1:
        raise HTTPException(status_code=400, detail="Limit must be positive")

    event_log = request.app.state.auth_service.event_log
    events = event_log.recent(limit=limit, event_type=event_type) if event_log is not None else []

    logger.info(
        "Dev event logs accessed: limit=%s, event_type=%s, results=%s, ip=%s",
        limit, event_type, len(events), client_host(request)
    )

    return [event.to_dict() for event in events]
