"""
Event logger utility for authentication events.
"""
from collections import deque
from typing import List, Optional
import sys
import logging
import os
import threading

from ..models import AuthEvent

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "sign_up_success",
    "sign_up_failure",
    "sign_in_success",
    "sign_in_failure",
    "sign_out_success",
    "sign_out_failure",
}


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure stdout logging, plus a file handler when ``log_dir`` is set.

    File logging is optional: if the directory cannot be created the service
    keeps running with stdout only.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(f"{log_dir}/auth_events.log"))
        except (OSError, PermissionError) as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s:%(message)s",
        handlers=handlers,
        force=True,
    )


class AuthEventLog:
    """Bounded, thread-safe in-memory log of authentication events."""

    def __init__(self, capacity: int = 1000):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._events = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, event: AuthEvent) -> None:
        with self._lock:
            self._events.append(event)

    def recent(self, limit: int = 50, event_type: Optional[str] = None) -> List[AuthEvent]:
        """Newest first, optionally filtered by event type."""
        with self._lock:
            events = list(self._events)
        events.reverse()
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        return events[:limit]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def log_auth_event(
    event_type: str,
    identity: Optional[str],
    event_log: Optional[AuthEventLog] = None,
    metadata: dict = None
) -> AuthEvent:
    """
    Record an authentication event.

    Args:
        event_type: One of ALLOWED_EVENT_TYPES
        identity: Identity the request was made for (may be None for sign-out)
        event_log: Optional in-memory log to append to
        metadata: Optional dictionary of additional context

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    auth_event = AuthEvent(
        event_type=event_type,
        identity=identity,
        event_metadata=metadata or {},
    )

    if event_log is not None:
        event_log.append(auth_event)

    logger.info(
        "AUTH %s identity=%s metadata=%s timestamp=%s",
        event_type, identity, auth_event.event_metadata, auth_event.timestamp.isoformat()
    )
    return auth_event
