from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(BaseModel):
    account_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    identity: str
    credential_hash: str
    created_at: datetime = Field(default_factory=utcnow)

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        # credential_hash is deliberately left out
        return {
            "account_id": self.account_id,
            "identity": self.identity,
            "created_at": self.created_at.isoformat(),
        }


class Session(BaseModel):
    token: str
    account_id: str
    owner_identity: str
    issued_at: datetime = Field(default_factory=utcnow)
    active: bool = True
    ended_at: Optional[datetime] = None

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        return {
            "token_prefix": self.token[:8],
            "account_id": self.account_id,
            "owner_identity": self.owner_identity,
            "issued_at": self.issued_at.isoformat(),
            "active": self.active,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
        }


class AuthEvent(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str
    identity: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)
    event_metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict:
        """
        Serialize AuthEvent to dictionary for API responses.

        Returns:
            Dictionary with all event fields, datetimes in ISO 8601 format
        """
        return {
            "id": self.id,
            "event_type": self.event_type,
            "identity": self.identity,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.event_metadata or {},
        }
