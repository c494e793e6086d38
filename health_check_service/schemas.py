"""
Pydantic schemas for probe results
"""
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class ProbeOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"


class FailureReason:
    """
    Failure reasons produced by the prober itself.

    Application-level rejections carry the error code returned by the
    auth service instead (e.g. ``InvalidCredentials``).
    """
    UNREACHABLE = "Unreachable"
    TIMEOUT = "Timeout"
    TRANSPORT_ERROR = "TransportError"
    PROBE_ERROR = "ProbeError"


class ProbeTarget(str, Enum):
    HEALTH = "Health"
    SIGN_UP = "SignUp"
    SIGN_IN = "SignIn"
    SIGN_OUT = "SignOut"


class ProbeResult(BaseModel):
    """
    Outcome of a single synthetic call against the auth service.

    Immutable once created; the reporter only ever appends these.
    """
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    target_operation: ProbeTarget
    outcome: ProbeOutcome
    reason: Optional[str] = Field(None, description="Set for failure and timeout outcomes")
    latency_ms: float = Field(..., ge=0.0, description="Round-trip time in milliseconds")
    detail: Optional[str] = Field(None, description="Operator-facing diagnostic text")

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.outcome == ProbeOutcome.SUCCESS

    @classmethod
    def success(cls, target: ProbeTarget, latency_ms: float, detail: Optional[str] = None) -> "ProbeResult":
        return cls(target_operation=target, outcome=ProbeOutcome.SUCCESS, latency_ms=latency_ms, detail=detail)

    @classmethod
    def failure(cls, target: ProbeTarget, reason: str, latency_ms: float, detail: Optional[str] = None) -> "ProbeResult":
        return cls(
            target_operation=target,
            outcome=ProbeOutcome.FAILURE,
            reason=reason,
            latency_ms=latency_ms,
            detail=detail,
        )

    @classmethod
    def timeout(cls, target: ProbeTarget, latency_ms: float, detail: Optional[str] = None) -> "ProbeResult":
        return cls(
            target_operation=target,
            outcome=ProbeOutcome.TIMEOUT,
            reason=FailureReason.TIMEOUT,
            latency_ms=latency_ms,
            detail=detail,
        )


class ReportSummary(BaseModel):
    total: int = 0
    successes: int = 0
    failures: int = 0
    timeouts: int = 0
    success_rate: float = Field(0.0, ge=0.0, le=1.0)
    mean_latency_ms: Optional[float] = None
    max_latency_ms: Optional[float] = None
