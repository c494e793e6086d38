from pydantic import BaseModel, Field

from typing import Any, Dict, Optional


class SignUpRequest(BaseModel):
    identity: str = Field(..., min_length=1, max_length=255, description="Username or email")
    credential: str = Field(..., min_length=1, max_length=1024, description="Raw password")


class SignUpResponse(BaseModel):
    account_id: str


class SignInRequest(BaseModel):
    identity: str = Field(..., min_length=1, max_length=255)
    credential: str = Field(..., min_length=1, max_length=1024)


class SignInResponse(BaseModel):
    account_id: str
    token: str


class SignOutRequest(BaseModel):
    token: str = Field(
        ...,
        min_length=1,
        max_length=512,
        description="Session token from SignIn. Issued tokens are 43 characters; anything over 512 is rejected with 422.",
    )


class SignOutResponse(BaseModel):
    pass


class ErrorResponse(BaseModel):
    error: str
    detail: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "InvalidCredentials", "detail": "Invalid credentials"}
            ]
        }
    }


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    accounts: int
    active_sessions: int


class AuthEventOut(BaseModel):
    id: str
    event_type: str
    identity: Optional[str] = None
    timestamp: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
