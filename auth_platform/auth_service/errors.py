"""
Error taxonomy for the authentication service.

Store-level errors describe what actually happened inside the account store
or session registry. They never leave the process: ``AuthService`` maps them
onto the client-visible ``AuthServiceError`` subclasses, which carry a stable
error code, an HTTP status and a deliberately non-specific message.
"""
from typing import Optional

from fastapi import status


class StoreError(Exception):
    """Base class for account store and session registry failures."""


class DuplicateIdentity(StoreError):
    def __init__(self, identity: str):
        super().__init__(f"identity already registered: {identity}")
        self.identity = identity


class AccountNotFound(StoreError):
    def __init__(self, identity: str):
        super().__init__(f"no account for identity: {identity}")
        self.identity = identity


class BadCredential(StoreError):
    def __init__(self, identity: str):
        super().__init__(f"credential mismatch for identity: {identity}")
        self.identity = identity


class SessionNotFound(StoreError):
    """Raised for unknown tokens and for tokens that are already inactive."""

    def __init__(self, token_prefix: str):
        super().__init__(f"no active session for token {token_prefix}...")
        self.token_prefix = token_prefix


class AuthServiceError(Exception):
    """Client-visible failure of an RPC operation."""

    code = "Internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.detail = message or self.message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.detail}


class AlreadyExists(AuthServiceError):
    code = "AlreadyExists"
    status_code = status.HTTP_409_CONFLICT
    message = "Account already exists"


class InvalidCredentials(AuthServiceError):
    # One message for unknown identity and wrong credential alike
    code = "InvalidCredentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class NoSuchSession(AuthServiceError):
    code = "NoSuchSession"
    status_code = status.HTTP_404_NOT_FOUND
    message = "No such session"
