"""
Authentication state machine over the account store and session registry.

Per session: nonexistent --sign_in--> active --sign_out--> inactive (terminal).

Session policy: an account may hold any number of active sessions at once.
Signing in again issues an additional token and leaves earlier sessions
untouched; each one ends only through its own sign-out.
"""
import logging
from typing import Optional

from .auth import token_prefix
from .errors import (
    AccountNotFound,
    AlreadyExists,
    BadCredential,
    DuplicateIdentity,
    InvalidCredentials,
    NoSuchSession,
    SessionNotFound,
)
from .models import Account, Session
from .store import AccountStore, SessionRegistry
from .utils.event_logger import AuthEventLog, log_auth_event

logger = logging.getLogger(__name__)


class AuthService:
    """
    Sign-up, sign-in and sign-out over injected stores.

    Store errors are translated into client-visible ``AuthServiceError``
    subclasses here; nothing below this layer knows about the wire.
    """

    def __init__(
        self,
        accounts: AccountStore,
        sessions: SessionRegistry,
        event_log: Optional[AuthEventLog] = None,
    ):
        self.accounts = accounts
        self.sessions = sessions
        self.event_log = event_log

    def sign_up(self, identity: str, credential: str) -> Account:
        try:
            account = self.accounts.register(identity, credential)
        except DuplicateIdentity as exc:
            log_auth_event("sign_up_failure", identity, self.event_log, {"reason": "duplicate_identity"})
            raise AlreadyExists() from exc

        log_auth_event("sign_up_success", identity, self.event_log, {"account_id": account.account_id})
        return account

    def sign_in(self, identity: str, credential: str) -> Session:
        try:
            account = self.accounts.verify(identity, credential)
        except (AccountNotFound, BadCredential) as exc:
            # The real reason only goes to the operator log
            reason = "not_found" if isinstance(exc, AccountNotFound) else "bad_credential"
            log_auth_event("sign_in_failure", identity, self.event_log, {"reason": reason})
            raise InvalidCredentials() from exc

        session = self.sessions.create(account)
        log_auth_event(
            "sign_in_success",
            identity,
            self.event_log,
            {"account_id": account.account_id, "token_prefix": token_prefix(session.token)},
        )
        return session

    def sign_out(self, token: str) -> Session:
        try:
            session = self.sessions.invalidate(token)
        except SessionNotFound as exc:
            log_auth_event("sign_out_failure", None, self.event_log, {"token_prefix": token_prefix(token)})
            raise NoSuchSession() from exc

        log_auth_event(
            "sign_out_success",
            session.owner_identity,
            self.event_log,
            {"token_prefix": token_prefix(token)},
        )
        return session
