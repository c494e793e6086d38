"""
In-memory account store and session registry.

State lives only for the lifetime of the process. Each store owns its map and
the lock that guards it; instances are created by the application factory and
injected into ``AuthService`` rather than shared as module globals.
"""
import logging
import threading
from typing import Dict, List, Optional

from .auth import dummy_verify, generate_session_token, hash_password, token_prefix, verify_password
from .errors import AccountNotFound, BadCredential, DuplicateIdentity, SessionNotFound
from .models import Account, Session, utcnow

logger = logging.getLogger(__name__)


class AccountStore:
    """Registry of accounts keyed by identity."""

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._lock = threading.Lock()

    def register(self, identity: str, credential: str) -> Account:
        """
        Create an account for ``identity``.

        The credential is hashed before the lock is taken; the existence check
        and the insert happen atomically under the lock, so concurrent
        registrations of one identity produce exactly one account.

        Raises:
            DuplicateIdentity: If the identity is already registered
        """
        credential_hash = hash_password(credential)
        with self._lock:
            if identity in self._accounts:
                raise DuplicateIdentity(identity)
            account = Account(identity=identity, credential_hash=credential_hash)
            self._accounts[identity] = account

        logger.debug("Account registered: account_id=%s identity=%s", account.account_id, identity)
        return account

    def verify(self, identity: str, credential: str) -> Account:
        """
        Check ``credential`` against the stored hash for ``identity``.

        Raises:
            AccountNotFound: If no account has this identity
            BadCredential: If the credential does not match
        """
        account = self.get(identity)
        if account is None:
            dummy_verify()
            raise AccountNotFound(identity)
        if not verify_password(credential, account.credential_hash):
            raise BadCredential(identity)
        return account

    def get(self, identity: str) -> Optional[Account]:
        with self._lock:
            return self._accounts.get(identity)

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._accounts

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)


class SessionRegistry:
    """
    Registry of active sessions keyed by token.

    Only active sessions are held. Signing out removes the record, so the
    map stays proportional to live sessions and an ended token is simply
    unknown from then on. Records are frozen; readers get values they
    cannot use to change registry state.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, account: Account) -> Session:
        with self._lock:
            token = generate_session_token()
            while token in self._sessions:
                token = generate_session_token()
            session = Session(
                token=token,
                account_id=account.account_id,
                owner_identity=account.identity,
            )
            self._sessions[token] = session

        logger.debug("Session created: token=%s... identity=%s", token_prefix(token), account.identity)
        return session

    def invalidate(self, token: str) -> Session:
        """
        End the session for ``token`` and return its final, inactive record.

        Raises:
            SessionNotFound: If the token is unknown or already ended
        """
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is None:
            raise SessionNotFound(token_prefix(token))
        return session.model_copy(update={"active": False, "ended_at": utcnow()})

    def is_active(self, token: str) -> bool:
        with self._lock:
            return token in self._sessions

    def get(self, token: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(token)

    def active_sessions(self, identity: str) -> List[Session]:
        with self._lock:
            return [s for s in self._sessions.values() if s.owner_identity == identity]

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
