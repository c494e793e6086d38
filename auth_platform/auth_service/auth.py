from passlib.context import CryptContext
import secrets

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# 32 random bytes -> 256 bits of entropy, url-safe text
SESSION_TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """
    Spend roughly the time of a real verification without a stored hash.

    Called when the identity is unknown so that an unknown account and a
    wrong credential are not distinguishable by response time.
    """
    pwd_context.dummy_verify()


def generate_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def token_prefix(token: str) -> str:
    """Short, log-safe form of a session token."""
    return (token or "")[:8]
