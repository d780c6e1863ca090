"""Password hashing and session tokens."""

import hashlib
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from meetapp.core.config import get_settings

settings = get_settings()

# Fixtures store sha256 digests behind this prefix so tests skip bcrypt rounds
PLAIN_HASH_PREFIX = "$plain$"


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    # bcrypt has a 72 byte limit
    secret = password[:72].encode("utf-8")
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=12)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored hash."""
    if password_hash.startswith(PLAIN_HASH_PREFIX):
        digest = hashlib.sha256(password.encode()).hexdigest()
        return password_hash[len(PLAIN_HASH_PREFIX):] == digest

    secret = password[:72].encode("utf-8")
    return bcrypt.checkpw(secret, password_hash.encode("utf-8"))


def issue_token(user_id: int, expires_in: timedelta | None = None) -> str:
    """Issue a signed session token whose subject is the user id."""
    if expires_in is None:
        expires_in = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    claims = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + expires_in,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def read_token_subject(token: str) -> int | None:
    """Return the user id carried by a valid token, or None."""
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError:
        return None

    subject = claims.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)
