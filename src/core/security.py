"""Password hashing and access token helpers.

Passwords are hashed with bcrypt directly; tokens are HS256 JWTs issued and
verified with python-jose. Every function takes its configuration explicitly.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import bcrypt
import pytz
from jose import JWTError, jwt

from config import BCRYPT_ROUNDS, Settings
from core.exceptions import ConfigurationError, InvalidTokenError

# bcrypt ignores everything past the first 72 bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    return password_bytes[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password.
        rounds: bcrypt work factor.

    Returns:
        Hashed password (bcrypt hash string).
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        plain_password: Plain text password to verify.
        hashed_password: Bcrypt hash string to verify against.

    Returns:
        True if password matches, False otherwise (including malformed hashes).
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    username: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed JWT access token for a user.

    Args:
        user_id: Id stored in the ``sub`` claim (as a string).
        username: Stored in the ``name`` claim.
        settings: Runtime settings providing secret, issuer and lifetime.
        expires_delta: Optional lifetime override.

    Returns:
        Encoded JWT token string.

    Raises:
        ConfigurationError: If no signing secret is configured.
    """
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET is not configured")

    issued_at = datetime.now(pytz.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(user_id),
        "name": username,
        "iss": settings.jwt_issuer,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify a JWT access token and return its claims.

    Args:
        token: Encoded JWT.
        settings: Runtime settings providing secret, algorithm and issuer.

    Returns:
        Decoded claims. ``sub`` is guaranteed to hold a numeric user id.

    Raises:
        ConfigurationError: If no signing secret is configured.
        InvalidTokenError: If the signature, issuer or expiry check fails,
            or the subject is not a user id.
    """
    if not settings.jwt_secret:
        raise ConfigurationError("JWT_SECRET is not configured")

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        raise InvalidTokenError("Invalid or expired token.") from e

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        raise InvalidTokenError("Invalid or expired token.")
    return claims
