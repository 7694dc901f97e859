"""Password hashing and JWT access tokens."""
from datetime import timedelta
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from kanban.config import Settings
from kanban.errors import AuthenticationError
from kanban.utils.clock import utcnow


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    user_id: int,
    email: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed token whose ``sub`` claim carries the user id."""
    issued_at = utcnow()
    expire = issued_at + (expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify ``token`` and return its claims.

    Raises:
        AuthenticationError: bad signature, wrong issuer, expired, or no subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as exc:
        raise AuthenticationError("Invalid authentication token") from exc

    if not payload.get("sub"):
        raise AuthenticationError("Invalid authentication token")
    return payload
