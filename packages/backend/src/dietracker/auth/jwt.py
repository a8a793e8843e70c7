"""JWT verification (and minting for tooling/tests).

Learn: The identity service signs tokens with a secret shared with this
app (HS256 by default). The payload carries `uid` (identity id),
`email`, `app_id`, and `exp`.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from dietracker.config import settings


class TokenError(Exception):
    """Raised when token creation/verification fails."""


def create_access_token(
    uid: int,
    email: str = "",
    app_id: Optional[int] = None,
    expires_minutes: int = 60,
) -> str:
    """Create a token shaped like the identity service's."""
    now = datetime.now(timezone.utc)
    payload = {
        "uid": uid,
        "email": email,
        "app_id": settings.app_id if app_id is None else app_id,
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.app_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict:
    """Verify and decode a JWT token.

    Returns the payload dict on success.
    Raises TokenError on failure.
    """
    try:
        return jwt.decode(
            token, settings.app_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")
