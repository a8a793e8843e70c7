"""FastAPI auth dependencies.

Learn: Used as Depends() in route handlers. A request without a valid
`Authorization: Bearer <token>` header is rejected with 401 here, before
any service code runs. What the services receive is VerifiedClaims.
"""

from typing import Optional

from fastapi import Header, HTTPException

from dietracker.auth.claims import VerifiedClaims
from dietracker.auth.jwt import TokenError, verify_token


def get_claims(authorization: Optional[str] = Header(None)) -> VerifiedClaims:
    """Verify the bearer token and return its claims (401 otherwise)."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = verify_token(authorization[7:])
    except TokenError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return VerifiedClaims(payload)
