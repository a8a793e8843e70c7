"""Account API — login, registration, current account.

Learn: Routes handle HTTP concerns only:
- POST /accounts/login → identity service token (account provisioned on first login)
- POST /accounts/registration → new identity + account
- GET /accounts/me → the caller's account
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from dietracker.api.deps import get_account_service, get_auth_service, http_error
from dietracker.auth.claims import VerifiedClaims
from dietracker.auth.dependencies import get_claims
from dietracker.errors import InvalidArgumentError, NotFoundError, ServiceError
from dietracker.schemas.account import AccountRead, Credentials, TokenResponse
from dietracker.services.account_service import AccountService
from dietracker.services.auth_service import AuthService

router = APIRouter(prefix="/accounts")


@router.post("/login", response_model=TokenResponse)
async def login(body: Credentials, svc: AuthService = Depends(get_auth_service)):
    try:
        token = await svc.login(body.email, body.password)
    except (InvalidArgumentError, NotFoundError):
        raise HTTPException(status_code=401, detail="invalid credentials")
    except ServiceError as e:
        raise http_error(e)
    return TokenResponse(token=token)


@router.post("/registration", status_code=201)
async def registration(body: Credentials, svc: AuthService = Depends(get_auth_service)):
    try:
        await svc.registration(body.email, body.password)
    except ServiceError as e:
        raise http_error(e)
    return Response(status_code=201)


@router.get("/me", response_model=AccountRead)
async def me(
    claims: VerifiedClaims = Depends(get_claims),
    svc: AccountService = Depends(get_account_service),
):
    try:
        return await svc.get_account_from_claims(claims)
    except ServiceError as e:
        raise http_error(e)
