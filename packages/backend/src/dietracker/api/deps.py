"""Service wiring for route handlers.

Learn: Services are plain classes built per request from their
collaborators (session → Storage → services). The identity client is the
only long-lived object; it is created in the app lifespan and kept on
app.state. Tests override get_db and get_identity_client.
"""

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dietracker.clients.identity import IdentityClient
from dietracker.config import settings
from dietracker.db.engine import get_db
from dietracker.db.storage import Storage
from dietracker.errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    InvalidCredentialError,
    NotFoundError,
    ServiceError,
)
from dietracker.services.account_service import AccountService
from dietracker.services.auth_service import AuthService
from dietracker.services.record_service import RecordService


def get_identity_client(request: Request) -> IdentityClient:
    return request.app.state.identity


def get_storage(db: AsyncSession = Depends(get_db)) -> Storage:
    return Storage(db, default_daily_limit=settings.default_daily_limit)


def get_account_service(storage: Storage = Depends(get_storage)) -> AccountService:
    return AccountService(storage)


def get_auth_service(
    identity: IdentityClient = Depends(get_identity_client),
    accounts: AccountService = Depends(get_account_service),
    storage: Storage = Depends(get_storage),
) -> AuthService:
    return AuthService(identity, accounts, storage)


def get_record_service(
    storage: Storage = Depends(get_storage),
    accounts: AccountService = Depends(get_account_service),
) -> RecordService:
    return RecordService(storage, accounts)


_STATUS = [
    (InvalidCredentialError, 401),
    (InvalidArgumentError, 400),
    (NotFoundError, 404),
    (AlreadyExistsError, 409),
]


def http_error(exc: ServiceError) -> HTTPException:
    """Translate a service error into an HTTPException (500 if unclassified)."""
    for cls, status in _STATUS:
        if isinstance(exc, cls):
            headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
            return HTTPException(status_code=status, detail=exc.message, headers=headers)
    return HTTPException(status_code=500, detail="internal error")
