"""Account service — resolve the caller's account.

Learn: An account is keyed 1:1 to an external identity. Requests carry
verified claims whose `uid` is that identity id; everything account-scoped
starts by turning claims into an Account here.

Read-only: this service never creates accounts (AuthService provisions them).
NotFoundError is passed up unchanged so the caller decides whether a
missing account is fatal or should be provisioned.
"""

import structlog

from dietracker.auth.claims import VerifiedClaims
from dietracker.db import storage
from dietracker.db.models import Account
from dietracker.errors import InvalidCredentialError, NotFoundError, UnexpectedError

logger = structlog.get_logger()


class AccountService:
    """Account lookups by id, identity id, or verified claims."""

    def __init__(self, storage_gateway: storage.Storage):
        self.storage = storage_gateway

    async def get_account_by_id(self, account_id: int) -> Account:
        op = "accounts.get_account_by_id"
        log = logger.bind(op=op, account_id=account_id)

        try:
            return await self.storage.account_by_id(account_id)
        except storage.AccountNotFoundError as e:
            log.info("accounts.not_found")
            raise NotFoundError("account not found", op=op) from e
        except storage.StorageError as e:
            log.error("accounts.lookup_failed", error=str(e))
            raise UnexpectedError("failed to get account", op=op) from e

    async def get_account_by_identity_id(self, identity_id: int) -> Account:
        op = "accounts.get_account_by_identity_id"
        log = logger.bind(op=op, identity_id=identity_id)

        try:
            return await self.storage.account_by_identity_id(identity_id)
        except storage.AccountNotFoundError as e:
            log.info("accounts.not_found")
            raise NotFoundError("account not found", op=op) from e
        except storage.StorageError as e:
            log.error("accounts.lookup_failed", error=str(e))
            raise UnexpectedError("failed to get account", op=op) from e

    async def get_account_from_claims(self, claims: VerifiedClaims) -> Account:
        """Resolve the account behind a verified token.

        Raises InvalidCredentialError when `uid` is absent or not numeric.
        """
        try:
            identity_id = claims.numeric("uid")
        except InvalidCredentialError as e:
            logger.info("accounts.invalid_claims", op="accounts.get_account_from_claims", reason=e.message)
            raise
        return await self.get_account_by_identity_id(identity_id)
