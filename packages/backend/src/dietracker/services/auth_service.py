"""Auth service — login and registration against the identity service.

Learn: The identity service owns credentials; this service owns what
happens after a successful call:

- login: make sure the identity has an account, then hand back the token
- registration: create the identity, then provision its account

Provisioning is lazy and idempotent. Two concurrent first logins for the
same identity both see "no account" and both insert; the UNIQUE
constraint on accounts.identity_id rejects the second insert, and that
rejection counts as success here.

The two steps are not transactional. If provisioning fails after the
identity call succeeded, the identity stays created (or the token stays
valid) without an account; the error surfaces as UnexpectedError and a
later login provisions the account.
"""

import structlog

from dietracker.clients.identity import (
    IdentityClient,
    IdentityError,
    IdentityInvalidArgumentError,
    IdentityUserExistsError,
    IdentityUserNotFoundError,
)
from dietracker.db import storage
from dietracker.errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    UnexpectedError,
)
from dietracker.services.account_service import AccountService

logger = structlog.get_logger()


class AuthService:
    """Login/registration orchestration with lazy account provisioning."""

    def __init__(
        self,
        identity: IdentityClient,
        accounts: AccountService,
        storage_gateway: storage.Storage,
    ):
        self.identity = identity
        self.accounts = accounts
        self.storage = storage_gateway

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a token, provisioning the account if needed."""
        op = "auth.login"
        log = logger.bind(op=op, email=email)

        try:
            result = await self.identity.login(email, password)
        except IdentityInvalidArgumentError as e:
            log.info("auth.invalid_credentials")
            raise InvalidArgumentError("invalid credentials", op=op) from e
        except IdentityUserNotFoundError as e:
            log.info("auth.invalid_credentials")
            raise NotFoundError("invalid credentials", op=op) from e
        except IdentityError as e:
            log.error("auth.login_failed", error=str(e))
            raise UnexpectedError("failed to login", op=op) from e

        try:
            await self.accounts.get_account_by_identity_id(result.identity_id)
        except NotFoundError:
            await self._provision(op, result.identity_id)
        except UnexpectedError as e:
            log.error("auth.account_lookup_failed", error=str(e))
            raise UnexpectedError("failed to get account", op=op) from e

        return result.token

    async def registration(self, email: str, password: str) -> None:
        """Create the identity, then its account."""
        op = "auth.registration"
        log = logger.bind(op=op, email=email)

        try:
            identity_id = await self.identity.register(email, password)
        except IdentityInvalidArgumentError as e:
            log.info("auth.invalid_registration")
            raise InvalidArgumentError("invalid credentials", op=op) from e
        except IdentityUserExistsError as e:
            log.info("auth.identity_exists")
            raise AlreadyExistsError("user already exists", op=op) from e
        except IdentityError as e:
            log.error("auth.registration_failed", error=str(e))
            raise UnexpectedError("failed to register", op=op) from e

        await self._provision(op, identity_id)

    async def _provision(self, op: str, identity_id: int) -> None:
        log = logger.bind(op=op, identity_id=identity_id)
        try:
            account_id = await self.storage.save_account(identity_id)
        except storage.AccountExistsError:
            # Lost the race against a concurrent provisioning; the account exists.
            log.info("auth.account_already_provisioned")
            return
        except storage.StorageError as e:
            log.error("auth.provisioning_failed", error=str(e))
            raise UnexpectedError("failed to save account", op=op) from e

        log.info("auth.account_provisioned", account_id=account_id)
