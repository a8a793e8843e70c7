"""Record service — intake entries scoped to the caller's account.

Learn: Every operation starts by resolving the caller's account from
verified claims. If that fails the operation stops and the resolution
error is passed up unchanged. Queries and deletes then always filter
by the resolved account id, so a caller can never see or remove a
record owned by someone else.
"""

from datetime import date, datetime

import structlog

from dietracker.auth.claims import VerifiedClaims
from dietracker.db import storage
from dietracker.db.models import MAX_INTEGER, Record
from dietracker.errors import InvalidArgumentError, NotFoundError, UnexpectedError
from dietracker.services.account_service import AccountService

logger = structlog.get_logger()


def as_day(value: date) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


class RecordService:
    """Create, list, get, and delete records for the calling account."""

    def __init__(self, storage_gateway: storage.Storage, accounts: AccountService):
        self.storage = storage_gateway
        self.accounts = accounts

    async def list_records_for_caller(
        self, claims: VerifiedClaims, day: date
    ) -> list[Record]:
        """Records on `day`, most recently entered first. Empty list if none."""
        op = "records.list_records_for_caller"
        account = await self.accounts.get_account_from_claims(claims)

        try:
            return await self.storage.records_by_account_id(account.id, as_day(day))
        except storage.StorageError as e:
            logger.error("records.list_failed", op=op, account_id=account.id, error=str(e))
            raise UnexpectedError("failed to get records", op=op) from e

    async def create_record_for_caller(
        self, claims: VerifiedClaims, date_record: date, value: int
    ) -> int:
        """Store a new record and return its id. value must fit 1..MAX_INTEGER."""
        op = "records.create_record_for_caller"

        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not 1 <= value <= MAX_INTEGER
        ):
            logger.info("records.invalid_value", op=op, value=value)
            raise InvalidArgumentError("value must be a positive integer", op=op)

        account = await self.accounts.get_account_from_claims(claims)
        log = logger.bind(op=op, account_id=account.id)

        try:
            record_id = await self.storage.save_record(
                account.id, value, as_day(date_record)
            )
        except storage.StorageError as e:
            log.error("records.save_failed", error=str(e))
            raise UnexpectedError("failed to save record", op=op) from e

        log.info("records.created", record_id=record_id)
        return record_id

    async def get_record_for_caller(
        self, claims: VerifiedClaims, record_id: int
    ) -> Record:
        """Return a record owned by the caller; foreign ids look absent."""
        op = "records.get_record_for_caller"
        account = await self.accounts.get_account_from_claims(claims)
        log = logger.bind(op=op, account_id=account.id, record_id=record_id)

        if not 1 <= record_id <= MAX_INTEGER:
            log.info("records.not_found")
            raise NotFoundError("record not found", op=op)

        try:
            record = await self.storage.record_by_id(record_id)
        except storage.RecordNotFoundError as e:
            log.info("records.not_found")
            raise NotFoundError("record not found", op=op) from e
        except storage.StorageError as e:
            log.error("records.lookup_failed", error=str(e))
            raise UnexpectedError("failed to get record", op=op) from e

        if record.account_id != account.id:
            log.info("records.not_found")
            raise NotFoundError("record not found", op=op)
        return record

    async def delete_record_for_caller(
        self, claims: VerifiedClaims, record_id: int
    ) -> None:
        """Delete a record if the caller owns it.

        Absent or foreign ids are a silent no-op, so the response does not
        reveal whether another account's record exists.
        """
        op = "records.delete_record_for_caller"
        account = await self.accounts.get_account_from_claims(claims)
        log = logger.bind(op=op, account_id=account.id, record_id=record_id)

        if not 1 <= record_id <= MAX_INTEGER:
            log.info("records.delete_noop")
            return

        try:
            deleted = await self.storage.delete_record(account.id, record_id)
        except storage.StorageError as e:
            log.error("records.delete_failed", error=str(e))
            raise UnexpectedError("failed to delete record", op=op) from e

        if deleted:
            log.info("records.deleted")
        else:
            log.info("records.delete_noop")
