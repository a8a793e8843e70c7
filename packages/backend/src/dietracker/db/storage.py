"""Persistence gateway for accounts and records.

Learn: The service layer never builds queries itself — it calls the
gateway, which owns the session and turns driver failures into a small
set of typed errors:

- AccountNotFoundError / RecordNotFoundError for lookups that match nothing
- AccountExistsError when the UNIQUE(identity_id) constraint rejects an insert
- StorageError (base class) for everything else

Each write commits its own statement. A failed write rolls the session
back so the same session stays usable for the next call.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dietracker.db.models import DEFAULT_DAILY_LIMIT, Account, Record, utcnow

# The SQLite driver raises a bare OverflowError for integers past 64 bits.
DB_ERRORS = (SQLAlchemyError, OverflowError)


class StorageError(Exception):
    """Any persistence failure."""


class AccountNotFoundError(StorageError):
    pass


class AccountExistsError(StorageError):
    pass


class RecordNotFoundError(StorageError):
    pass


class Storage:
    """CRUD on accounts and records over one AsyncSession."""

    def __init__(self, db: AsyncSession, default_daily_limit: int = DEFAULT_DAILY_LIMIT):
        self.db = db
        self.default_daily_limit = default_daily_limit

    # ─── Accounts ───────────────────────────────────────

    async def save_account(self, identity_id: int) -> int:
        op = "storage.save_account"
        account = Account(identity_id=identity_id, daily_limit=self.default_daily_limit)
        self.db.add(account)
        try:
            await self.db.flush()
            account_id = account.id
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise AccountExistsError(f"{op}: account exists for identity {identity_id}") from e
        except DB_ERRORS as e:
            await self.db.rollback()
            raise StorageError(f"{op}: {e}") from e
        return account_id

    async def account_by_id(self, account_id: int) -> Account:
        op = "storage.account_by_id"
        account = await self._first(op, select(Account).where(Account.id == account_id))
        if account is None:
            raise AccountNotFoundError(f"{op}: no account with id {account_id}")
        return account

    async def account_by_identity_id(self, identity_id: int) -> Account:
        op = "storage.account_by_identity_id"
        account = await self._first(
            op, select(Account).where(Account.identity_id == identity_id)
        )
        if account is None:
            raise AccountNotFoundError(f"{op}: no account for identity {identity_id}")
        return account

    # ─── Records ────────────────────────────────────────

    async def save_record(
        self,
        account_id: int,
        value: int,
        date_record: date,
        date_created: Optional[datetime] = None,
    ) -> int:
        op = "storage.save_record"
        record = Record(
            account_id=account_id,
            value=value,
            date_record=date_record,
            date_created=date_created or utcnow(),
        )
        self.db.add(record)
        try:
            await self.db.flush()
            record_id = record.id
            await self.db.commit()
        except DB_ERRORS as e:
            await self.db.rollback()
            raise StorageError(f"{op}: {e}") from e
        return record_id

    async def record_by_id(self, record_id: int) -> Record:
        op = "storage.record_by_id"
        record = await self._first(op, select(Record).where(Record.id == record_id))
        if record is None:
            raise RecordNotFoundError(f"{op}: no record with id {record_id}")
        return record

    async def records_by_account_id(self, account_id: int, day: date) -> list[Record]:
        """Records of one account for one calendar day, newest entry first."""
        op = "storage.records_by_account_id"
        q = (
            select(Record)
            .where(Record.account_id == account_id, Record.date_record == day)
            .order_by(Record.date_created.desc(), Record.id.desc())
        )
        try:
            result = await self.db.execute(q)
        except DB_ERRORS as e:
            raise StorageError(f"{op}: {e}") from e
        return list(result.scalars().all())

    async def delete_record(self, account_id: int, record_id: int) -> int:
        """Delete a record only if it belongs to account_id. Returns rows deleted."""
        op = "storage.delete_record"
        q = delete(Record).where(Record.id == record_id, Record.account_id == account_id)
        try:
            result = await self.db.execute(q)
            await self.db.commit()
        except DB_ERRORS as e:
            await self.db.rollback()
            raise StorageError(f"{op}: {e}") from e
        return result.rowcount

    # ─── Helpers ────────────────────────────────────────

    async def _first(self, op: str, q):
        try:
            result = await self.db.execute(q)
        except DB_ERRORS as e:
            raise StorageError(f"{op}: {e}") from e
        return result.scalars().first()
