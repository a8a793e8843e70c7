"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Alembic migrations under db/migrations mirror these tables.

- Account: one row per external identity (identity_id is UNIQUE, which is
  what makes concurrent first logins safe to provision).
- Record: one dated intake entry, owned by exactly one account.
"""

from datetime import date, datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

DEFAULT_DAILY_LIMIT = 2000
# SQLite INTEGER is a signed 64-bit value.
MAX_INTEGER = 2**63 - 1


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    """A user's calorie account, keyed 1:1 to an external identity."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identity_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    daily_limit: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_DAILY_LIMIT,
        server_default=text(str(DEFAULT_DAILY_LIMIT)),
    )

    records: Mapped[list["Record"]] = relationship(
        back_populates="account", passive_deletes=True
    )


class Record(Base):
    """A single intake entry for one calendar day."""

    __tablename__ = "records"
    __table_args__ = (
        CheckConstraint("value >= 1", name="ck_records_value_positive"),
        Index("ix_records_account_date", "account_id", "date_record"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    date_record: Mapped[date] = mapped_column(Date, nullable=False)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    account: Mapped["Account"] = relationship(back_populates="records")
