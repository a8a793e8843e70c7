"""create accounts and records

Revision ID: 3f1c2a9d0b7e
Revises:
Create Date: 2024-04-19 10:12:41.508361

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d0b7e"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("identity_id", sa.Integer(), nullable=False),
        sa.Column("daily_limit", sa.Integer(), nullable=False, server_default=sa.text("2000")),
        sa.UniqueConstraint("identity_id", name="uq_accounts_identity_id"),
    )
    op.create_table(
        "records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "account_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.Column("date_record", sa.Date(), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("value >= 1", name="ck_records_value_positive"),
    )
    op.create_index("ix_records_account_date", "records", ["account_id", "date_record"])


def downgrade() -> None:
    op.drop_index("ix_records_account_date", table_name="records")
    op.drop_table("records")
    op.drop_table("accounts")
