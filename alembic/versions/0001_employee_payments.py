"""Create ledger_entry and employee_payment tables

Revision ID: 0001
Revises:
Create Date: 2025-03-01 00:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "ledger_entry",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("subcategory", sa.String(length=100), nullable=True),
        sa.Column("transaction_type", sa.String(length=20), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("metadata_json", sa.JSON(), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ledger_entry_company_id", "ledger_entry", ["company_id"])
    op.create_index("ix_ledger_entry_employee_id", "ledger_entry", ["employee_id"])
    op.create_index("ix_ledger_entry_company_employee", "ledger_entry", ["company_id", "employee_id"])

    op.create_table(
        "employee_payment",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("reference", sa.String(length=7), nullable=False),
        sa.Column("cadence", sa.String(length=20), nullable=False),
        sa.Column("competency_year", sa.Integer(), nullable=False),
        sa.Column("competency_month", sa.Integer(), nullable=False),
        sa.Column("competency_fortnight", sa.Integer(), nullable=True),
        sa.Column("quantity_days", sa.Integer(), nullable=True),
        sa.Column("ledger_entry_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("idempotency_key", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["ledger_entry_id"], ["ledger_entry.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("idempotency_key", name="uq_employee_payment_idempotency"),
    )
    op.create_index("ix_employee_payment_company_id", "employee_payment", ["company_id"])
    op.create_index("ix_employee_payment_employee_id", "employee_payment", ["employee_id"])
    op.create_index(
        "ix_employee_payment_competency",
        "employee_payment",
        ["company_id", "competency_year", "competency_month"],
    )


def downgrade() -> None:
    op.drop_index("ix_employee_payment_competency", table_name="employee_payment")
    op.drop_index("ix_employee_payment_employee_id", table_name="employee_payment")
    op.drop_index("ix_employee_payment_company_id", table_name="employee_payment")
    op.drop_table("employee_payment")
    op.drop_index("ix_ledger_entry_company_employee", table_name="ledger_entry")
    op.drop_index("ix_ledger_entry_employee_id", table_name="ledger_entry")
    op.drop_index("ix_ledger_entry_company_id", table_name="ledger_entry")
    op.drop_table("ledger_entry")
