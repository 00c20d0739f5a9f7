"""Create the domain state table.

Revision ID: 0001_domain_state
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_domain_state"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "domain_state",
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("submission_date", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("name", name=op.f("pk_domain_state")),
    )
    op.create_index(op.f("ix_domain_state_status"), "domain_state", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_domain_state_status"), table_name="domain_state")
    op.drop_table("domain_state")
