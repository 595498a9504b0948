"""create subscription tokens table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 10:05:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "subscription_tokens",
        sa.Column("subscription_token", sa.String(), nullable=False),
        sa.Column("subscriber_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("subscription_token"),
        sa.ForeignKeyConstraint(["subscriber_id"], ["subscriptions.id"]),
    )
    op.create_index(
        "ix_subscription_tokens_subscriber_id",
        "subscription_tokens",
        ["subscriber_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_subscription_tokens_subscriber_id", table_name="subscription_tokens")
    op.drop_table("subscription_tokens")
