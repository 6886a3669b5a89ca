"""Users and profiles — wallet-keyed users with one profile each.

Revision ID: 001_users_profiles
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_users_profiles"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, sa.Identity()),
        sa.Column("wallet", sa.String(42), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("wallet", name="uq_users_wallet"),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.BigInteger, sa.Identity()),
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("referral_code", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_profiles"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_profiles_user_id_users", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
    )


def downgrade() -> None:
    op.drop_table("profiles")
    op.drop_table("users")
