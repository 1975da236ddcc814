"""initial_schema

Create the schema for mailgate:
- Accounts (mailbox accounts, soft-deletable)
- OAuth identities (GitHub / LinuxDo identities and their account bindings)

Revision ID: 3c41e07b9d2a
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41e07b9d2a"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "is_del", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index("idx_accounts_email", "accounts", ["email"])
    # Email is unique among live accounts only
    op.create_index(
        "uq_accounts_live_email",
        "accounts",
        ["email"],
        unique=True,
        postgresql_where=sa.text("is_del = false"),
    )

    op.create_table(
        "oauth_identities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("provider", sa.String(length=50), nullable=False),
        sa.Column("external_user_id", sa.String(length=255), nullable=False),
        # 0 means the identity is not linked to any account yet
        sa.Column("user_id", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "trust_level", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column(
            "active", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "silenced", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider", "external_user_id", name="uq_oauth_identity_provider_user"
        ),
    )
    op.create_index("idx_oauth_identities_user_id", "oauth_identities", ["user_id"])
    op.create_index(
        "idx_oauth_identities_external_user_id",
        "oauth_identities",
        ["external_user_id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_oauth_identities_external_user_id", table_name="oauth_identities")
    op.drop_index("idx_oauth_identities_user_id", table_name="oauth_identities")
    op.drop_table("oauth_identities")
    op.drop_index("uq_accounts_live_email", table_name="accounts")
    op.drop_index("idx_accounts_email", table_name="accounts")
    op.drop_table("accounts")
