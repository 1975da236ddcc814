"""SQLAlchemy table definitions for mailgate.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    false,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (mailbox accounts, soft-deletable)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("is_del", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_email", accounts_table.c.email)
# Email is unique among live accounts only
Index(
    "uq_accounts_live_email",
    accounts_table.c.email,
    unique=True,
    postgresql_where=accounts_table.c.is_del == false(),
)

# ============================================================================
# OAUTH IDENTITIES TABLE (external identities and their bindings)
# ============================================================================
oauth_identities_table = Table(
    "oauth_identities",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("provider", String(50), nullable=False),  # 'github', 'linuxdo'
    Column("external_user_id", String(255), nullable=False),
    Column("user_id", Integer, nullable=False, server_default="0"),  # 0 = unlinked
    Column("username", String(255), nullable=False),
    Column("display_name", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column("trust_level", Integer, nullable=False, server_default="0"),
    Column("active", Boolean, nullable=False, server_default="false"),
    Column("silenced", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "provider", "external_user_id", name="uq_oauth_identity_provider_user"
    ),
)

Index("idx_oauth_identities_user_id", oauth_identities_table.c.user_id)
Index(
    "idx_oauth_identities_external_user_id",
    oauth_identities_table.c.external_user_id,
)
