"""OAuthIdentity repository implementation using PostgreSQL."""

from collections.abc import Collection
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from mailgate.domain.error import NotFoundError
from mailgate.domain.model import OAuthIdentity
from mailgate.domain.repository import OAuthIdentityRepository
from mailgate.domain.value import (
    UNLINKED_USER_ID,
    ExternalIdentity,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)
from mailgate.persistence.mappers import (
    external_identity_snapshot,
    row_to_oauth_identity,
)
from mailgate.persistence.tables import oauth_identities_table


class PostgresOAuthIdentityRepository(OAuthIdentityRepository):
    """PostgreSQL implementation of OAuthIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, identity_id: OAuthIdentityId
    ) -> Optional[OAuthIdentity]:
        """Get identity by ID."""
        stmt = select(oauth_identities_table).where(
            oauth_identities_table.c.id == identity_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_oauth_identity(dict(row)) if row else None

    async def find_by_provider(
        self, provider: OAuthProviderKind, external_user_id: str
    ) -> Optional[OAuthIdentity]:
        """Get identity by provider and external user ID."""
        stmt = select(oauth_identities_table).where(
            oauth_identities_table.c.provider == provider.value,
            oauth_identities_table.c.external_user_id == external_user_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_oauth_identity(dict(row)) if row else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[OAuthIdentity]:
        """Find all identities bound to an account, oldest first."""
        stmt = (
            select(oauth_identities_table)
            .where(oauth_identities_table.c.user_id == user_id)
            .order_by(oauth_identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_oauth_identity(dict(row)) for row in result.mappings().all()]

    async def find_bound_by_external_user_id(
        self,
        external_user_id: str,
        providers: Collection[OAuthProviderKind],
        exclude_id: OAuthIdentityId,
    ) -> Optional[OAuthIdentity]:
        """Find the oldest bound identity with the same external user ID."""
        stmt = (
            select(oauth_identities_table)
            .where(
                oauth_identities_table.c.external_user_id == external_user_id,
                oauth_identities_table.c.provider.in_([p.value for p in providers]),
                oauth_identities_table.c.user_id != UNLINKED_USER_ID,
                oauth_identities_table.c.id != exclude_id,
            )
            .order_by(oauth_identities_table.c.created_at, oauth_identities_table.c.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_oauth_identity(dict(row)) if row else None

    async def upsert(self, identity: ExternalIdentity) -> OAuthIdentity:
        """Insert or refresh an identity in a single statement.

        `ON CONFLICT DO UPDATE` on the (provider, external_user_id) constraint
        makes concurrent first logins converge on one row instead of failing.
        """
        now = datetime.now(timezone.utc)
        snapshot = external_identity_snapshot(identity)

        stmt = pg_insert(oauth_identities_table).values(
            provider=identity.provider.value,
            external_user_id=identity.external_user_id,
            user_id=UNLINKED_USER_ID,
            created_at=now,
            updated_at=now,
            **snapshot,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_oauth_identity_provider_user",
            set_={**snapshot, "updated_at": now},
        ).returning(oauth_identities_table)

        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_oauth_identity(dict(row))

    async def update_user_id(
        self, identity_id: OAuthIdentityId, user_id: UserId
    ) -> OAuthIdentity:
        """Bind an identity to an account."""
        stmt = (
            oauth_identities_table.update()
            .where(oauth_identities_table.c.id == identity_id)
            .values(user_id=user_id, updated_at=datetime.now(timezone.utc))
            .returning(oauth_identities_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            raise NotFoundError("OAuthIdentity", str(identity_id))
        await self.session.flush()
        return row_to_oauth_identity(dict(row))

    async def delete_by_provider_and_user_id(
        self, provider: OAuthProviderKind, user_id: UserId
    ) -> int:
        """Delete an account's identities under one provider."""
        stmt = oauth_identities_table.delete().where(
            oauth_identities_table.c.provider == provider.value,
            oauth_identities_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_user_ids(self, user_ids: Collection[UserId]) -> int:
        """Delete every identity bound to any of the given accounts."""
        stmt = oauth_identities_table.delete().where(
            oauth_identities_table.c.user_id.in_(list(user_ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_unlinked(self) -> int:
        """Delete every identity with no account."""
        stmt = oauth_identities_table.delete().where(
            oauth_identities_table.c.user_id == UNLINKED_USER_ID
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
