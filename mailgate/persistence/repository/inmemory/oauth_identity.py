"""In-memory OAuth identity repository for testing."""

from collections.abc import Callable, Collection
from datetime import datetime, timezone
from typing import Optional

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


class InMemoryOAuthIdentityRepository(OAuthIdentityRepository):
    """In-memory implementation of OAuthIdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: list[OAuthIdentity] = []
        self._next_id = 1

    def _replace(self, identity: OAuthIdentity) -> None:
        self._identities = [
            identity if i.id == identity.id else i for i in self._identities
        ]

    async def save(self, identity: OAuthIdentity) -> OAuthIdentity:
        """Store an identity as-is (used to seed test state)."""
        if any(i.id == identity.id for i in self._identities):
            self._replace(identity)
        else:
            self._identities.append(identity)
            self._next_id = max(self._next_id, identity.id + 1)
        return identity

    async def find_by_id(
        self, identity_id: OAuthIdentityId
    ) -> Optional[OAuthIdentity]:
        """Find identity by ID."""
        for identity in self._identities:
            if identity.id == identity_id:
                return identity
        return None

    async def find_by_provider(
        self, provider: OAuthProviderKind, external_user_id: str
    ) -> Optional[OAuthIdentity]:
        """Find identity by provider and external user ID."""
        for identity in self._identities:
            if (
                identity.provider == provider
                and identity.external_user_id == external_user_id
            ):
                return identity
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[OAuthIdentity]:
        """Find all identities bound to an account."""
        matches = [i for i in self._identities if i.user_id == user_id]
        matches.sort(key=lambda i: i.created_at)
        return matches

    async def find_bound_by_external_user_id(
        self,
        external_user_id: str,
        providers: Collection[OAuthProviderKind],
        exclude_id: OAuthIdentityId,
    ) -> Optional[OAuthIdentity]:
        """Find the oldest bound identity with the same external user ID."""
        matches = [
            i
            for i in self._identities
            if i.external_user_id == external_user_id
            and i.provider in providers
            and i.is_linked
            and i.id != exclude_id
        ]
        matches.sort(key=lambda i: (i.created_at, i.id))
        return matches[0] if matches else None

    async def upsert(self, identity: ExternalIdentity) -> OAuthIdentity:
        """Insert an unlinked identity or refresh the existing snapshot."""
        existing = await self.find_by_provider(
            identity.provider, identity.external_user_id
        )
        if existing:
            refreshed = existing.with_snapshot(identity)
            self._replace(refreshed)
            return refreshed

        now = datetime.now(timezone.utc)
        created = OAuthIdentity(
            id=OAuthIdentityId(self._next_id),
            provider=identity.provider,
            external_user_id=identity.external_user_id,
            user_id=UNLINKED_USER_ID,
            username=identity.username,
            display_name=identity.display_name,
            avatar_url=identity.avatar_url,
            trust_level=identity.trust_level,
            active=identity.active,
            silenced=identity.silenced,
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self._identities.append(created)
        return created

    async def update_user_id(
        self, identity_id: OAuthIdentityId, user_id: UserId
    ) -> OAuthIdentity:
        """Bind an identity to an account."""
        existing = await self.find_by_id(identity_id)
        if not existing:
            raise NotFoundError("OAuthIdentity", str(identity_id))
        updated = existing.model_copy(
            update={"user_id": user_id, "updated_at": datetime.now(timezone.utc)}
        )
        self._replace(updated)
        return updated

    async def delete_by_provider_and_user_id(
        self, provider: OAuthProviderKind, user_id: UserId
    ) -> int:
        """Delete an account's identities under one provider."""
        return self._delete_where(
            lambda i: i.provider == provider and i.user_id == user_id
        )

    async def delete_by_user_ids(self, user_ids: Collection[UserId]) -> int:
        """Delete every identity bound to any of the given accounts."""
        wanted = set(user_ids)
        return self._delete_where(lambda i: i.user_id in wanted)

    async def delete_unlinked(self) -> int:
        """Delete every identity with no account."""
        return self._delete_where(lambda i: not i.is_linked)

    def _delete_where(self, predicate: Callable[[OAuthIdentity], bool]) -> int:
        before = len(self._identities)
        self._identities = [i for i in self._identities if not predicate(i)]
        return before - len(self._identities)
