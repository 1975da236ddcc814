"""OAuth identity repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Collection
from typing import Optional

from mailgate.domain.model.oauth_identity import OAuthIdentity
from mailgate.domain.value import (
    ExternalIdentity,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)


class OAuthIdentityRepository(ABC):
    """Repository for OAuthIdentity records.

    Records are unique per (provider, external_user_id).
    """

    @abstractmethod
    async def find_by_id(
        self, identity_id: OAuthIdentityId
    ) -> Optional[OAuthIdentity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's surrogate key

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: OAuthProviderKind, external_user_id: str
    ) -> Optional[OAuthIdentity]:
        """Find an identity by provider and external user ID.

        Args:
            provider: The OAuth provider
            external_user_id: The user's ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[OAuthIdentity]:
        """Get all identities bound to an account.

        Args:
            user_id: The account's unique identifier

        Returns:
            List of identities (may be empty)
        """
        pass

    @abstractmethod
    async def find_bound_by_external_user_id(
        self,
        external_user_id: str,
        providers: Collection[OAuthProviderKind],
        exclude_id: OAuthIdentityId,
    ) -> Optional[OAuthIdentity]:
        """Find a bound identity recorded for the same external user ID.

        Args:
            external_user_id: External user ID to match exactly
            providers: Providers whose records are eligible
            exclude_id: Record to leave out (the caller's own record)

        Returns:
            The oldest matching identity with a non-zero user_id, or None
        """
        pass

    @abstractmethod
    async def upsert(self, identity: ExternalIdentity) -> OAuthIdentity:
        """Create or refresh the record for an external identity.

        New records are created unlinked. Existing records get their profile
        snapshot refreshed; their binding is left untouched. Concurrent calls
        for the same identity must not fail on the uniqueness constraint.

        Args:
            identity: Normalized external identity

        Returns:
            The stored identity
        """
        pass

    @abstractmethod
    async def update_user_id(
        self, identity_id: OAuthIdentityId, user_id: UserId
    ) -> OAuthIdentity:
        """Bind an identity to an account.

        Args:
            identity_id: The identity to update
            user_id: The account to bind

        Returns:
            The updated identity

        Raises:
            NotFoundError: If the identity does not exist
        """
        pass

    @abstractmethod
    async def delete_by_provider_and_user_id(
        self, provider: OAuthProviderKind, user_id: UserId
    ) -> int:
        """Delete the identities of an account under one provider.

        Returns:
            Number of deleted records
        """
        pass

    @abstractmethod
    async def delete_by_user_ids(self, user_ids: Collection[UserId]) -> int:
        """Delete every identity bound to any of the given accounts.

        Returns:
            Number of deleted records
        """
        pass

    @abstractmethod
    async def delete_unlinked(self) -> int:
        """Delete every identity that is not bound to an account.

        Returns:
            Number of deleted records
        """
        pass
