"""OAuth identity domain service."""

from collections.abc import Collection

import logfire

from mailgate.domain.model.oauth_identity import OAuthIdentity
from mailgate.domain.repository.oauth_identity import OAuthIdentityRepository
from mailgate.domain.value import (
    UNLINKED_USER_ID,
    ExternalIdentity,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)

from .base import Service


class OAuthIdentityService(Service):
    """Domain service for OAuth identity records."""

    def __init__(self, oauth_identity_repository: OAuthIdentityRepository) -> None:
        """Initialize OAuth identity service.

        Args:
            oauth_identity_repository: OAuth identity repository
        """
        self.oauth_identity_repository = oauth_identity_repository

    async def get_by_id(self, identity_id: OAuthIdentityId) -> OAuthIdentity | None:
        """Get identity by ID.

        Args:
            identity_id: Identity ID

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span(
            "oauth_identity_service.get_by_id", identity_id=identity_id
        ):
            identity = await self.oauth_identity_repository.find_by_id(identity_id)
            if identity:
                logfire.info(
                    "Identity found",
                    identity_id=identity_id,
                    provider=identity.provider.value,
                )
            else:
                logfire.warn("Identity not found", identity_id=identity_id)
            return identity

    async def list_for_user(self, user_id: UserId) -> list[OAuthIdentity]:
        """Get all identities bound to an account."""
        with logfire.span("oauth_identity_service.list_for_user", user_id=user_id):
            identities = await self.oauth_identity_repository.find_all_by_user_id(
                user_id
            )
            logfire.info(
                "Identities retrieved for user", user_id=user_id, count=len(identities)
            )
            return identities

    async def record_login(self, identity: ExternalIdentity) -> OAuthIdentity:
        """Record a login: create the identity or refresh its snapshot.

        Safe to call repeatedly and concurrently for the same identity.

        Args:
            identity: Normalized external identity

        Returns:
            The stored identity, with its current binding
        """
        with logfire.span(
            "oauth_identity_service.record_login",
            provider=identity.provider.value,
            external_user_id=identity.external_user_id,
        ):
            stored = await self.oauth_identity_repository.upsert(identity)
            logfire.info(
                "Identity recorded",
                identity_id=stored.id,
                provider=stored.provider.value,
                user_id=stored.user_id,
            )
            return stored

    async def find_reusable_binding(
        self,
        identity: OAuthIdentity,
        providers: Collection[OAuthProviderKind],
    ) -> OAuthIdentity | None:
        """Find another record binding the same external user ID to an account.

        Args:
            identity: The unlinked identity looking for a binding
            providers: Providers whose bindings may be adopted

        Returns:
            Bound identity if one was recorded, None otherwise
        """
        if not providers:
            return None
        with logfire.span(
            "oauth_identity_service.find_reusable_binding",
            identity_id=identity.id,
            external_user_id=identity.external_user_id,
        ):
            return await self.oauth_identity_repository.find_bound_by_external_user_id(
                identity.external_user_id, providers, exclude_id=identity.id
            )

    async def bind(
        self, identity_id: OAuthIdentityId, user_id: UserId
    ) -> OAuthIdentity:
        """Bind an identity to an account.

        Raises:
            NotFoundError: If the identity does not exist
        """
        with logfire.span(
            "oauth_identity_service.bind", identity_id=identity_id, user_id=user_id
        ):
            updated = await self.oauth_identity_repository.update_user_id(
                identity_id, user_id
            )
            logfire.info("Identity bound", identity_id=identity_id, user_id=user_id)
            return updated

    async def unbind(self, provider: OAuthProviderKind, user_id: UserId) -> int:
        """Remove an account's identities under one provider.

        Unbinding an account with no identities is a no-op. The unlinked
        sentinel is never accepted here, so this never deletes orphans.

        Returns:
            Number of removed identities
        """
        with logfire.span(
            "oauth_identity_service.unbind", provider=provider.value, user_id=user_id
        ):
            if user_id == UNLINKED_USER_ID:
                logfire.warn("Unbind requested for unlinked sentinel, ignoring")
                return 0
            removed = await self.oauth_identity_repository.delete_by_provider_and_user_id(
                provider, user_id
            )
            logfire.info(
                "Identities unbound",
                provider=provider.value,
                user_id=user_id,
                removed=removed,
            )
            return removed

    async def remove_for_users(self, user_ids: Collection[UserId]) -> int:
        """Remove every identity bound to the given accounts.

        Used when accounts are deleted.

        Returns:
            Number of removed identities
        """
        user_ids = [u for u in user_ids if u != UNLINKED_USER_ID]
        if not user_ids:
            return 0
        with logfire.span(
            "oauth_identity_service.remove_for_users", count=len(user_ids)
        ):
            removed = await self.oauth_identity_repository.delete_by_user_ids(user_ids)
            logfire.info("Identities removed for users", removed=removed)
            return removed

    async def sweep_orphans(self) -> int:
        """Delete every identity that never got bound to an account.

        Returns:
            Number of removed identities
        """
        with logfire.span("oauth_identity_service.sweep_orphans"):
            removed = await self.oauth_identity_repository.delete_unlinked()
            logfire.info("Orphan identities swept", removed=removed)
            return removed
