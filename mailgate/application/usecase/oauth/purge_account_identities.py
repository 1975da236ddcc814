"""Account identity purge use case."""

import logfire
from pydantic import BaseModel

from mailgate.application.usecase.base import BaseUseCase
from mailgate.domain.service import OAuthIdentityService
from mailgate.domain.value import UserId


class PurgeAccountIdentitiesRequest(BaseModel):
    """Accounts whose identities are removed."""

    user_ids: list[int]


class PurgeAccountIdentitiesResponse(BaseModel):
    """Purge response."""

    removed: int


class PurgeAccountIdentitiesUseCase(
    BaseUseCase[PurgeAccountIdentitiesRequest, PurgeAccountIdentitiesResponse]
):
    """Use case for dropping every OAuth binding of deleted accounts.

    Runs after the account store removes the accounts, so no identity keeps
    pointing at them. Repeating the purge removes nothing more.
    """

    def __init__(self, oauth_identity_service: OAuthIdentityService) -> None:
        """Initialize purge use case.

        Args:
            oauth_identity_service: OAuth identity domain service
        """
        self.oauth_identity_service = oauth_identity_service

    async def execute(
        self, request: PurgeAccountIdentitiesRequest
    ) -> PurgeAccountIdentitiesResponse:
        """Remove identities bound to any of the given accounts."""
        removed = await self.oauth_identity_service.remove_for_users(
            [UserId(u) for u in request.user_ids]
        )
        logfire.info(
            "Account identities purged",
            account_count=len(request.user_ids),
            removed=removed,
        )
        return PurgeAccountIdentitiesResponse(removed=removed)
