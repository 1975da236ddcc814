"""Unbind OAuth provider use case."""

from pydantic import BaseModel

from mailgate.application.usecase.base import BaseUseCase
from mailgate.domain.service import OAuthIdentityService
from mailgate.domain.value import OAuthProviderKind, UserId


class UnbindRequest(BaseModel):
    """Unbind request."""

    provider: OAuthProviderKind
    user_id: int


class UnbindResponse(BaseModel):
    """Unbind response."""

    removed: int


class UnbindUseCase(BaseUseCase[UnbindRequest, UnbindResponse]):
    """Use case for detaching a provider from an account.

    Idempotent: unbinding a provider that is not bound removes nothing.
    """

    def __init__(self, oauth_identity_service: OAuthIdentityService) -> None:
        """Initialize unbind use case.

        Args:
            oauth_identity_service: OAuth identity domain service
        """
        self.oauth_identity_service = oauth_identity_service

    async def execute(self, request: UnbindRequest) -> UnbindResponse:
        """Remove the account's identities under the provider."""
        removed = await self.oauth_identity_service.unbind(
            request.provider, UserId(request.user_id)
        )
        return UnbindResponse(removed=removed)
