"""Orphan identity sweep use case."""

from pydantic import BaseModel

from mailgate.application.usecase.base import BaseUseCase
from mailgate.domain.service import OAuthIdentityService


class SweepOrphansResponse(BaseModel):
    """Sweep response."""

    removed: int


class SweepOrphansUseCase(BaseUseCase[None, SweepOrphansResponse]):
    """Use case for the scheduled removal of never-bound identities.

    Every unlinked identity is eligible on every run. The delete is a single
    set-based statement, so a repeated or interrupted run is harmless.
    """

    def __init__(self, oauth_identity_service: OAuthIdentityService) -> None:
        """Initialize sweep use case.

        Args:
            oauth_identity_service: OAuth identity domain service
        """
        self.oauth_identity_service = oauth_identity_service

    async def execute(self, request: None = None) -> SweepOrphansResponse:
        """Delete all orphan identities."""
        removed = await self.oauth_identity_service.sweep_orphans()
        return SweepOrphansResponse(removed=removed)
