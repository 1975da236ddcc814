"""Provider gateway domain service."""

import logfire

from mailgate.domain.error import UnsupportedProviderError
from mailgate.domain.value import (
    ExternalIdentity,
    OAuthProviderKind,
    ProviderCapabilities,
)

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    capabilities: ProviderCapabilities = ProviderCapabilities()

    async def exchange_and_fetch(self, code: str) -> ExternalIdentity:
        """Exchange an authorization code and fetch the user's profile.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            Normalized external identity

        Raises:
            UpstreamAuthError: If the token exchange fails
            UpstreamProfileError: If the profile fetch fails
        """
        raise NotImplementedError


class ProviderGateway(Service):
    """Domain service dispatching OAuth exchanges to provider clients."""

    def __init__(self, oauth_clients: dict[OAuthProviderKind, OAuthClient]) -> None:
        """Initialize provider gateway.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: OAuthProviderKind) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise UnsupportedProviderError(str(provider.value))
        return client

    def capabilities(self, provider: OAuthProviderKind) -> ProviderCapabilities:
        """Get the resolution capabilities of a provider.

        Raises:
            UnsupportedProviderError: If provider not configured
        """
        return self._client(provider).capabilities

    async def exchange_and_fetch(
        self, provider: OAuthProviderKind, code: str
    ) -> ExternalIdentity:
        """Exchange an authorization code with a provider.

        Args:
            provider: OAuth provider that issued the code
            code: Authorization code from the OAuth callback

        Returns:
            Normalized external identity

        Raises:
            UnsupportedProviderError: If provider not configured
            UpstreamAuthError: If the token exchange fails
            UpstreamProfileError: If the profile fetch fails
        """
        client = self._client(provider)
        with logfire.span("provider_gateway.exchange_and_fetch", provider=provider.value):
            identity = await client.exchange_and_fetch(code)
            logfire.info(
                "External identity fetched",
                provider=provider.value,
                external_user_id=identity.external_user_id,
                username=identity.username,
            )
            return identity
