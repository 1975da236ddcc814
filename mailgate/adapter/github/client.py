"""GitHub OAuth client implementation."""

from collections.abc import Iterable
from typing import Any

import httpx

from mailgate.adapter.http_client import HttpOAuthClient
from mailgate.domain.service.provider_gateway import OAuthClient
from mailgate.domain.value import (
    ExternalIdentity,
    OAuthProviderKind,
    ProviderCapabilities,
)

# A GitHub login adopts an account recorded under the same external user id
# by any of these providers
REUSE_BINDINGS_FROM = (OAuthProviderKind.GITHUB, OAuthProviderKind.LINUXDO)


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGitHubOAuthClient(GitHubOAuthClient, HttpOAuthClient):
    """GitHub OAuth App client.

    GitHub answers the token request with form encoding unless JSON is
    requested explicitly, and reports no reputation or activity flags.
    """

    provider = OAuthProviderKind.GITHUB
    token_headers = {"Accept": "application/json"}

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        token_url: str = "https://github.com/login/oauth/access_token",
        profile_url: str = "https://api.github.com/user",
        reuse_bindings_from: Iterable[OAuthProviderKind] = REUSE_BINDINGS_FROM,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth client ID
            client_secret: GitHub OAuth client secret
            redirect_uri: Callback URL registered with GitHub
            token_url: Token endpoint
            profile_url: Profile endpoint
            reuse_bindings_from: Providers whose bindings unlinked GitHub
                identities may adopt
            timeout: Timeout in seconds for each outbound request
            transport: Optional httpx transport
        """
        super().__init__(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            token_url=token_url,
            profile_url=profile_url,
            timeout=timeout,
            transport=transport,
        )
        self.capabilities = ProviderCapabilities(
            reuses_bindings=True,
            reuse_bindings_from=frozenset(reuse_bindings_from),
        )

    def normalize_profile(self, payload: dict[str, Any]) -> ExternalIdentity:
        """Map a GitHub `/user` payload.

        `login` is the username; `name` is optional on GitHub and falls back
        to `login`.
        """
        login = payload["login"]
        return ExternalIdentity(
            provider=OAuthProviderKind.GITHUB,
            external_user_id=str(payload["id"]),
            username=login,
            display_name=payload.get("name") or login,
            avatar_url=payload.get("avatar_url"),
            trust_level=0,
            active=False,
            silenced=False,
        )


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    Returns deterministic test data without making real API calls.
    """

    def __init__(
        self,
        identity: ExternalIdentity | None = None,
        reuse_bindings_from: Iterable[OAuthProviderKind] = REUSE_BINDINGS_FROM,
    ):
        """Initialize mock client without real OAuth configuration."""
        self.identity = identity or ExternalIdentity(
            provider=OAuthProviderKind.GITHUB,
            external_user_id="42",
            username="octocat",
            display_name="The Octocat",
            avatar_url="https://example.com/octocat.png",
        )
        self.capabilities = ProviderCapabilities(
            reuses_bindings=True,
            reuse_bindings_from=frozenset(reuse_bindings_from),
        )

    async def exchange_and_fetch(self, code: str) -> ExternalIdentity:
        """Return the configured identity.

        Args:
            code: Authorization code (unused in mock)
        """
        return self.identity
