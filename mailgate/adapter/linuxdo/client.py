"""LinuxDo OAuth client implementation."""

from typing import Any

import httpx

from mailgate.adapter.http_client import HttpOAuthClient
from mailgate.domain.service.provider_gateway import OAuthClient
from mailgate.domain.value import ExternalIdentity, OAuthProviderKind


class LinuxDoOAuthClient(OAuthClient):
    """Base class for LinuxDo OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealLinuxDoOAuthClient(LinuxDoOAuthClient, HttpOAuthClient):
    """LinuxDo Connect client.

    LinuxDo reports a Discourse trust level and an `active` flag. Bindings
    are never adopted from other records.
    """

    provider = OAuthProviderKind.LINUXDO

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        token_url: str = "https://connect.linux.do/oauth2/token",
        profile_url: str = "https://connect.linux.do/api/user",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize LinuxDo OAuth client.

        Args:
            client_id: LinuxDo OAuth client ID
            client_secret: LinuxDo OAuth client secret
            redirect_uri: Callback URL registered with LinuxDo
            token_url: Token endpoint
            profile_url: Profile endpoint
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

    def normalize_profile(self, payload: dict[str, Any]) -> ExternalIdentity:
        """Map a LinuxDo `/api/user` payload.

        The stored `active` flag is the inverse of the upstream one and
        `silenced` is the inverse of the stored `active`, so `silenced` ends
        up equal to the upstream flag. Existing records depend on this.
        """
        username = payload["username"]
        active = not bool(payload.get("active"))
        return ExternalIdentity(
            provider=OAuthProviderKind.LINUXDO,
            external_user_id=str(payload["id"]),
            username=username,
            display_name=payload.get("name") or username,
            avatar_url=payload.get("avatar_url"),
            trust_level=int(payload.get("trust_level") or 0),
            active=active,
            silenced=not active,
        )


class MockLinuxDoOAuthClient(LinuxDoOAuthClient):
    """Mock LinuxDo OAuth client for testing.

    Returns deterministic test data without making real API calls.
    """

    def __init__(self, identity: ExternalIdentity | None = None):
        """Initialize mock client without real OAuth configuration."""
        self.identity = identity or ExternalIdentity(
            provider=OAuthProviderKind.LINUXDO,
            external_user_id="1001",
            username="linuxer",
            display_name="Linux User",
            trust_level=2,
            active=False,
            silenced=True,
        )

    async def exchange_and_fetch(self, code: str) -> ExternalIdentity:
        """Return the configured identity.

        Args:
            code: Authorization code (unused in mock)
        """
        return self.identity
