"""OAuth 2.0 authorization-code client shared by the HTTP providers.

Providers differ only in endpoints, a few request headers, and the shape of
their profile payload; each subclass supplies `normalize_profile`.
"""

from typing import Any

import httpx
import logfire

from mailgate.adapter.error import UpstreamAuthError, UpstreamProfileError
from mailgate.domain.service.provider_gateway import OAuthClient
from mailgate.domain.value import ExternalIdentity, OAuthProviderKind


class HttpOAuthClient(OAuthClient):
    """Authorization-code exchange and profile fetch over httpx."""

    provider: OAuthProviderKind
    token_headers: dict[str, str] = {}

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        token_url: str,
        profile_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OAuth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
            token_url: Token endpoint
            profile_url: Profile endpoint
            timeout: Timeout in seconds for each outbound request
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.token_url = token_url
        self.profile_url = profile_url
        self.timeout = timeout
        self._transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    async def exchange_and_fetch(self, code: str) -> ExternalIdentity:
        """Exchange an authorization code and fetch the user's profile.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            Normalized external identity

        Raises:
            UpstreamAuthError: If the token exchange fails
            UpstreamProfileError: If the profile fetch or normalization fails
        """
        access_token = await self._exchange_code_for_token(code)
        profile = await self._get_profile(access_token)

        try:
            identity = self.normalize_profile(profile)
        except (KeyError, TypeError, ValueError) as e:
            logfire.error(
                "OAuth profile normalization failed",
                provider=self.provider.value,
                error=str(e),
            )
            raise UpstreamProfileError(
                self.provider.value, f"Unexpected profile payload: {e}"
            )

        logfire.info(
            "OAuth exchange completed",
            provider=self.provider.value,
            external_user_id=identity.external_user_id,
            username=identity.username,
        )
        return identity

    def normalize_profile(self, payload: dict[str, Any]) -> ExternalIdentity:
        """Map the provider's profile payload to an ExternalIdentity."""
        raise NotImplementedError

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            UpstreamAuthError: If token exchange fails
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            **self.token_headers,
        }

        try:
            async with self._http_client() as client:
                response = await client.post(self.token_url, data=data, headers=headers)
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth token exchange HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise UpstreamAuthError(
                self.provider.value, f"HTTP error during token exchange: {e}"
            )

        if not response.is_success:
            logfire.error(
                "OAuth token exchange failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise UpstreamAuthError(
                self.provider.value, f"Token exchange failed: {response.status_code}"
            )

        try:
            access_token = response.json().get("access_token")
        except ValueError:
            access_token = None
        if not access_token:
            logfire.error(
                "OAuth token response without access token",
                provider=self.provider.value,
                body=response.text,
            )
            raise UpstreamAuthError(
                self.provider.value, "Token response did not include an access token"
            )
        return access_token

    async def _get_profile(self, access_token: str) -> dict[str, Any]:
        """Get the user's profile with an access token.

        Raises:
            UpstreamProfileError: If the request fails
        """
        try:
            async with self._http_client() as client:
                response = await client.get(
                    self.profile_url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth profile HTTP error", provider=self.provider.value, error=str(e)
            )
            raise UpstreamProfileError(
                self.provider.value, f"HTTP error fetching profile: {e}"
            )

        if not response.is_success:
            logfire.error(
                "OAuth profile request failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise UpstreamProfileError(
                self.provider.value, f"Profile request failed: {response.status_code}"
            )

        try:
            profile = response.json()
        except ValueError as e:
            raise UpstreamProfileError(
                self.provider.value, f"Profile response is not JSON: {e}"
            )
        if not isinstance(profile, dict):
            raise UpstreamProfileError(
                self.provider.value, "Profile response is not an object"
            )
        return profile
