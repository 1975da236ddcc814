"""OAuth login use case."""

import logfire
from pydantic import BaseModel

from mailgate.application.usecase.base import BaseUseCase
from mailgate.application.usecase.oauth.common import OAuthIdentityInfo
from mailgate.domain.model import LinkedExisting
from mailgate.domain.service import AccountResolver, ProviderGateway, SessionService
from mailgate.domain.value import OAuthProviderKind


class LoginRequest(BaseModel):
    """Login request from an OAuth callback."""

    provider: OAuthProviderKind
    code: str  # OAuth authorization code


class LoginResponse(BaseModel):
    """Login response.

    `token` is set when the identity resolved to an account. Otherwise the
    user must bind an address first; `default_email`, `available` and
    `suggestions` describe the choice.
    """

    identity: OAuthIdentityInfo
    token: str | None = None
    default_email: str | None = None
    available: bool | None = None
    suggestions: list[str] = []


class LoginUseCase(BaseUseCase[LoginRequest, LoginResponse]):
    """Use case for signing in with an OAuth provider."""

    def __init__(
        self,
        provider_gateway: ProviderGateway,
        account_resolver: AccountResolver,
        session_service: SessionService,
    ) -> None:
        """Initialize login use case.

        Args:
            provider_gateway: Provider gateway (token exchange + profile)
            account_resolver: Account resolver domain service
            session_service: Session token domain service
        """
        self.provider_gateway = provider_gateway
        self.account_resolver = account_resolver
        self.session_service = session_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute OAuth login.

        Steps:
        1. Exchange the code and fetch the external identity
        2. Resolve the identity to an account (records the identity)
        3. If resolved: issue a session
        4. If not: return the default address and suggestions, no session

        Args:
            request: Login request with provider and authorization code

        Returns:
            Login response

        Raises:
            UnsupportedProviderError: If provider not configured
            UpstreamAuthError: If the token exchange fails
            UpstreamProfileError: If the profile fetch fails
            AccountDeletedError: If the bound account is soft-deleted; the
                login record is already committed by then
        """
        identity = await self.provider_gateway.exchange_and_fetch(
            request.provider, request.code
        )

        with logfire.span(
            "login_oauth_identity",
            provider=identity.provider.value,
            external_user_id=identity.external_user_id,
        ):
            outcome = await self.account_resolver.resolve(identity)

            if isinstance(outcome, LinkedExisting):
                token = self.session_service.issue_session(outcome.account)
                logfire.info(
                    "OAuth user logged in",
                    provider=identity.provider.value,
                    user_id=outcome.account.user_id,
                )
                return LoginResponse(
                    identity=OAuthIdentityInfo.from_identity(outcome.identity),
                    token=token,
                )

            logfire.info(
                "OAuth user needs an address",
                provider=identity.provider.value,
                identity_id=outcome.identity.id,
                default_email=outcome.default_email,
                available=outcome.available,
            )
            return LoginResponse(
                identity=OAuthIdentityInfo.from_identity(outcome.identity),
                token=None,
                default_email=outcome.default_email,
                available=outcome.available,
                suggestions=outcome.suggestions,
            )
