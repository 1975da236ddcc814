"""Domain layer DI providers."""

from dishka import Scope, provide

from mailgate.config import AuthSettings, RegistrationSettings, Settings
from mailgate.domain.repository import (
    AccountRepository,
    OAuthIdentityRepository,
    UnitOfWork,
)
from mailgate.domain.service import (
    AccountResolver,
    AccountService,
    EmailSuggestionService,
    OAuthClient,
    OAuthIdentityService,
    ProviderGateway,
    SessionService,
)
from mailgate.domain.value import OAuthProviderKind
from mailgate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_provider_gateway(
        self, oauth_clients: dict[OAuthProviderKind, OAuthClient]
    ) -> ProviderGateway:
        """Provide the provider gateway.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            ProviderGateway configured with all available OAuth clients
        """
        return ProviderGateway(oauth_clients=oauth_clients)

    @provide
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings)

    @provide
    def get_oauth_identity_service(
        self, oauth_identity_repository: OAuthIdentityRepository
    ) -> OAuthIdentityService:
        """Provide OAuth identity domain service."""
        return OAuthIdentityService(oauth_identity_repository=oauth_identity_repository)

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        registration_settings: RegistrationSettings,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            registration_settings=registration_settings,
        )

    @provide
    def get_email_suggestion_service(
        self, account_service: AccountService, settings: Settings
    ) -> EmailSuggestionService:
        """Provide address suggestion service for the configured mail domain."""
        return EmailSuggestionService(
            account_service=account_service,
            domain=settings.mailbox.default_domain,
        )

    @provide
    def get_account_resolver(
        self,
        oauth_identity_service: OAuthIdentityService,
        account_service: AccountService,
        suggestion_service: EmailSuggestionService,
        provider_gateway: ProviderGateway,
        unit_of_work: UnitOfWork,
    ) -> AccountResolver:
        """Provide account resolver domain service."""
        return AccountResolver(
            oauth_identity_service=oauth_identity_service,
            account_service=account_service,
            suggestion_service=suggestion_service,
            provider_gateway=provider_gateway,
            unit_of_work=unit_of_work,
        )
