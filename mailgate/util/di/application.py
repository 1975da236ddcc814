"""Application layer DI providers."""

from dishka import Scope, provide

from mailgate.application.usecase.oauth import (
    BindUserUseCase,
    LoginUseCase,
    PurgeAccountIdentitiesUseCase,
    SweepOrphansUseCase,
    UnbindUseCase,
)
from mailgate.domain.service import (
    AccountResolver,
    AccountService,
    OAuthIdentityService,
    ProviderGateway,
    SessionService,
)
from mailgate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        provider_gateway: ProviderGateway,
        account_resolver: AccountResolver,
        session_service: SessionService,
    ) -> LoginUseCase:
        """Provide OAuth login use case."""
        return LoginUseCase(
            provider_gateway=provider_gateway,
            account_resolver=account_resolver,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_bind_user_use_case(
        self,
        oauth_identity_service: OAuthIdentityService,
        account_service: AccountService,
        session_service: SessionService,
    ) -> BindUserUseCase:
        """Provide bind use case."""
        return BindUserUseCase(
            oauth_identity_service=oauth_identity_service,
            account_service=account_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_unbind_use_case(
        self, oauth_identity_service: OAuthIdentityService
    ) -> UnbindUseCase:
        """Provide unbind use case."""
        return UnbindUseCase(oauth_identity_service=oauth_identity_service)

    @provide(scope=Scope.REQUEST)
    def get_sweep_orphans_use_case(
        self, oauth_identity_service: OAuthIdentityService
    ) -> SweepOrphansUseCase:
        """Provide orphan sweep use case."""
        return SweepOrphansUseCase(oauth_identity_service=oauth_identity_service)

    @provide(scope=Scope.REQUEST)
    def get_purge_account_identities_use_case(
        self, oauth_identity_service: OAuthIdentityService
    ) -> PurgeAccountIdentitiesUseCase:
        """Provide account identity purge use case."""
        return PurgeAccountIdentitiesUseCase(
            oauth_identity_service=oauth_identity_service
        )
