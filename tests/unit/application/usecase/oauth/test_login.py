"""Unit tests for LoginUseCase."""

from dishka import AsyncContainer
import pytest

from mailgate.application.usecase.oauth import LoginUseCase
from mailgate.application.usecase.oauth.login import LoginRequest
from mailgate.config import Settings
from mailgate.domain.error import AccountDeletedError, UnsupportedProviderError
from mailgate.domain.model import Account
from mailgate.domain.repository import (
    AccountRepository,
    OAuthIdentityRepository,
    UnitOfWork,
)
from mailgate.domain.service import (
    AccountResolver,
    ProviderGateway,
    SessionService,
)
from mailgate.domain.value import OAuthIdentityId, OAuthProviderKind, UserId
from tests.conftest import make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_first_login_needs_an_address(self, unit_env: AsyncContainer):
        """An unknown identity is recorded and offered its default address."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        settings = await unit_env.get(Settings)

        # Act (MockGitHubOAuthClient returns octocat / 42)
        response = await login_use_case.execute(
            LoginRequest(provider=OAuthProviderKind.GITHUB, code="code-1")
        )

        # Assert
        assert response.token is None
        assert response.default_email == f"octocat@{settings.mailbox.default_domain}"
        assert response.available is True
        assert response.suggestions == []
        assert response.identity.user_id == 0
        assert response.identity.external_user_id == "42"

    @pytest.mark.asyncio
    async def test_repeated_login_keeps_one_record(self, unit_env: AsyncContainer):
        """Logging in twice with the same identity stores a single row."""
        login_use_case = await unit_env.get(LoginUseCase)
        identity_repo = await unit_env.get(OAuthIdentityRepository)

        first = await login_use_case.execute(
            LoginRequest(provider=OAuthProviderKind.GITHUB, code="code-1")
        )
        second = await login_use_case.execute(
            LoginRequest(provider=OAuthProviderKind.GITHUB, code="code-2")
        )

        assert first.identity.oauth_identity_id == second.identity.oauth_identity_id
        assert len(await identity_repo.find_all_by_user_id(UserId(0))) == 1

    @pytest.mark.asyncio
    async def test_bound_identity_gets_session(self, unit_env: AsyncContainer):
        """A bound identity signs straight in."""
        login_use_case = await unit_env.get(LoginUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        session_service = await unit_env.get(SessionService)
        await account_repo.save(Account(user_id=UserId(5), email="octo@mail.test"))
        await identity_repo.save(make_identity(1, user_id=5))

        response = await login_use_case.execute(
            LoginRequest(provider=OAuthProviderKind.GITHUB, code="code")
        )

        assert response.token is not None
        assert response.default_email is None
        assert session_service.verify_session(response.token).user_id == 5

    @pytest.mark.asyncio
    async def test_deleted_account_is_refused(self, unit_env: AsyncContainer):
        """Identities bound to soft-deleted accounts get no session."""
        login_use_case = await unit_env.get(LoginUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        unit_of_work = await unit_env.get(UnitOfWork)
        await account_repo.save(
            Account(user_id=UserId(5), email="octo@mail.test", is_del=True)
        )
        await identity_repo.save(make_identity(1, user_id=5, username="old"))

        with pytest.raises(AccountDeletedError):
            await login_use_case.execute(
                LoginRequest(provider=OAuthProviderKind.GITHUB, code="code")
            )

        # The refreshed login record was committed before the refusal
        assert unit_of_work.commits == 1
        stored = await identity_repo.find_by_id(OAuthIdentityId(1))
        assert stored.username == "octocat"

    @pytest.mark.asyncio
    async def test_github_login_adopts_linuxdo_account(self, unit_env: AsyncContainer):
        """A GitHub user already bound through LinuxDo signs straight in."""
        login_use_case = await unit_env.get(LoginUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        session_service = await unit_env.get(SessionService)
        await account_repo.save(Account(user_id=UserId(5), email="octo@mail.test"))
        await identity_repo.save(
            make_identity(
                1, provider=OAuthProviderKind.LINUXDO, external_user_id="42", user_id=5
            )
        )

        response = await login_use_case.execute(
            LoginRequest(provider=OAuthProviderKind.GITHUB, code="code")
        )

        assert response.token is not None
        assert session_service.verify_session(response.token).user_id == 5
        assert response.identity.provider == OAuthProviderKind.GITHUB
        assert response.identity.user_id == 5

    @pytest.mark.asyncio
    async def test_taken_default_gets_suggestions(self, unit_env: AsyncContainer):
        login_use_case = await unit_env.get(LoginUseCase)
        account_repo = await unit_env.get(AccountRepository)
        settings = await unit_env.get(Settings)
        domain = settings.mailbox.default_domain
        await account_repo.save(Account(user_id=UserId(1), email=f"octocat@{domain}"))

        response = await login_use_case.execute(
            LoginRequest(provider=OAuthProviderKind.GITHUB, code="code")
        )

        assert response.available is False
        assert response.suggestions[0] == f"octocata@{domain}"
        assert len(response.suggestions) == 3

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self, unit_env: AsyncContainer):
        """A provider without a client is rejected before anything is stored."""
        account_resolver = await unit_env.get(AccountResolver)
        session_service = await unit_env.get(SessionService)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        login_use_case = LoginUseCase(
            provider_gateway=ProviderGateway(oauth_clients={}),
            account_resolver=account_resolver,
            session_service=session_service,
        )

        with pytest.raises(UnsupportedProviderError):
            await login_use_case.execute(
                LoginRequest(provider=OAuthProviderKind.LINUXDO, code="code")
            )

        assert await identity_repo.find_all_by_user_id(UserId(0)) == []
