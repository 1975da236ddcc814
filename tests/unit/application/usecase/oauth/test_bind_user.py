"""Unit tests for BindUserUseCase."""

from dishka import AsyncContainer
import pytest

from mailgate.application.usecase.oauth import BindUserUseCase
from mailgate.application.usecase.oauth.bind_user import BindUserRequest
from mailgate.config import RegistrationSettings
from mailgate.domain.error import (
    AlreadyBoundError,
    DeletedEmailError,
    NotFoundError,
    RegistrationCodeError,
)
from mailgate.domain.model import Account
from mailgate.domain.repository import AccountRepository, OAuthIdentityRepository
from mailgate.domain.service import (
    AccountService,
    OAuthIdentityService,
    SessionService,
)
from mailgate.domain.value import OAuthIdentityId, UserId
from tests.conftest import make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestBindUserUseCase:
    """Tests for BindUserUseCase."""

    @pytest.mark.asyncio
    async def test_bind_to_existing_live_account(self, unit_env: AsyncContainer):
        """A live account holding the address is reused."""
        # Arrange
        bind_use_case = await unit_env.get(BindUserUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        await account_repo.save(Account(user_id=UserId(5), email="octo@mail.test"))
        await identity_repo.save(make_identity(1))

        # Act
        response = await bind_use_case.execute(
            BindUserRequest(oauth_identity_id=1, email="octo@mail.test")
        )

        # Assert
        assert response.user_id == 5
        assert response.created_account is False
        assert response.identity.user_id == 5
        assert response.token
        stored = await identity_repo.find_by_id(OAuthIdentityId(1))
        assert stored.user_id == 5

    @pytest.mark.asyncio
    async def test_bind_registers_new_account(self, unit_env: AsyncContainer):
        """A free address registers a new account and binds to it."""
        bind_use_case = await unit_env.get(BindUserUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        await identity_repo.save(make_identity(1))

        response = await bind_use_case.execute(
            BindUserRequest(oauth_identity_id=1, email="octocat@mail.test")
        )

        assert response.created_account is True
        account = await account_repo.find_by_email("octocat@mail.test")
        assert account is not None
        assert response.user_id == account.user_id

    @pytest.mark.asyncio
    async def test_already_bound_leaves_store_unchanged(
        self, unit_env: AsyncContainer
    ):
        """Rebinding an identity of a live account is refused."""
        bind_use_case = await unit_env.get(BindUserUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        await account_repo.save(Account(user_id=UserId(5), email="a@mail.test"))
        await account_repo.save(Account(user_id=UserId(6), email="b@mail.test"))
        await identity_repo.save(make_identity(1, user_id=5))

        with pytest.raises(AlreadyBoundError):
            await bind_use_case.execute(
                BindUserRequest(oauth_identity_id=1, email="b@mail.test")
            )

        stored = await identity_repo.find_by_id(OAuthIdentityId(1))
        assert stored.user_id == 5
        assert await account_repo.find_by_email("b@mail.test") is not None

    @pytest.mark.asyncio
    async def test_rebind_allowed_when_bound_account_deleted(
        self, unit_env: AsyncContainer
    ):
        """An identity whose account was soft-deleted may bind again."""
        bind_use_case = await unit_env.get(BindUserUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        await account_repo.save(
            Account(user_id=UserId(5), email="old@mail.test", is_del=True)
        )
        await identity_repo.save(make_identity(1, user_id=5))

        response = await bind_use_case.execute(
            BindUserRequest(oauth_identity_id=1, email="new@mail.test")
        )

        assert response.created_account is True
        assert response.user_id != 5

    @pytest.mark.asyncio
    async def test_deleted_email_is_refused(self, unit_env: AsyncContainer):
        """An address held by a soft-deleted account cannot be bound."""
        bind_use_case = await unit_env.get(BindUserUseCase)
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        await account_repo.save(
            Account(user_id=UserId(5), email="gone@mail.test", is_del=True)
        )
        await identity_repo.save(make_identity(1))

        with pytest.raises(DeletedEmailError):
            await bind_use_case.execute(
                BindUserRequest(oauth_identity_id=1, email="gone@mail.test")
            )

        stored = await identity_repo.find_by_id(OAuthIdentityId(1))
        assert stored.is_linked is False

    @pytest.mark.asyncio
    async def test_unknown_identity(self, unit_env: AsyncContainer):
        bind_use_case = await unit_env.get(BindUserUseCase)

        with pytest.raises(NotFoundError):
            await bind_use_case.execute(
                BindUserRequest(oauth_identity_id=404, email="x@mail.test")
            )

    @pytest.mark.asyncio
    async def test_registration_code_required(self, unit_env: AsyncContainer):
        """With codes required, registering through bind needs a valid code."""
        account_repo = await unit_env.get(AccountRepository)
        identity_repo = await unit_env.get(OAuthIdentityRepository)
        oauth_identity_service = await unit_env.get(OAuthIdentityService)
        session_service = await unit_env.get(SessionService)
        await identity_repo.save(make_identity(1))
        bind_use_case = BindUserUseCase(
            oauth_identity_service=oauth_identity_service,
            account_service=AccountService(
                account_repo, RegistrationSettings(require_code=True, codes=["C0DE"])
            ),
            session_service=session_service,
        )

        with pytest.raises(RegistrationCodeError):
            await bind_use_case.execute(
                BindUserRequest(oauth_identity_id=1, email="new@mail.test")
            )
        assert await account_repo.find_by_email("new@mail.test") is None

        response = await bind_use_case.execute(
            BindUserRequest(
                oauth_identity_id=1, email="new@mail.test", registration_code="C0DE"
            )
        )
        assert response.created_account is True
