"""Integration tests for PostgresOAuthIdentityRepository.

Need PostgreSQL at `DATABASE__URL` with migrations applied; skipped
otherwise.
"""

from dishka import AsyncContainer
import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from mailgate.domain.repository import AccountRepository, OAuthIdentityRepository
from mailgate.domain.service import AccountResolver
from mailgate.domain.value import OAuthProviderKind, UserId
from tests.conftest import make_external
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real PostgreSQL, mocked providers
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env: AsyncContainer):
    """Truncate tables before each test, or skip without a database."""
    engine = await integration_env.get(AsyncEngine)
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    session = await integration_env.get(AsyncSession)
    await session.execute(
        text("TRUNCATE TABLE oauth_identities, accounts RESTART IDENTITY")
    )
    await session.commit()
    yield


class TestUpsert:
    """Tests for the race-tolerant upsert."""

    @pytest.mark.asyncio
    async def test_upsert_twice_keeps_one_row(self, integration_env: AsyncContainer):
        repo = await integration_env.get(OAuthIdentityRepository)

        first = await repo.upsert(make_external(username="before"))
        second = await repo.upsert(make_external(username="after"))

        assert first.id == second.id
        assert second.username == "after"
        assert second.user_id == 0

    @pytest.mark.asyncio
    async def test_upsert_never_touches_binding(self, integration_env: AsyncContainer):
        repo = await integration_env.get(OAuthIdentityRepository)
        accounts = await integration_env.get(AccountRepository)
        account = await accounts.create("octo@mail.test", "hash")

        created = await repo.upsert(make_external())
        await repo.update_user_id(created.id, account.user_id)
        refreshed = await repo.upsert(make_external(display_name="New Name"))

        assert refreshed.user_id == account.user_id
        assert refreshed.display_name == "New Name"


class TestDeletes:
    """Tests for set-based deletes."""

    @pytest.mark.asyncio
    async def test_sweep_and_unbind(self, integration_env: AsyncContainer):
        repo = await integration_env.get(OAuthIdentityRepository)
        accounts = await integration_env.get(AccountRepository)
        account = await accounts.create("octo@mail.test", "hash")
        for n in range(3):
            await repo.upsert(make_external(external_user_id=f"orphan-{n}"))
        bound = await repo.upsert(make_external(external_user_id="bound"))
        await repo.update_user_id(bound.id, account.user_id)

        assert await repo.delete_unlinked() == 3
        assert (
            await repo.delete_by_provider_and_user_id(
                OAuthProviderKind.GITHUB, account.user_id
            )
            == 1
        )
        assert (
            await repo.delete_by_provider_and_user_id(
                OAuthProviderKind.GITHUB, account.user_id
            )
            == 0
        )
        assert await repo.find_all_by_user_id(UserId(account.user_id)) == []


class TestLoginRecordDurability:
    """The login record survives a failure later in the same request."""

    @pytest.mark.asyncio
    async def test_recorded_login_outlives_rollback(
        self, integration_env: AsyncContainer
    ):
        resolver = await integration_env.get(AccountResolver)
        repo = await integration_env.get(OAuthIdentityRepository)
        session = await integration_env.get(AsyncSession)

        outcome = await resolver.resolve(make_external(username="first"))
        await session.rollback()

        stored = await repo.find_by_provider(OAuthProviderKind.GITHUB, "42")
        assert stored is not None
        assert stored.id == outcome.identity.id
        assert stored.username == "first"
