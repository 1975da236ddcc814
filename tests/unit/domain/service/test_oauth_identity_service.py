"""Unit tests for OAuthIdentityService."""

import pytest

from mailgate.domain.error import NotFoundError
from mailgate.domain.service import OAuthIdentityService
from mailgate.domain.value import (
    UNLINKED_USER_ID,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)
from mailgate.persistence.repository.inmemory import InMemoryOAuthIdentityRepository
from tests.conftest import make_external, make_identity


class TestRecordLogin:
    """Tests for OAuthIdentityService.record_login()."""

    @pytest.mark.asyncio
    async def test_first_login_creates_unlinked_identity(self):
        repo = InMemoryOAuthIdentityRepository()
        service = OAuthIdentityService(repo)

        stored = await service.record_login(make_external())

        assert stored.user_id == UNLINKED_USER_ID
        assert stored.is_linked is False
        assert stored.username == "octocat"

    @pytest.mark.asyncio
    async def test_repeated_login_keeps_single_record(self):
        """Recording the same identity twice should not duplicate it."""
        repo = InMemoryOAuthIdentityRepository()
        service = OAuthIdentityService(repo)

        first = await service.record_login(make_external())
        second = await service.record_login(make_external())

        assert first.id == second.id
        assert await service.list_for_user(UNLINKED_USER_ID) == [second]

    @pytest.mark.asyncio
    async def test_relogin_refreshes_snapshot_but_keeps_binding(self):
        """A new login updates profile fields and never touches user_id."""
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1, user_id=9, username="oldname"))
        service = OAuthIdentityService(repo)

        stored = await service.record_login(
            make_external(username="newname", avatar_url="https://a.test/new.png")
        )

        assert stored.id == 1
        assert stored.user_id == 9
        assert stored.username == "newname"
        assert stored.avatar_url == "https://a.test/new.png"


class TestBind:
    """Tests for OAuthIdentityService.bind()."""

    @pytest.mark.asyncio
    async def test_bind_sets_user_id(self):
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1))
        service = OAuthIdentityService(repo)

        bound = await service.bind(OAuthIdentityId(1), UserId(5))

        assert bound.user_id == 5
        assert (await service.get_by_id(OAuthIdentityId(1))).user_id == 5

    @pytest.mark.asyncio
    async def test_bind_missing_identity_raises(self):
        service = OAuthIdentityService(InMemoryOAuthIdentityRepository())

        with pytest.raises(NotFoundError):
            await service.bind(OAuthIdentityId(99), UserId(5))


class TestUnbind:
    """Tests for OAuthIdentityService.unbind()."""

    @pytest.mark.asyncio
    async def test_unbind_removes_provider_rows_of_account(self):
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1, user_id=5))
        await repo.save(
            make_identity(
                2, provider=OAuthProviderKind.LINUXDO, external_user_id="7", user_id=5
            )
        )
        service = OAuthIdentityService(repo)

        removed = await service.unbind(OAuthProviderKind.GITHUB, UserId(5))

        assert removed == 1
        remaining = await service.list_for_user(UserId(5))
        assert [i.provider for i in remaining] == [OAuthProviderKind.LINUXDO]

    @pytest.mark.asyncio
    async def test_unbind_twice_is_a_noop(self):
        """Unbinding is idempotent."""
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1, user_id=5))
        service = OAuthIdentityService(repo)

        assert await service.unbind(OAuthProviderKind.GITHUB, UserId(5)) == 1
        assert await service.unbind(OAuthProviderKind.GITHUB, UserId(5)) == 0

    @pytest.mark.asyncio
    async def test_unbind_unlinked_sentinel_deletes_nothing(self):
        """User id 0 must never be used to delete orphans."""
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1))
        service = OAuthIdentityService(repo)

        removed = await service.unbind(OAuthProviderKind.GITHUB, UNLINKED_USER_ID)

        assert removed == 0
        assert await service.get_by_id(OAuthIdentityId(1)) is not None


class TestRemoveForUsers:
    """Tests for OAuthIdentityService.remove_for_users()."""

    @pytest.mark.asyncio
    async def test_removes_all_providers_of_given_accounts(self):
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1, external_user_id="1", user_id=5))
        await repo.save(
            make_identity(
                2, provider=OAuthProviderKind.LINUXDO, external_user_id="2", user_id=5
            )
        )
        await repo.save(make_identity(3, external_user_id="3", user_id=6))
        await repo.save(make_identity(4, external_user_id="4", user_id=7))
        service = OAuthIdentityService(repo)

        removed = await service.remove_for_users([UserId(5), UserId(6)])

        assert removed == 3
        assert await service.get_by_id(OAuthIdentityId(4)) is not None

    @pytest.mark.asyncio
    async def test_empty_input_is_a_noop(self):
        repo = InMemoryOAuthIdentityRepository()
        await repo.save(make_identity(1, user_id=5))
        service = OAuthIdentityService(repo)

        assert await service.remove_for_users([]) == 0
        assert await service.remove_for_users([UNLINKED_USER_ID]) == 0


class TestSweepOrphans:
    """Tests for OAuthIdentityService.sweep_orphans()."""

    @pytest.mark.asyncio
    async def test_sweep_removes_only_unlinked(self):
        """Five orphans and two bound identities leave the two bound ones."""
        repo = InMemoryOAuthIdentityRepository()
        for identity_id in range(1, 6):
            await repo.save(make_identity(identity_id, external_user_id=str(identity_id)))
        await repo.save(make_identity(6, external_user_id="6", user_id=10))
        await repo.save(make_identity(7, external_user_id="7", user_id=11))
        service = OAuthIdentityService(repo)

        removed = await service.sweep_orphans()

        assert removed == 5
        assert await service.list_for_user(UNLINKED_USER_ID) == []
        assert len(await service.list_for_user(UserId(10))) == 1
        assert len(await service.list_for_user(UserId(11))) == 1

    @pytest.mark.asyncio
    async def test_sweep_on_empty_store(self):
        service = OAuthIdentityService(InMemoryOAuthIdentityRepository())

        assert await service.sweep_orphans() == 0


class TestFindReusableBinding:
    """Tests for OAuthIdentityService.find_reusable_binding()."""

    @pytest.mark.asyncio
    async def test_ignores_providers_outside_the_reuse_set(self):
        repo = InMemoryOAuthIdentityRepository()
        unlinked = await repo.save(make_identity(1, external_user_id="42"))
        await repo.save(
            make_identity(
                2, provider=OAuthProviderKind.LINUXDO, external_user_id="42", user_id=5
            )
        )
        service = OAuthIdentityService(repo)

        assert (
            await service.find_reusable_binding(unlinked, {OAuthProviderKind.GITHUB})
            is None
        )
        found = await service.find_reusable_binding(
            unlinked, {OAuthProviderKind.GITHUB, OAuthProviderKind.LINUXDO}
        )
        assert found.id == 2

    @pytest.mark.asyncio
    async def test_empty_reuse_set_finds_nothing(self):
        repo = InMemoryOAuthIdentityRepository()
        unlinked = await repo.save(make_identity(1))
        service = OAuthIdentityService(repo)

        assert await service.find_reusable_binding(unlinked, frozenset()) is None
