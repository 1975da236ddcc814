"""Mock persistence providers for testing."""

from dishka import Scope, provide

from mailgate.domain.repository import (
    AccountRepository,
    OAuthIdentityRepository,
    UnitOfWork,
)
from mailgate.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryOAuthIdentityRepository,
    InMemoryUnitOfWork,
)
from mailgate.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()

    @provide(scope=Scope.REQUEST)
    def get_oauth_identity_repository(self) -> OAuthIdentityRepository:
        """Provide in-memory OAuth identity repository."""
        return InMemoryOAuthIdentityRepository()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self) -> UnitOfWork:
        """Provide in-memory unit of work."""
        return InMemoryUnitOfWork()
