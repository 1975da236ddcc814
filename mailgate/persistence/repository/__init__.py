"""PostgreSQL repository implementations."""

from mailgate.persistence.repository.account import PostgresAccountRepository
from mailgate.persistence.repository.oauth_identity import (
    PostgresOAuthIdentityRepository,
)
from mailgate.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "PostgresAccountRepository",
    "PostgresOAuthIdentityRepository",
    "SqlAlchemyUnitOfWork",
]
