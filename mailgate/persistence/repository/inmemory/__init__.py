"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .oauth_identity import InMemoryOAuthIdentityRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryOAuthIdentityRepository",
    "InMemoryUnitOfWork",
]
