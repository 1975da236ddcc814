"""Repository interfaces for mailgate.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from mailgate.domain.repository.account import AccountRepository
from mailgate.domain.repository.oauth_identity import OAuthIdentityRepository
from mailgate.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "OAuthIdentityRepository",
    "UnitOfWork",
]
