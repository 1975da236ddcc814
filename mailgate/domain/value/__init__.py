"""Domain value objects for mailgate."""

from mailgate.domain.value.identifiers import (
    UNLINKED_USER_ID,
    OAuthIdentityId,
    UserId,
)
from mailgate.domain.value.types import (
    ExternalIdentity,
    OAuthProviderKind,
    ProviderCapabilities,
)

__all__ = [
    # Identifiers
    "UserId",
    "OAuthIdentityId",
    "UNLINKED_USER_ID",
    # Types
    "OAuthProviderKind",
    "ExternalIdentity",
    "ProviderCapabilities",
]
