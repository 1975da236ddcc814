"""Domain model entities for mailgate."""

from mailgate.domain.model.account import Account
from mailgate.domain.model.oauth_identity import OAuthIdentity
from mailgate.domain.model.resolution import (
    LinkedExisting,
    NeedsSuggestions,
    ResolutionOutcome,
)

__all__ = [
    "Account",
    "OAuthIdentity",
    "LinkedExisting",
    "NeedsSuggestions",
    "ResolutionOutcome",
]
