"""Domain value objects for mailgate.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field, field_validator

from mailgate.domain.value.common import ValueObject


class OAuthProviderKind(str, Enum):
    """Supported OAuth providers."""

    GITHUB = "github"
    LINUXDO = "linuxdo"


class ExternalIdentity(ValueObject):
    """A user as reported by an OAuth provider, normalized.

    Produced fresh on every login and never persisted as-is; the identity
    store keeps a snapshot of these fields on the OAuth identity record.
    """

    provider: OAuthProviderKind
    external_user_id: str  # Stable id on the provider (stringified)
    username: str
    display_name: str
    avatar_url: str | None = None
    trust_level: int = 0  # Provider reputation signal, 0 when not reported
    active: bool = False
    silenced: bool = False

    @field_validator("external_user_id", "username")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject empty identifiers."""
        if not v:
            raise ValueError("must not be empty")
        return v


class ProviderCapabilities(ValueObject):
    """Behavioral switches a provider contributes to account resolution."""

    # Whether an unlinked identity from this provider may adopt an account
    # already bound to the same external user id
    reuses_bindings: bool = False

    # Providers whose bindings are eligible for adoption
    reuse_bindings_from: frozenset[OAuthProviderKind] = Field(
        default_factory=frozenset
    )
