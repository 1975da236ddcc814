"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

from mailgate.domain.model import OAuthIdentity
from mailgate.domain.value import (
    UNLINKED_USER_ID,
    ExternalIdentity,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)


def make_identity(
    identity_id: int,
    provider: OAuthProviderKind = OAuthProviderKind.GITHUB,
    external_user_id: str = "42",
    user_id: int = UNLINKED_USER_ID,
    username: str = "octocat",
    age_minutes: int = 0,
) -> OAuthIdentity:
    """Helper to build a stored OAuth identity for seeding repositories.

    Args:
        identity_id: Record ID
        provider: OAuth provider
        external_user_id: Provider-side user ID
        user_id: Bound account, 0 for unlinked
        username: Provider username
        age_minutes: How long ago the record was created (orders bindings)

    Returns:
        OAuthIdentity ready to `save()` into an in-memory repository
    """
    created_at = datetime.now(timezone.utc) - timedelta(minutes=age_minutes)
    return OAuthIdentity(
        id=OAuthIdentityId(identity_id),
        provider=provider,
        external_user_id=external_user_id,
        user_id=UserId(user_id),
        username=username,
        display_name=username.title(),
        created_at=created_at,
        updated_at=created_at,
    )


def make_external(
    provider: OAuthProviderKind = OAuthProviderKind.GITHUB,
    external_user_id: str = "42",
    username: str = "octocat",
    **fields,
) -> ExternalIdentity:
    """Helper to build a normalized identity as a provider would return it."""
    return ExternalIdentity(
        provider=provider,
        external_user_id=external_user_id,
        username=username,
        display_name=fields.pop("display_name", username.title()),
        **fields,
    )
