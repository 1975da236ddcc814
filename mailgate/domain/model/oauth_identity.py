"""OAuth identity entity.

Links an external provider identity to a mailbox account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from mailgate.domain.model.common import DomainModel
from mailgate.domain.value import (
    UNLINKED_USER_ID,
    ExternalIdentity,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)


class OAuthIdentity(DomainModel):
    """Persistent record of an external identity and its binding.

    At most one record exists per (provider, external_user_id). `user_id`
    is `UNLINKED_USER_ID` until the identity is bound to an account; such
    records are orphans and are removed by the scheduled sweep.

    The profile fields are a snapshot of the last login.
    """

    id: OAuthIdentityId
    provider: OAuthProviderKind
    external_user_id: str
    user_id: UserId = UNLINKED_USER_ID
    username: str
    display_name: str
    avatar_url: Optional[str] = None
    trust_level: int = 0
    active: bool = False
    silenced: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_linked(self) -> bool:
        """Whether the identity is bound to an account."""
        return self.user_id != UNLINKED_USER_ID

    def with_snapshot(self, identity: ExternalIdentity) -> "OAuthIdentity":
        """Return a copy refreshed with the profile of a new login.

        The binding (`user_id`) is never touched by a snapshot refresh.
        """
        return self.model_copy(
            update={
                "username": identity.username,
                "display_name": identity.display_name,
                "avatar_url": identity.avatar_url,
                "trust_level": identity.trust_level,
                "active": identity.active,
                "silenced": identity.silenced,
                "updated_at": datetime.now(timezone.utc),
            }
        )
