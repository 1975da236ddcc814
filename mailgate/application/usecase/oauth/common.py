"""Response shapes shared by the OAuth use cases."""

from datetime import datetime

from pydantic import BaseModel

from mailgate.domain.model import OAuthIdentity
from mailgate.domain.value import OAuthProviderKind


class OAuthIdentityInfo(BaseModel):
    """OAuth identity information for responses."""

    oauth_identity_id: int
    provider: OAuthProviderKind
    external_user_id: str
    user_id: int
    username: str
    display_name: str
    avatar_url: str | None
    trust_level: int
    active: bool
    silenced: bool
    updated_at: datetime

    @classmethod
    def from_identity(cls, identity: OAuthIdentity) -> "OAuthIdentityInfo":
        """Build response info from a stored identity."""
        return cls(
            oauth_identity_id=identity.id,
            provider=identity.provider,
            external_user_id=identity.external_user_id,
            user_id=identity.user_id,
            username=identity.username,
            display_name=identity.display_name,
            avatar_url=identity.avatar_url,
            trust_level=identity.trust_level,
            active=identity.active,
            silenced=identity.silenced,
            updated_at=identity.updated_at,
        )
