"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from mailgate.domain.model import Account, OAuthIdentity
from mailgate.domain.value import (
    ExternalIdentity,
    OAuthIdentityId,
    OAuthProviderKind,
    UserId,
)


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        user_id=UserId(row["user_id"]),
        email=row["email"],
        is_del=bool(row["is_del"]),
        created_at=row["created_at"],
    )


def row_to_oauth_identity(row: Dict[str, Any]) -> OAuthIdentity:
    """Convert database row to OAuthIdentity domain model.

    Args:
        row: Database row as dict

    Returns:
        OAuthIdentity domain model
    """
    return OAuthIdentity(
        id=OAuthIdentityId(row["id"]),
        provider=OAuthProviderKind(row["provider"]),
        external_user_id=row["external_user_id"],
        user_id=UserId(row["user_id"]),
        username=row["username"],
        display_name=row["display_name"],
        avatar_url=row.get("avatar_url"),
        trust_level=row["trust_level"],
        active=bool(row["active"]),
        silenced=bool(row["silenced"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def external_identity_snapshot(identity: ExternalIdentity) -> Dict[str, Any]:
    """Profile columns refreshed on every login.

    Args:
        identity: Normalized external identity

    Returns:
        Dict of snapshot columns (no key or binding columns)
    """
    return identity.model_dump(
        include={
            "username",
            "display_name",
            "avatar_url",
            "trust_level",
            "active",
            "silenced",
        }
    )
