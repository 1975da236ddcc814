"""Strongly typed identifiers for mailgate entities.

Both identifiers are integer surrogate keys. Account ids are owned by the
account store; `UNLINKED_USER_ID` marks an OAuth identity that is not bound
to any account yet.
"""

from typing import NewType

UserId = NewType("UserId", int)
OAuthIdentityId = NewType("OAuthIdentityId", int)

UNLINKED_USER_ID = UserId(0)
