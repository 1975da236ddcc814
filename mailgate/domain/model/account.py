"""Mailbox account entity.

Accounts are owned by the account store. OAuth reconciliation reads them to
resolve bindings and only creates them through registration.
"""

from datetime import datetime

from pydantic import Field

from mailgate.domain.model.common import DomainModel
from mailgate.domain.value import UserId


class Account(DomainModel):
    """Mailbox account.

    Soft-deleted accounts keep their row (and their email) so that the
    address stays reserved and cannot be silently reused.
    """

    user_id: UserId
    email: str
    is_del: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_live(self) -> bool:
        """Whether the account has not been soft-deleted."""
        return not self.is_del
