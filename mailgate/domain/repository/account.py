"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from mailgate.domain.model.account import Account
from mailgate.domain.value import UserId


class AccountRepository(ABC):
    """Repository for mailbox accounts.

    Lookups return None when no account matches. Any other failure of the
    backing store is raised, never reported as "not found".
    """

    @abstractmethod
    async def find_by_id(
        self, user_id: UserId, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by ID.

        Args:
            user_id: The account's unique identifier
            include_deleted: Whether soft-deleted accounts match

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(
        self, email: str, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by email address.

        Args:
            email: The mailbox address
            include_deleted: Whether soft-deleted accounts match

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, email: str, password_hash: str) -> Account:
        """Create a new live account.

        Args:
            email: The mailbox address
            password_hash: Hash of the generated password

        Returns:
            The created account with its assigned ID
        """
        pass
