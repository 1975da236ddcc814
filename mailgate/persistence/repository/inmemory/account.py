"""In-memory account repository for testing."""

from typing import Optional

from mailgate.domain.model import Account
from mailgate.domain.repository import AccountRepository
from mailgate.domain.value import UserId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[UserId, Account] = {}
        self._password_hashes: dict[UserId, str] = {}

    async def save(self, account: Account) -> Account:
        """Store an account as-is (used to seed test state)."""
        self._accounts[account.user_id] = account
        return account

    async def find_by_id(
        self, user_id: UserId, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by ID."""
        account = self._accounts.get(user_id)
        if account and (include_deleted or account.is_live):
            return account
        return None

    async def find_by_email(
        self, email: str, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by email, preferring live accounts."""
        matches = [
            a
            for a in self._accounts.values()
            if a.email == email and (include_deleted or a.is_live)
        ]
        matches.sort(key=lambda a: (a.is_del, a.user_id))
        return matches[0] if matches else None

    async def create(self, email: str, password_hash: str) -> Account:
        """Create a live account with the next free ID."""
        user_id = UserId(max(self._accounts, default=0) + 1)
        account = Account(user_id=user_id, email=email)
        self._accounts[user_id] = account
        self._password_hashes[user_id] = password_hash
        return account
