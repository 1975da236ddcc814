"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mailgate.domain.model import Account
from mailgate.domain.repository import AccountRepository
from mailgate.domain.value import UserId
from mailgate.persistence.mappers import row_to_account
from mailgate.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, user_id: UserId, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by ID.

        Args:
            user_id: Account ID to look up
            include_deleted: Whether soft-deleted accounts match

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.user_id == user_id)
        if not include_deleted:
            stmt = stmt.where(accounts_table.c.is_del.is_(False))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(
        self, email: str, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by email.

        A live account wins over soft-deleted ones holding the same address.

        Args:
            email: Email to search for
            include_deleted: Whether soft-deleted accounts match

        Returns:
            Account if found, None otherwise
        """
        stmt = (
            select(accounts_table)
            .where(accounts_table.c.email == email)
            .order_by(accounts_table.c.is_del, accounts_table.c.user_id)
        )
        if not include_deleted:
            stmt = stmt.where(accounts_table.c.is_del.is_(False))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def create(self, email: str, password_hash: str) -> Account:
        """Insert a new live account.

        Args:
            email: Mailbox address
            password_hash: Hash of the generated password

        Returns:
            Created account
        """
        stmt = (
            accounts_table.insert()
            .values(email=email, password_hash=password_hash, is_del=False)
            .returning(accounts_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_account(dict(row))
