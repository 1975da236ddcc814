"""SQLAlchemy unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from mailgate.domain.repository import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits the request-scoped session shared with the repositories."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        # The session begins a new transaction on its next statement
        await self.session.commit()
