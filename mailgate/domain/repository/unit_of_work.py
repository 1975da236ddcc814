"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary of the current request.

    The request commits its writes when it finishes cleanly and discards
    them otherwise. `commit` makes the writes so far durable early, so a
    later failure in the same request no longer undoes them.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Make every write issued so far durable."""
        pass
