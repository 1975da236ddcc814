"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One request-scoped operation exposed to the interface layer."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
