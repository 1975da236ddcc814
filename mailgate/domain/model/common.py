"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for persisted domain entities.

    Entities are immutable; changes produce copies (`model_copy`) that the
    repositories write back.
    """

    model_config = ConfigDict(frozen=True)
