"""Outcomes of resolving an external identity to an account."""

from typing import Union

from pydantic import Field

from mailgate.domain.model.account import Account
from mailgate.domain.model.common import DomainModel
from mailgate.domain.model.oauth_identity import OAuthIdentity


class LinkedExisting(DomainModel):
    """The identity resolves to an account; a session can be issued."""

    identity: OAuthIdentity
    account: Account


class NeedsSuggestions(DomainModel):
    """The identity has no account; the user must pick an address first.

    `available` tells whether `default_email` is free. When it is not,
    `suggestions` holds up to three free alternatives.
    """

    identity: OAuthIdentity
    default_email: str
    available: bool
    suggestions: list[str] = Field(default_factory=list)


ResolutionOutcome = Union[LinkedExisting, NeedsSuggestions]
