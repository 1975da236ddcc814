"""Email suggestion domain service."""

import random

import logfire

from .account_service import AccountService
from .base import Service

# Tried in order before falling back to random numeric suffixes
SUGGESTION_SUFFIXES = ("a", "b", "c", "2025", "123")
MAX_SUGGESTIONS = 3
MAX_RANDOM_ATTEMPTS = 10


class EmailSuggestionService(Service):
    """Generates free mailbox addresses when the default one is taken."""

    def __init__(
        self,
        account_service: AccountService,
        domain: str,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize suggestion service.

        Args:
            account_service: Account service for availability checks
            domain: Mailbox domain of the suggested addresses
            rng: Random source for numeric suffixes (seed it in tests)
        """
        self.account_service = account_service
        self.domain = domain
        self.rng = rng or random.Random()

    def address_for(self, local_part: str) -> str:
        """Build a mailbox address on the configured domain."""
        return f"{local_part}@{self.domain}"

    async def suggest(self, username: str) -> list[str]:
        """Suggest up to three free addresses derived from a username.

        Fixed suffixes are tried first, in order, so the first part of the
        result is stable for a given username and account table. If fewer
        than three are free, up to ten random numeric suffixes (0-999) are
        tried. The result may hold fewer than three addresses.

        Args:
            username: Provider username used as the local part stem

        Returns:
            Free addresses, at most three
        """
        with logfire.span("email_suggestion_service.suggest", username=username):
            suggestions: list[str] = []

            for suffix in SUGGESTION_SUFFIXES:
                email = self.address_for(f"{username}{suffix}")
                if not await self.account_service.is_email_taken(email):
                    suggestions.append(email)
                if len(suggestions) >= MAX_SUGGESTIONS:
                    break

            attempts = 0
            while len(suggestions) < MAX_SUGGESTIONS and attempts < MAX_RANDOM_ATTEMPTS:
                attempts += 1
                email = self.address_for(f"{username}{self.rng.randint(0, 999)}")
                if email in suggestions:
                    continue
                if not await self.account_service.is_email_taken(email):
                    suggestions.append(email)

            logfire.info(
                "Email suggestions generated",
                username=username,
                count=len(suggestions),
                random_attempts=attempts,
            )
            return suggestions
