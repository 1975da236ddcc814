"""Account domain service."""

import hashlib
import secrets

import logfire

from mailgate.config import RegistrationSettings
from mailgate.domain.error import RegistrationCodeError
from mailgate.domain.model.account import Account
from mailgate.domain.repository.account import AccountRepository
from mailgate.domain.value import UserId

from .base import Service


def generate_password() -> str:
    """Generate a random password for accounts created through OAuth."""
    return secrets.token_urlsafe(24)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class AccountService(Service):
    """Domain service for mailbox account lookups and registration."""

    def __init__(
        self,
        account_repository: AccountRepository,
        registration_settings: RegistrationSettings,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            registration_settings: Registration configuration
        """
        self.account_repository = account_repository
        self.registration_settings = registration_settings

    async def get_by_id(
        self, user_id: UserId, include_deleted: bool = False
    ) -> Account | None:
        """Get account by ID.

        Args:
            user_id: Account ID
            include_deleted: Whether soft-deleted accounts match

        Returns:
            Account if found, None otherwise
        """
        with logfire.span(
            "account_service.get_by_id",
            user_id=user_id,
            include_deleted=include_deleted,
        ):
            account = await self.account_repository.find_by_id(
                user_id, include_deleted=include_deleted
            )
            if account:
                logfire.info("Account found", user_id=user_id, is_del=account.is_del)
            else:
                logfire.warn("Account not found", user_id=user_id)
            return account

    async def get_by_email(
        self, email: str, include_deleted: bool = False
    ) -> Account | None:
        """Get account by email.

        Args:
            email: Mailbox address
            include_deleted: Whether soft-deleted accounts match

        Returns:
            Account if found, None otherwise
        """
        with logfire.span(
            "account_service.get_by_email",
            email=email,
            include_deleted=include_deleted,
        ):
            return await self.account_repository.find_by_email(
                email, include_deleted=include_deleted
            )

    async def is_email_taken(self, email: str) -> bool:
        """Check whether any account, live or soft-deleted, holds an address."""
        account = await self.account_repository.find_by_email(
            email, include_deleted=True
        )
        return account is not None

    async def register_account(
        self, email: str, registration_code: str | None
    ) -> Account:
        """Register a new account for an OAuth user.

        The account gets a random password; the user signs in through the
        bound OAuth identity.

        Args:
            email: Mailbox address for the new account
            registration_code: Registration code supplied by the user

        Returns:
            The created account

        Raises:
            RegistrationCodeError: If a code is required and not valid
        """
        with logfire.span("account_service.register_account", email=email):
            if self.registration_settings.require_code and (
                registration_code not in self.registration_settings.codes
            ):
                logfire.warn("Registration rejected - invalid code", email=email)
                raise RegistrationCodeError("Invalid registration code")

            account = await self.account_repository.create(
                email, hash_password(generate_password())
            )
            logfire.info("Account registered", user_id=account.user_id, email=email)
            return account
