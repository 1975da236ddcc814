"""Session token domain service."""

import logfire

from mailgate.config import AuthSettings
from mailgate.domain.error import AccountDeletedError
from mailgate.domain.model.account import Account
from mailgate.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class SessionService(Service):
    """Issues and verifies session tokens for resolved accounts."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def issue_session(self, account: Account) -> str:
        """Issue a session token for an account.

        Args:
            account: Resolved account

        Returns:
            JWT token string

        Raises:
            AccountDeletedError: If the account is soft-deleted
        """
        with logfire.span("session_service.issue_session", user_id=account.user_id):
            if account.is_del:
                logfire.warn(
                    "Session refused for deleted account", user_id=account.user_id
                )
                raise AccountDeletedError(account.user_id)
            token = create_token(account.user_id, account.email, self.auth_settings)
            logfire.info("Session issued", user_id=account.user_id)
            return token

    def verify_session(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("session_service.verify_session"):
            try:
                return verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.error("Session verification failed", error=str(e))
                raise
