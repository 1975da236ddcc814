"""Bind OAuth identity to a mailbox use case."""

import logfire
from pydantic import BaseModel

from mailgate.application.usecase.base import BaseUseCase
from mailgate.application.usecase.oauth.common import OAuthIdentityInfo
from mailgate.domain.error import AlreadyBoundError, DeletedEmailError, NotFoundError
from mailgate.domain.service import (
    AccountService,
    OAuthIdentityService,
    SessionService,
)
from mailgate.domain.value import OAuthIdentityId


class BindUserRequest(BaseModel):
    """Bind request: attach an unlinked identity to a mailbox address."""

    oauth_identity_id: int
    email: str
    registration_code: str | None = None  # Needed when the address is new


class BindUserResponse(BaseModel):
    """Bind response."""

    identity: OAuthIdentityInfo
    token: str
    user_id: int
    created_account: bool


class BindUserUseCase(BaseUseCase[BindUserRequest, BindUserResponse]):
    """Use case for binding an OAuth identity to an existing or new account."""

    def __init__(
        self,
        oauth_identity_service: OAuthIdentityService,
        account_service: AccountService,
        session_service: SessionService,
    ) -> None:
        """Initialize bind use case.

        Args:
            oauth_identity_service: OAuth identity domain service
            account_service: Account domain service
            session_service: Session token domain service
        """
        self.oauth_identity_service = oauth_identity_service
        self.account_service = account_service
        self.session_service = session_service

    async def execute(self, request: BindUserRequest) -> BindUserResponse:
        """Execute bind flow.

        Steps:
        1. Load the identity; refuse if it already resolves to a live account
        2. Address held by a live account: bind to it
        3. Address held by a soft-deleted account: refuse
        4. Address free: register a new account, then bind
        5. Issue a session

        Args:
            request: Bind request

        Returns:
            Bound identity and session token

        Raises:
            NotFoundError: If the identity does not exist
            AlreadyBoundError: If the identity is bound to a live account
            DeletedEmailError: If the address belongs to a deleted account
            RegistrationCodeError: If registration needs a valid code
        """
        identity_id = OAuthIdentityId(request.oauth_identity_id)

        with logfire.span(
            "bind_oauth_identity", identity_id=identity_id, email=request.email
        ):
            identity = await self.oauth_identity_service.get_by_id(identity_id)
            if not identity:
                raise NotFoundError("OAuthIdentity", str(identity_id))

            if identity.is_linked:
                bound = await self.account_service.get_by_id(identity.user_id)
                if bound:
                    logfire.warn(
                        "Bind rejected - identity already bound",
                        identity_id=identity_id,
                        user_id=bound.user_id,
                    )
                    raise AlreadyBoundError(identity_id, bound.user_id)

            account = await self.account_service.get_by_email(
                request.email, include_deleted=True
            )
            created_account = False
            if account and account.is_del:
                logfire.warn(
                    "Bind rejected - email belongs to deleted account",
                    identity_id=identity_id,
                    email=request.email,
                )
                raise DeletedEmailError(request.email)
            if not account:
                account = await self.account_service.register_account(
                    request.email, request.registration_code
                )
                created_account = True

            bound_identity = await self.oauth_identity_service.bind(
                identity_id, account.user_id
            )
            token = self.session_service.issue_session(account)

            logfire.info(
                "OAuth identity bound",
                identity_id=identity_id,
                user_id=account.user_id,
                created_account=created_account,
            )
            return BindUserResponse(
                identity=OAuthIdentityInfo.from_identity(bound_identity),
                token=token,
                user_id=account.user_id,
                created_account=created_account,
            )
