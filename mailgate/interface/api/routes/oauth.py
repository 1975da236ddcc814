"""OAuth login and binding routes."""

import logging
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from mailgate.application.usecase.oauth import (
    BindUserUseCase,
    LoginUseCase,
    UnbindUseCase,
)
from mailgate.application.usecase.oauth.bind_user import (
    BindUserRequest,
    BindUserResponse,
)
from mailgate.application.usecase.oauth.login import LoginRequest, LoginResponse
from mailgate.application.usecase.oauth.unbind import UnbindRequest, UnbindResponse
from mailgate.config import Settings
from mailgate.domain.service import SessionService
from mailgate.domain.value import OAuthProviderKind
from mailgate.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth", tags=["oauth"], route_class=DishkaRoute)


class LoginBody(BaseModel):
    """Authorization code handed back by the frontend callback page."""

    code: str


@router.post("/{provider}/login", response_model=LoginResponse)
async def login(
    provider: OAuthProviderKind,
    body: LoginBody,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Complete an OAuth login.

    Returns a session token when the identity resolves to an account.
    Otherwise the response carries the default address, whether it is
    free, and alternatives; the client then calls `PUT /oauth/bind-user`.

    Example:
        POST /oauth/github/login
        {"code": "abc123"}
    """
    logger.info(f"OAuth login: provider={provider.value}")
    return await login_use_case.execute(LoginRequest(provider=provider, code=body.code))


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: OAuthProviderKind,
    code: str,
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Forward the provider redirect to the frontend callback page.

    Example:
        GET /oauth/linuxdo/callback?code=abc123

        Redirects to: {frontend_url}/linuxdo/callback?code=abc123
    """
    redirect_url = (
        f"{settings.api.frontend_url}/{provider.value}/callback?"
        f"{urlencode({'code': code})}"
    )
    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)


@router.put("/bind-user", response_model=BindUserResponse)
async def bind_user(
    request: BindUserRequest,
    bind_user_use_case: FromDishka[BindUserUseCase],
) -> BindUserResponse:
    """Bind an unlinked OAuth identity to a mailbox address.

    An existing live account with that address is reused; a free address
    registers a new account.

    Example:
        PUT /oauth/bind-user
        {"oauth_identity_id": 7, "email": "alice@mail.example.com"}
    """
    logger.info(f"Bind requested: identity={request.oauth_identity_id}")
    return await bind_user_use_case.execute(request)


@router.delete("/{provider}/binding", response_model=UnbindResponse)
async def unbind(
    provider: OAuthProviderKind,
    unbind_use_case: FromDishka[UnbindUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> UnbindResponse:
    """Detach a provider from the signed-in account.

    Requires `Authorization: Bearer <token>`.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        payload = session_service.verify_session(authorization.removeprefix("Bearer "))
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    return await unbind_use_case.execute(
        UnbindRequest(provider=provider, user_id=payload.user_id)
    )
