"""Domain services."""

from .account_resolver import AccountResolver
from .account_service import AccountService
from .base import Service
from .oauth_identity_service import OAuthIdentityService
from .provider_gateway import OAuthClient, ProviderGateway
from .session_service import SessionService
from .suggestion_service import EmailSuggestionService

__all__ = [
    "AccountResolver",
    "AccountService",
    "EmailSuggestionService",
    "OAuthClient",
    "OAuthIdentityService",
    "ProviderGateway",
    "Service",
    "SessionService",
]
