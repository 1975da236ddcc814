"""Account resolver domain service.

Decides which account, if any, an external identity signs in to.
"""

import logfire

from mailgate.domain.model import (
    LinkedExisting,
    NeedsSuggestions,
    OAuthIdentity,
    ResolutionOutcome,
)
from mailgate.domain.repository import UnitOfWork
from mailgate.domain.value import ExternalIdentity

from .account_service import AccountService
from .base import Service
from .oauth_identity_service import OAuthIdentityService
from .provider_gateway import ProviderGateway
from .suggestion_service import EmailSuggestionService


class AccountResolver(Service):
    """Resolves an external identity to an account or to a set of suggestions.

    Resolution order (first match wins):

    1. Record the login (create the identity unlinked, or refresh its
       snapshot) and commit it. This write is kept even if no account is
       found or the login fails later on.
    2. An identity bound to an existing account, soft-deleted included,
       resolves to that account.
    3. For providers that reuse bindings, an unresolved identity adopts the
       account of another record bound to the same external user ID.
    4. Otherwise the user must choose an address: the default
       `{username}@{domain}` is checked and alternatives are suggested when
       it is taken.
    """

    def __init__(
        self,
        oauth_identity_service: OAuthIdentityService,
        account_service: AccountService,
        suggestion_service: EmailSuggestionService,
        provider_gateway: ProviderGateway,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize account resolver.

        Args:
            oauth_identity_service: OAuth identity domain service
            account_service: Account domain service
            suggestion_service: Email suggestion domain service
            provider_gateway: Provider gateway, for provider capabilities
            unit_of_work: Transaction boundary of the request
        """
        self.oauth_identity_service = oauth_identity_service
        self.account_service = account_service
        self.suggestion_service = suggestion_service
        self.provider_gateway = provider_gateway
        self.unit_of_work = unit_of_work

    async def resolve(self, identity: ExternalIdentity) -> ResolutionOutcome:
        """Resolve an external identity.

        Args:
            identity: Normalized identity from the provider

        Returns:
            LinkedExisting when an account was found, NeedsSuggestions otherwise
        """
        with logfire.span(
            "account_resolver.resolve",
            provider=identity.provider.value,
            external_user_id=identity.external_user_id,
        ):
            record = await self.oauth_identity_service.record_login(identity)
            await self.unit_of_work.commit()

            outcome = await self._resolve_bound(record)
            if outcome:
                return outcome

            outcome = await self._resolve_reused(record)
            if outcome:
                return outcome

            return await self._needs_suggestions(record)

    async def _resolve_bound(self, record: OAuthIdentity) -> LinkedExisting | None:
        if not record.is_linked:
            return None

        account = await self.account_service.get_by_id(
            record.user_id, include_deleted=True
        )
        if not account:
            # Bound account is gone entirely; fall through to re-link
            logfire.warn(
                "Identity bound to missing account",
                identity_id=record.id,
                user_id=record.user_id,
            )
            return None

        logfire.info(
            "Identity resolved to bound account",
            identity_id=record.id,
            user_id=account.user_id,
        )
        return LinkedExisting(identity=record, account=account)

    async def _resolve_reused(self, record: OAuthIdentity) -> LinkedExisting | None:
        capabilities = self.provider_gateway.capabilities(record.provider)
        if not capabilities.reuses_bindings:
            return None

        binding = await self.oauth_identity_service.find_reusable_binding(
            record, capabilities.reuse_bindings_from
        )
        if not binding:
            return None

        account = await self.account_service.get_by_id(
            binding.user_id, include_deleted=True
        )
        if not account:
            return None

        relinked = await self.oauth_identity_service.bind(record.id, account.user_id)
        logfire.info(
            "Identity re-linked from recorded binding",
            identity_id=record.id,
            source_identity_id=binding.id,
            source_provider=binding.provider.value,
            user_id=account.user_id,
        )
        return LinkedExisting(identity=relinked, account=account)

    async def _needs_suggestions(self, record: OAuthIdentity) -> NeedsSuggestions:
        default_email = self.suggestion_service.address_for(record.username)
        available = not await self.account_service.is_email_taken(default_email)
        suggestions: list[str] = []
        if not available:
            suggestions = await self.suggestion_service.suggest(record.username)

        logfire.info(
            "Identity has no account",
            identity_id=record.id,
            default_email=default_email,
            available=available,
            suggestion_count=len(suggestions),
        )
        return NeedsSuggestions(
            identity=record,
            default_email=default_email,
            available=available,
            suggestions=suggestions,
        )
