"""OAuth infrastructure provider for multi-provider login."""

from dishka import Scope, provide

from mailgate.adapter.github import GitHubOAuthClient
from mailgate.adapter.linuxdo import LinuxDoOAuthClient
from mailgate.domain.service import OAuthClient
from mailgate.domain.value import OAuthProviderKind
from mailgate.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        github_oauth_client: GitHubOAuthClient,
        linuxdo_oauth_client: LinuxDoOAuthClient,
    ) -> dict[OAuthProviderKind, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        Args:
            github_oauth_client: GitHub OAuth client (specific type)
            linuxdo_oauth_client: LinuxDo OAuth client (specific type)

        Returns:
            Dictionary mapping OAuthProviderKind to OAuthClient
        """
        return {
            OAuthProviderKind.GITHUB: github_oauth_client,
            OAuthProviderKind.LINUXDO: linuxdo_oauth_client,
        }
