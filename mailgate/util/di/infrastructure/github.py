"""GitHub infrastructure providers."""

from dishka import Scope, provide

from mailgate.adapter.github import GitHubOAuthClient, RealGitHubOAuthClient
from mailgate.config import Settings
from mailgate.util.di.base import ProviderBase
from mailgate.util.error import ConfigurationError


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self, settings: Settings) -> GitHubOAuthClient:
        """Provide GitHub OAuth client.

        Returns:
            GitHub OAuth client

        Raises:
            ConfigurationError: If GitHub OAuth credentials are not configured
        """
        github = settings.oauth.github
        if not github.client_id:
            raise ConfigurationError("GitHub OAuth client ID must be configured")
        if not github.client_secret:
            raise ConfigurationError("GitHub OAuth client secret must be configured")

        return RealGitHubOAuthClient(
            client_id=github.client_id,
            client_secret=github.client_secret,
            redirect_uri=settings.oauth.github_callback_url,
            token_url=github.token_url,
            profile_url=github.profile_url,
            reuse_bindings_from=github.reuse_bindings_from,
            timeout=settings.oauth.timeout_seconds,
        )
