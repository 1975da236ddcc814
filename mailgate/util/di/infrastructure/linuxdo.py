"""LinuxDo infrastructure providers."""

from dishka import Scope, provide

from mailgate.adapter.linuxdo import LinuxDoOAuthClient, RealLinuxDoOAuthClient
from mailgate.config import Settings
from mailgate.util.di.base import ProviderBase
from mailgate.util.error import ConfigurationError


class LinuxDoProvider(ProviderBase):
    """LinuxDo component base."""

    __mock_component__ = "linuxdo"


class ProdLinuxDoProvider(LinuxDoProvider):
    """Production LinuxDo provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_linuxdo_oauth_client(self, settings: Settings) -> LinuxDoOAuthClient:
        """Provide LinuxDo OAuth client.

        Raises:
            ConfigurationError: If LinuxDo OAuth credentials are not configured
        """
        linuxdo = settings.oauth.linuxdo
        if not linuxdo.client_id or not linuxdo.client_secret:
            raise ConfigurationError("LinuxDo OAuth credentials must be configured")

        return RealLinuxDoOAuthClient(
            client_id=linuxdo.client_id,
            client_secret=linuxdo.client_secret,
            redirect_uri=settings.oauth.linuxdo_callback_url,
            token_url=linuxdo.token_url,
            profile_url=linuxdo.profile_url,
            timeout=settings.oauth.timeout_seconds,
        )
