"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class UpstreamAuthError(ProviderError):
    """Authorization code could not be exchanged for an access token."""

    pass


class UpstreamProfileError(ProviderError):
    """User profile could not be fetched or understood."""

    pass
