"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AlreadyBoundError(DomainError):
    """Raised when binding an identity that already resolves to a live account."""

    def __init__(self, oauth_identity_id: int, user_id: int):
        self.oauth_identity_id = oauth_identity_id
        self.user_id = user_id
        super().__init__(
            f"OAuth identity {oauth_identity_id} is already bound to account {user_id}"
        )


class DeletedEmailError(DomainError):
    """Raised when a bind targets an email owned by a soft-deleted account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email belongs to a deleted account: {email}")


class AccountDeletedError(DomainError):
    """Raised when a session is requested for a soft-deleted account."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Account {user_id} has been deleted")


class UnsupportedProviderError(DomainError):
    """Raised when no OAuth client is configured for a provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


class RegistrationCodeError(DomainError):
    """Raised when account registration requires a code and it is invalid."""

    pass
