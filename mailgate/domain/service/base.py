"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services here own the OAuth reconciliation rules: recording logins,
    resolving identities to accounts, and suggesting addresses. They talk to
    storage only through repository interfaces.
    """
