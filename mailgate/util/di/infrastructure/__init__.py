"""Infrastructure providers."""

# Import bases
from .github import GitHubProvider
from .linuxdo import LinuxDoProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .github import ProdGitHubProvider  # noqa: F401
from .linuxdo import ProdLinuxDoProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "GitHubProvider",
    "LinuxDoProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdGitHubProvider",
    "ProdLinuxDoProvider",
    "ProdPersistenceProvider",
]
