"""Mock providers for testing."""

from .github import MockGitHubProvider
from .linuxdo import MockLinuxDoProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockGitHubProvider",
    "MockLinuxDoProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
