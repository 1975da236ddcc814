"""LinuxDo OAuth adapter."""

from .client import (
    LinuxDoOAuthClient,
    MockLinuxDoOAuthClient,
    RealLinuxDoOAuthClient,
)

__all__ = ["LinuxDoOAuthClient", "RealLinuxDoOAuthClient", "MockLinuxDoOAuthClient"]
