"""OAuth reconciliation use cases."""

from .bind_user import BindUserUseCase
from .login import LoginUseCase
from .purge_account_identities import PurgeAccountIdentitiesUseCase
from .sweep_orphans import SweepOrphansUseCase
from .unbind import UnbindUseCase

__all__ = [
    "BindUserUseCase",
    "LoginUseCase",
    "PurgeAccountIdentitiesUseCase",
    "SweepOrphansUseCase",
    "UnbindUseCase",
]
