"""Concrete token resolvers."""

from plannerclone.auth.resolvers.azure_cli import AzureCliTokenResolver
from plannerclone.auth.resolvers.env import EnvTokenResolver
from plannerclone.auth.resolvers.static import StaticTokenResolver

__all__ = ["AzureCliTokenResolver", "EnvTokenResolver", "StaticTokenResolver"]
