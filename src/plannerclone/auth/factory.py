"""Token resolver factory."""

from __future__ import annotations

from urllib.parse import urlparse

from plannerclone.auth.base import TokenResolver
from plannerclone.auth.resolvers.azure_cli import AzureCliTokenResolver
from plannerclone.auth.resolvers.env import EnvTokenResolver
from plannerclone.auth.resolvers.static import StaticTokenResolver
from plannerclone.contracts.config import CloneConfig
from plannerclone.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "azure-cli": AzureCliTokenResolver,
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def _resource_from_base_url(base_url: str) -> str:
    parsed = urlparse(base_url.strip())
    if parsed.scheme and parsed.hostname:
        return f"{parsed.scheme}://{parsed.hostname}"
    return "https://graph.microsoft.com"


def create_token_resolver(config: CloneConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "azure-cli":
        return AzureCliTokenResolver(resource=_resource_from_base_url(config.graph_base_url))
    if auth_mode == "env":
        return EnvTokenResolver()
    return StaticTokenResolver(token=config.token or "")
