"""Token resolver factory."""

from __future__ import annotations

from urllib.parse import urlparse

from gram.auth.base import TokenResolver
from gram.auth.resolvers.env import EnvTokenResolver
from gram.auth.resolvers.gh_cli import GhCliTokenResolver
from gram.auth.resolvers.static import StaticTokenResolver
from gram.contracts.config import GramConfig
from gram.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "gh-cli": GhCliTokenResolver,
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def _hostname_from_api_url(api_url: str) -> str:
    hostname = urlparse(api_url.strip()).hostname
    if not hostname:
        return "github.com"
    if hostname.startswith("api."):
        return hostname.removeprefix("api.")
    return hostname


def create_token_resolver(config: GramConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "gh-cli":
        return GhCliTokenResolver(hostname=_hostname_from_api_url(config.api_url))
    if auth_mode == "env":
        return EnvTokenResolver()
    return StaticTokenResolver(token=config.token or "")
