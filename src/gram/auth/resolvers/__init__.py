"""Concrete token resolvers."""

from gram.auth.resolvers.env import EnvTokenResolver
from gram.auth.resolvers.gh_cli import GhCliTokenResolver
from gram.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "GhCliTokenResolver", "StaticTokenResolver"]
