"""Auth module public exports."""

from gram.auth.base import TokenResolver
from gram.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]
