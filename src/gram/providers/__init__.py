"""Settings provider implementations and factory."""

from gram.providers.factory import available_providers, create_provider, register

__all__ = ["available_providers", "create_provider", "register"]
