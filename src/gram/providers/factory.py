"""Factory for creating settings provider instances.

Decouples provider selection from provider implementation. The SDK uses this
factory to instantiate providers by name, without importing concrete providers.
"""

from __future__ import annotations

from typing import Any

from gram.contracts.provider import SettingsProvider
from gram.providers.github.provider import GitHubProvider

# Registry mapping provider names to their classes
_REGISTRY: dict[str, type[SettingsProvider]] = {
    "github": GitHubProvider,
}


def register(name: str, provider_cls: type[SettingsProvider]) -> None:
    """Register a provider class by name.

    Args:
        name: Provider name (e.g. "github").
        provider_cls: Class implementing the SettingsProvider ABC.
    """
    _REGISTRY[name] = provider_cls


def available_providers() -> list[str]:
    return sorted(_REGISTRY)


def create_provider(name: str, **kwargs: Any) -> SettingsProvider:
    """Create a provider instance by name.

    The returned provider is an async context manager. Use it like:

        async with create_provider("github", token=token) as provider:
            actual = await provider.fetch_settings("owner", "repo")

    Args:
        name: Provider name (must be registered).
        **kwargs: Provider constructor arguments (token, base_url, timeout,
            max_retries).

    Raises:
        ValueError: If the provider name is not registered.
    """
    if name not in _REGISTRY:
        available = ", ".join(available_providers()) or "(none registered)"
        raise ValueError(f"Unknown provider: {name!r}. Available: {available}")

    return _REGISTRY[name](**kwargs)
