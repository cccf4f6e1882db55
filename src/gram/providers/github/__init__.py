"""GitHub settings provider."""

from gram.providers.github.mapping import REPOSITORY_SETTINGS, SettingMapping, map_repository
from gram.providers.github.provider import GitHubProvider

__all__ = ["REPOSITORY_SETTINGS", "GitHubProvider", "SettingMapping", "map_repository"]
