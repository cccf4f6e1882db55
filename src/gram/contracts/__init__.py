"""Contract exports."""

from gram.contracts.config import GramConfig
from gram.contracts.diff import DiffResult, FieldDiff
from gram.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    GramError,
    IoError,
    NotFoundError,
    ParseError,
    ProviderError,
    RateLimitError,
    SettingsLoadError,
    TransientError,
)
from gram.contracts.provider import SettingsProvider
from gram.contracts.settings import DESCRIPTION_KEY, SettingsRecord, SettingValue

__all__ = [
    "DESCRIPTION_KEY",
    "AuthenticationError",
    "ConfigError",
    "DiffResult",
    "FieldDiff",
    "GramConfig",
    "GramError",
    "IoError",
    "NotFoundError",
    "ParseError",
    "ProviderError",
    "RateLimitError",
    "SettingValue",
    "SettingsLoadError",
    "SettingsProvider",
    "SettingsRecord",
    "TransientError",
]
