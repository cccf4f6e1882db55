"""Public API surface for gram."""

__version__ = "0.3.0"

from gram.auth import TokenResolver, create_token_resolver
from gram.config import build_config, load_config
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
from gram.contracts.settings import SettingsRecord, SettingValue
from gram.diff import compare, format_diff_report
from gram.progress import DiffProgress
from gram.providers import create_provider
from gram.sdk import Gram, diff_settings
from gram.settings import load_desired, parse_desired

__all__ = [
    "AuthenticationError",
    "ConfigError",
    "DiffProgress",
    "DiffResult",
    "FieldDiff",
    "Gram",
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
    "TokenResolver",
    "TransientError",
    "__version__",
    "build_config",
    "compare",
    "create_provider",
    "create_token_resolver",
    "diff_settings",
    "format_diff_report",
    "load_config",
    "load_desired",
    "parse_desired",
]
