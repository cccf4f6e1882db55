"""Exception hierarchy for gram.

All gram exceptions inherit from :class:`GramError`, so callers can catch
any library failure with one ``except`` clause while still handling the
loader and provider failure families separately.
"""

from __future__ import annotations


class GramError(Exception):
    """Base exception for all gram errors."""


class ConfigError(GramError):
    """Configuration loading or validation failure."""


class SettingsLoadError(GramError):
    """Desired settings document could not be loaded."""


class IoError(SettingsLoadError):
    """Settings document path is missing or unreadable."""


class ParseError(SettingsLoadError):
    """Settings document is malformed or holds unsupported values."""


class ProviderError(GramError):
    """Base provider operation failure."""


class AuthenticationError(ProviderError):
    """Credential is missing, invalid or lacks access."""


class NotFoundError(ProviderError):
    """Repository or owner does not exist."""


class RateLimitError(ProviderError):
    """Provider refused the request because of rate limiting."""

    def __init__(self, message: str, *, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class TransientError(ProviderError):
    """Server-side or transport failure that may succeed on retry."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
