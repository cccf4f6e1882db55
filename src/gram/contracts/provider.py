"""Settings provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from gram.contracts.settings import SettingsRecord


class SettingsProvider(ABC):
    """Fetches live repository settings from a hosting service.

    Implementations translate the service's native schema into the shared
    dotted-key space before returning, so the comparator never sees
    provider-specific field names.
    """

    @abstractmethod
    async def __aenter__(self) -> SettingsProvider: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def fetch_settings(self, owner: str, repo: str) -> SettingsRecord: ...  # pragma: no cover
