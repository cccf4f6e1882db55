"""Progress reporting protocol for the diff pipeline.

The SDK emits phase lifecycle events (``Load``, ``Fetch``, ``Compare``);
consumers such as the CLI's Rich display implement ``DiffProgress``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class DiffProgress(ABC):
    """Observer interface for diff pipeline progress events."""

    @abstractmethod
    def phase_start(self, phase: str) -> None:
        """A pipeline phase is starting."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str) -> None:
        """The *phase* has finished successfully."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """The *phase* was interrupted by *error*."""
        ...  # pragma: no cover


class NullDiffProgress(DiffProgress):
    """No-op implementation used when no progress display is requested."""

    def phase_start(self, phase: str) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
