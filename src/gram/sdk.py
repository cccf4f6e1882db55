"""SDK composition root for gram."""

from __future__ import annotations

import logging
from pathlib import Path

from gram.auth import create_token_resolver
from gram.contracts.config import GramConfig
from gram.contracts.diff import DiffResult
from gram.contracts.exceptions import ConfigError
from gram.contracts.provider import SettingsProvider
from gram.contracts.settings import SettingsRecord
from gram.diff.comparator import compare
from gram.progress import DiffProgress, NullDiffProgress
from gram.providers.factory import create_provider
from gram.settings.loader import SettingsLoader

_LOG = logging.getLogger(__name__)


class Gram:
    """gram SDK public API.

    Loads the desired settings, fetches the actual ones and compares them.
    Both records are fully built before comparison; any loader or provider
    error aborts the run.
    """

    def __init__(
        self,
        *,
        config: GramConfig,
        provider: SettingsProvider | None = None,
        loader: SettingsLoader | None = None,
        progress: DiffProgress | None = None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._loader = loader or SettingsLoader()
        self._progress = progress or NullDiffProgress()

    @classmethod
    async def from_config(cls, config: GramConfig, *, progress: DiffProgress | None = None) -> Gram:
        return cls(config=config, progress=progress)

    @property
    def config(self) -> GramConfig:
        return self._config

    def load_desired(self, path: str | Path) -> SettingsRecord:
        self._progress.phase_start("Load")
        try:
            record = self._loader.load(path)
        except Exception as exc:
            self._progress.phase_error("Load", exc)
            raise
        self._progress.phase_done("Load")
        return record

    async def fetch_actual(self, owner: str, repo: str) -> SettingsRecord:
        self._progress.phase_start("Fetch")
        try:
            provider = await self._resolve_provider()
            async with provider:
                record = await provider.fetch_settings(owner, repo)
        except Exception as exc:
            self._progress.phase_error("Fetch", exc)
            raise
        self._progress.phase_done("Fetch")
        return record

    def compare(self, desired: SettingsRecord, actual: SettingsRecord) -> DiffResult:
        self._progress.phase_start("Compare")
        result = compare(desired, actual, ignore_extras=self._config.ignore_extras)
        self._progress.phase_done("Compare")
        return result

    async def diff_settings(self, *, owner: str, repo: str, settings_path: str | Path) -> DiffResult:
        """Diff the settings declared in *settings_path* against ``owner/repo``."""
        desired = self.load_desired(settings_path)
        actual = await self.fetch_actual(owner, repo)
        result = self.compare(desired, actual)
        _LOG.debug("Settings diff for %s/%s: %d difference(s)", owner, repo, len(result))
        return result

    async def _resolve_provider(self) -> SettingsProvider:
        if self._provider is not None:
            return self._provider

        token_resolver = create_token_resolver(self._config)
        token = await token_resolver.resolve()
        try:
            return create_provider(
                self._config.provider,
                token=token,
                base_url=self._config.api_url,
                timeout=self._config.timeout,
                max_retries=self._config.max_retries,
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


async def diff_settings(
    config: GramConfig, *, owner: str, repo: str, settings_path: str | Path
) -> DiffResult:
    gram = await Gram.from_config(config)
    return await gram.diff_settings(owner=owner, repo=repo, settings_path=settings_path)
