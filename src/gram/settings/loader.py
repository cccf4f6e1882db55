"""Desired settings loading from TOML documents."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gram.contracts.exceptions import IoError, ParseError
from gram.contracts.settings import DESCRIPTION_KEY, SettingsRecord, SettingValue

_LOG = logging.getLogger(__name__)

SETTINGS_TABLE = "settings"


class SettingsLoader:
    """Load a declarative settings document into a :class:`SettingsRecord`.

    The document has an optional top-level ``description`` string and an
    optional ``[settings]`` table. Nested tables under ``[settings]`` are
    flattened into dotted keys, keeping declaration order::

        description = "This is a test repository"

        [settings]
        merge.allow-squash = false
    """

    def load(self, path: str | Path) -> SettingsRecord:
        settings_path = Path(path).expanduser()
        return self.parse(self._read_text(settings_path), source=str(settings_path))

    def parse(self, text: str, *, source: str = "<string>") -> SettingsRecord:
        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ParseError(f"invalid TOML in settings file {source}: {exc}") from exc

        for key in document:
            if key not in {DESCRIPTION_KEY, SETTINGS_TABLE}:
                _LOG.warning("Ignoring unknown top-level key %r in %s", key, source)

        description = document.get(DESCRIPTION_KEY)
        if description is not None and not isinstance(description, str):
            raise ParseError(f"'{DESCRIPTION_KEY}' must be a string in settings file {source}")

        raw_settings = document.get(SETTINGS_TABLE, {})
        if not isinstance(raw_settings, dict):
            raise ParseError(f"'{SETTINGS_TABLE}' must be a table in settings file {source}")

        flattened: dict[str, SettingValue] = {}
        self._flatten(raw_settings, prefix="", into=flattened, source=source)
        _LOG.debug("Loaded %d desired setting(s) from %s", len(flattened), source)

        try:
            return SettingsRecord(description=description, settings=flattened)
        except ValidationError as exc:
            raise ParseError(f"invalid settings in {source}: {exc}") from exc

    def _flatten(self, table: dict[str, Any], *, prefix: str, into: dict[str, SettingValue], source: str) -> None:
        for name, value in table.items():
            key = f"{prefix}{name}"
            if isinstance(value, dict):
                self._flatten(value, prefix=f"{key}.", into=into, source=source)
                continue
            if key in into:
                raise ParseError(f"duplicate setting '{key}' in settings file {source}")
            into[key] = self._expect_leaf(value, key=key, source=source)

    @staticmethod
    def _expect_leaf(value: Any, *, key: str, source: str) -> SettingValue:
        if isinstance(value, bool | int | str):
            return value
        raise ParseError(
            f"setting '{key}' in {source} has unsupported type {type(value).__name__}; "
            "expected boolean, integer or string"
        )

    @staticmethod
    def _read_text(path: Path) -> str:
        if not path.exists():
            raise IoError(f"settings file not found: {path}")
        if not path.is_file():
            raise IoError(f"settings path is not a file: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise IoError(f"failed reading settings file: {path}") from exc
        except UnicodeDecodeError as exc:
            raise ParseError(f"settings file is not valid UTF-8: {path}") from exc


def load_desired(path: str | Path) -> SettingsRecord:
    return SettingsLoader().load(path)


def parse_desired(text: str, *, source: str = "<string>") -> SettingsRecord:
    return SettingsLoader().parse(text, source=source)
