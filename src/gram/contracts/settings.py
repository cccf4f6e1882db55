"""Normalized settings record contracts."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

DESCRIPTION_KEY = "description"

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

SettingValue = bool | int | str | None
"""A normalized leaf value. ``None`` means the setting is absent."""


class SettingsRecord(BaseModel):
    """Desired or actual repository settings in the shared dotted-key space.

    ``settings`` keeps insertion order: declaration order for a record loaded
    from a document, reporting order for a record built by a provider. It is
    exposed as a read-only mapping, and integers must fit in 64 bits.
    """

    description: str | None = None
    settings: Mapping[str, SettingValue] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(frozen=True, strict=True)

    @field_validator("settings", mode="before")
    @classmethod
    def copy_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, dict):
            return dict(value)
        return value

    @field_validator("settings")
    @classmethod
    def validate_settings(cls, value: Mapping[str, SettingValue]) -> Mapping[str, SettingValue]:
        for key, item in value.items():
            if key == DESCRIPTION_KEY:
                raise ValueError(f"'{DESCRIPTION_KEY}' is reserved and cannot be used as a settings key")
            if not key or any(not part for part in key.split(".")):
                raise ValueError(f"invalid setting key: {key!r}")
            if type(item) is int and not INT_MIN <= item <= INT_MAX:
                raise ValueError(f"setting {key!r} is outside the 64-bit integer range")
        return MappingProxyType(dict(value))

    @field_serializer("settings")
    def dump_settings(self, value: Mapping[str, SettingValue]) -> dict[str, SettingValue]:
        return dict(value)

    def keys(self) -> Iterator[str]:
        """Yield comparable keys, ``description`` first when it is defined."""
        if self.description is not None:
            yield DESCRIPTION_KEY
        yield from self.settings

    def get(self, key: str) -> SettingValue:
        if key == DESCRIPTION_KEY:
            return self.description
        return self.settings.get(key)
