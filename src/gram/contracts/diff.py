"""Comparison result contracts."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict

from gram.contracts.settings import SettingValue


class FieldDiff(BaseModel):
    """One key where desired and actual settings disagree. ``None`` is absent."""

    key: str
    desired: SettingValue = None
    actual: SettingValue = None

    model_config = ConfigDict(frozen=True, strict=True)

    @property
    def missing_actual(self) -> bool:
        return self.desired is not None and self.actual is None

    @property
    def undeclared(self) -> bool:
        return self.desired is None and self.actual is not None


class DiffResult(BaseModel):
    diffs: tuple[FieldDiff, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def has_drift(self) -> bool:
        return bool(self.diffs)

    def keys(self) -> list[str]:
        return [diff.key for diff in self.diffs]

    def __iter__(self) -> Iterator[FieldDiff]:  # type: ignore[override]
        return iter(self.diffs)

    def __len__(self) -> int:
        return len(self.diffs)

    def __bool__(self) -> bool:
        return self.has_drift
