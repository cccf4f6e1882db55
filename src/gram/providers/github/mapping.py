"""Translation of GitHub REST payloads into the dotted-key settings space."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from gram.contracts.exceptions import ProviderError
from gram.contracts.settings import DESCRIPTION_KEY, SettingsRecord, SettingValue

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingMapping:
    """Maps one REST field onto a dotted key with the value kind it must have."""

    field: str
    key: str
    kind: type[bool] | type[int] | type[str]

    def extract(self, payload: Mapping[str, Any]) -> SettingValue:
        value = payload.get(self.field)
        if value is None:
            return None
        # bool is an int subclass; an integer field must not accept JSON booleans.
        if type(value) is not self.kind:
            raise ProviderError(
                f"unexpected type for repository field '{self.field}': "
                f"expected {self.kind.__name__}, got {type(value).__name__}"
            )
        return value


REPOSITORY_SETTINGS: tuple[SettingMapping, ...] = (
    SettingMapping("description", DESCRIPTION_KEY, str),
    SettingMapping("homepage", "homepage", str),
    SettingMapping("visibility", "visibility", str),
    SettingMapping("archived", "archived", bool),
    SettingMapping("default_branch", "branches.default", str),
    SettingMapping("allow_squash_merge", "merge.allow-squash", bool),
    SettingMapping("allow_merge_commit", "merge.allow-merge-commit", bool),
    SettingMapping("allow_rebase_merge", "merge.allow-rebase", bool),
    SettingMapping("allow_auto_merge", "merge.allow-auto-merge", bool),
    SettingMapping("delete_branch_on_merge", "merge.delete-branch-on-merge", bool),
    SettingMapping("has_issues", "features.issues", bool),
    SettingMapping("has_projects", "features.projects", bool),
    SettingMapping("has_wiki", "features.wiki", bool),
)


def protected_branch_key(name: str) -> str:
    return f"branches.{name}.protected"


def map_repository(
    repository: Mapping[str, Any],
    protected_branches: Iterable[Mapping[str, Any]] = (),
    *,
    mappings: Iterable[SettingMapping] = REPOSITORY_SETTINGS,
) -> SettingsRecord:
    """Build a :class:`SettingsRecord` from a repository and its protected branches.

    Fields that are missing or null in the payload are left absent.
    """
    description: str | None = None
    settings: dict[str, SettingValue] = {}
    for mapping in mappings:
        value = mapping.extract(repository)
        if value is None:
            _LOG.debug("Repository field %s is absent", mapping.field)
            continue
        if mapping.key == DESCRIPTION_KEY:
            description = str(value)
        else:
            settings[mapping.key] = value

    for branch in protected_branches:
        name = branch.get("name")
        if not isinstance(name, str) or not name:
            raise ProviderError("protected branch entry is missing a name")
        settings[protected_branch_key(name)] = True

    return SettingsRecord(description=description, settings=settings)
