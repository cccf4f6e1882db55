"""Field-level comparison of desired and actual settings records."""

from __future__ import annotations

import logging

from gram.contracts.diff import DiffResult, FieldDiff
from gram.contracts.settings import DESCRIPTION_KEY, SettingsRecord, SettingValue

_LOG = logging.getLogger(__name__)


def values_equal(desired: SettingValue, actual: SettingValue) -> bool:
    """Return True when two normalized values are the same setting value.

    No coercion happens here: ``True`` never equals ``1`` and ``"true"``
    never equals ``True``.
    """
    if desired is None or actual is None:
        return desired is None and actual is None
    # bool is a subclass of int, so kinds are matched exactly.
    if type(desired) is not type(actual):
        return False
    if isinstance(desired, bool):
        return desired is actual
    return desired == actual


def ordered_keys(desired: SettingsRecord, actual: SettingsRecord) -> list[str]:
    """Union of keys in first-seen order, desired before actual-only keys.

    ``description`` leads whenever either side defines it.
    """
    keys: dict[str, None] = {}
    if desired.description is not None or actual.description is not None:
        keys[DESCRIPTION_KEY] = None
    keys.update(dict.fromkeys(desired.settings))
    keys.update(dict.fromkeys(actual.settings))
    return list(keys)


def compare(desired: SettingsRecord, actual: SettingsRecord, *, ignore_extras: bool = False) -> DiffResult:
    """Compare two settings records and return every differing key.

    Keys present only in ``actual`` are drift unless ``ignore_extras`` is
    set, in which case only keys the desired record declares are examined.
    """
    diffs: list[FieldDiff] = []
    declared = set(desired.keys())
    for key in ordered_keys(desired, actual):
        if ignore_extras and key not in declared:
            continue
        desired_value = desired.get(key)
        actual_value = actual.get(key)
        if not values_equal(desired_value, actual_value):
            diffs.append(FieldDiff(key=key, desired=desired_value, actual=actual_value))

    _LOG.debug("Compared settings: %d difference(s)", len(diffs))
    return DiffResult(diffs=tuple(diffs))
